"""File provider interface."""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from typing import Any, ClassVar

from file_provider.models import (
    DeleteFileRequest,
    FileResult,
    GetFileRequest,
    UploadFileRequest,
)


class FileProviderService(ABC):
    """Abstract file provider interface.

    This interface defines the contract the host file-storage framework
    expects from every provider. A provider is selected by its
    ``identifier`` and its options are checked with ``validate_options``
    before an instance is created.
    """

    identifier: ClassVar[str]

    @classmethod
    def validate_options(cls, options: Any) -> None:
        """Validate provider options before construction.

        Args:
            options: Provider options (model or mapping)

        Raises:
            ConfigurationError: If required options are missing
        """

    @abstractmethod
    async def upload(self, file: UploadFileRequest) -> FileResult:
        """Upload a file and return its URL and key.

        Args:
            file: File name, mime type and content

        Returns:
            Public URL and the key used for later delete/fetch

        Raises:
            UploadError: If the upload fails
        """

    @abstractmethod
    async def delete(self, file: DeleteFileRequest) -> None:
        """Delete a previously uploaded file.

        Args:
            file: Key returned by upload
        """

    @abstractmethod
    async def get_as_buffer(self, file: GetFileRequest) -> bytes:
        """Download file contents.

        Args:
            file: Key returned by upload

        Returns:
            File contents as bytes
        """

    @abstractmethod
    async def get_download_stream(self, file: GetFileRequest) -> AsyncIterator[bytes]:
        """Open a single-pass stream over file contents.

        Args:
            file: Key returned by upload

        Returns:
            Async iterator of body chunks
        """

    @abstractmethod
    async def get_presigned_download_url(self, file: GetFileRequest) -> str:
        """Get a download URL for the file.

        Args:
            file: Key returned by upload

        Returns:
            URL clients can download the file from
        """
