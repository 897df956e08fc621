"""Cloudinary file provider."""

import asyncio
import io
from collections.abc import AsyncIterator, Mapping
from typing import Any

import httpx
import structlog
from pydantic import ValidationError

from file_provider.base import FileProviderService
from file_provider.client import CloudinaryClient
from file_provider.exceptions import ConfigurationError, UploadError
from file_provider.models import (
    CloudinaryOptions,
    DeleteFileRequest,
    FileResult,
    GetFileRequest,
    UploadFileRequest,
)
from file_provider.utils import (
    folder_prefix,
    generate_public_id,
    normalize_content,
    resource_type_for,
    strip_extension,
    strip_folder,
)


class CloudinaryFileProviderService(FileProviderService):
    """File provider backed by Cloudinary.

    Uploads go through the Cloudinary upload API; downloads are plain HTTP
    GETs against the public delivery URL of the stored resource. The
    provider keeps no state besides its options, its client handle and a
    lazily created HTTP client.
    """

    identifier = "cloudinary"

    def __init__(
        self,
        options: CloudinaryOptions | Mapping[str, Any],
        logger: Any = None,
        client: CloudinaryClient | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the provider.

        Args:
            options: Provider options (model or mapping)
            logger: Logger with info/warning/error methods, defaults to
                a structlog logger
            client: Cloudinary client handle, built from options if omitted
            http_client: HTTP client for downloads, created lazily if omitted

        Raises:
            ConfigurationError: If required options are missing
        """
        self.validate_options(options)
        self.options = _coerce_options(options)
        self.logger = logger or structlog.get_logger()
        self.client = client or CloudinaryClient.from_options(self.options)
        self._http_client = http_client
        self._owns_http_client = http_client is None

    @classmethod
    def validate_options(cls, options: Any) -> None:
        """Check that api key, api secret and cloud name are set.

        Raises:
            ConfigurationError: If any of them is missing or empty
        """
        parsed = _coerce_options(options)
        if not parsed.api_key or not parsed.api_secret or not parsed.cloud_name:
            raise ConfigurationError(
                "API key, API secret or Cloud Name is required "
                "in the Cloudinary provider's options."
            )

    async def _get_http_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._http_client is None or self._http_client.is_closed:
            self._http_client = httpx.AsyncClient(timeout=None, follow_redirects=True)
            self._owns_http_client = True
        return self._http_client

    async def close(self) -> None:
        """Close the HTTP client if this provider created it."""
        if self._http_client is not None and self._owns_http_client:
            await self._http_client.aclose()
            self._http_client = None

    async def __aenter__(self) -> "CloudinaryFileProviderService":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def upload(self, file: UploadFileRequest) -> FileResult:
        """Upload a file to Cloudinary.

        Args:
            file: File name, mime type and content (bytes or base64 string)

        Returns:
            Secure URL and the folder-independent key

        Raises:
            UploadError: If the upload fails or Cloudinary returns nothing
        """
        public_id = generate_public_id(file.filename)
        resource_type = resource_type_for(file.mime_type)

        self.logger.info(
            "Uploading file",
            filename=file.filename,
            mime_type=file.mime_type,
            resource_type=resource_type,
        )

        try:
            buffer = normalize_content(file.content)
            result = await asyncio.to_thread(
                self.client.upload,
                io.BytesIO(buffer),
                resource_type=resource_type,
                public_id=public_id,
                folder=self.options.folder_name or None,
            )
        except Exception as e:
            self.logger.error(
                "Cloudinary upload error",
                filename=file.filename,
                public_id=public_id,
                error=str(e),
            )
            raise UploadError(f"Cloudinary upload failed: {e}") from e

        if not result:
            raise UploadError("No result returned from Cloudinary upload.")

        secure_url = result.get("secure_url")
        remote_id = result.get("public_id")
        if not secure_url or not remote_id:
            self.logger.error(
                "Cloudinary upload returned an incomplete result",
                filename=file.filename,
                public_id=public_id,
                result=result,
            )
            raise UploadError("Cloudinary upload result is missing secure_url or public_id.")

        self.logger.info("Successfully uploaded to Cloudinary", url=secure_url)

        return FileResult(
            url=secure_url,
            key=strip_folder(remote_id, self.options.folder_name),
        )

    async def delete(self, file: DeleteFileRequest) -> None:
        """Delete a file from Cloudinary.

        Best effort: failures are logged as warnings and never raised, so a
        missing file and a failed delete look the same to the caller.

        Args:
            file: Key returned by upload
        """
        public_id = folder_prefix(self.options.folder_name) + strip_extension(
            file.file_key
        )

        try:
            result = await asyncio.to_thread(self.client.destroy, public_id)
        except Exception as e:
            self.logger.warning(
                "Cloudinary delete failed", public_id=public_id, error=str(e)
            )
            return

        self.logger.debug("Cloudinary delete finished", public_id=public_id, result=result)

    async def get_as_buffer(self, file: GetFileRequest) -> bytes:
        """Download a file from its public URL.

        Raises:
            httpx.HTTPStatusError: If the response status is not 2xx
            httpx.TransportError: If the request fails
        """
        url = self.client.url(file.file_key)
        http = await self._get_http_client()
        response = await http.get(url)
        response.raise_for_status()
        return response.content

    async def get_download_stream(self, file: GetFileRequest) -> AsyncIterator[bytes]:
        """Open a stream over a file's contents.

        The request is sent and its status checked before returning; the
        body is read lazily as the iterator is consumed and the response is
        closed once it is exhausted or closed.

        Raises:
            httpx.HTTPStatusError: If the response status is not 2xx
            httpx.TransportError: If the request fails
        """
        url = self.client.url(file.file_key)
        http = await self._get_http_client()
        response = await http.send(http.build_request("GET", url), stream=True)
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError:
            await response.aclose()
            raise
        return _iter_response(response)

    async def get_presigned_download_url(self, file: GetFileRequest) -> str:
        """Return the public delivery URL for a file.

        This is Cloudinary's permanent secure URL, not a signed or expiring
        one.
        """
        return self.client.url(file.file_key)


async def _iter_response(response: httpx.Response) -> AsyncIterator[bytes]:
    try:
        async for chunk in response.aiter_bytes():
            yield chunk
    finally:
        await response.aclose()


def _coerce_options(options: Any) -> CloudinaryOptions:
    if isinstance(options, CloudinaryOptions):
        return options
    if options is None:
        return CloudinaryOptions()
    try:
        return CloudinaryOptions.model_validate(dict(options))
    except ValidationError as e:
        raise ConfigurationError(f"Invalid Cloudinary provider options: {e}") from e
