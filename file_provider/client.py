"""Cloudinary SDK handle with per-instance credentials."""

from typing import Any, BinaryIO

import cloudinary.uploader
import cloudinary.utils

from file_provider.models import CloudinaryOptions


class CloudinaryClient:
    """Owned handle for Cloudinary API calls.

    The SDK reads credentials from a process-wide ``cloudinary.config()``
    unless they are passed with every call. This handle keeps its own
    credentials and passes them explicitly, so several providers with
    different accounts can live in one process.
    """

    def __init__(
        self,
        cloud_name: str,
        api_key: str,
        api_secret: str,
        secure: bool = True,
    ) -> None:
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self.secure = secure

    @classmethod
    def from_options(cls, options: CloudinaryOptions) -> "CloudinaryClient":
        """Create a client from provider options."""
        return cls(
            cloud_name=options.cloud_name,
            api_key=options.api_key,
            api_secret=options.api_secret,
            secure=options.secure,
        )

    def _credentials(self) -> dict[str, Any]:
        return {
            "cloud_name": self.cloud_name,
            "api_key": self.api_key,
            "api_secret": self.api_secret,
            "secure": self.secure,
        }

    def upload(
        self,
        stream: BinaryIO,
        *,
        resource_type: str,
        public_id: str,
        folder: str | None = None,
    ) -> dict[str, Any] | None:
        """Upload a binary stream.

        Blocking; callers on an event loop run it in a worker thread.

        Args:
            stream: Binary stream with the file contents
            resource_type: "image" or "raw"
            public_id: Identifier to store the file under
            folder: Remote folder, omitted when not set

        Returns:
            Upload response with ``secure_url`` and ``public_id``

        Raises:
            cloudinary.exceptions.Error: If Cloudinary rejects the upload
        """
        params: dict[str, Any] = {
            "resource_type": resource_type,
            "public_id": public_id,
        }
        if folder:
            params["folder"] = folder
        return cloudinary.uploader.upload(stream, **params, **self._credentials())

    def destroy(self, public_id: str) -> dict[str, Any]:
        """Delete an uploaded resource by public id. Blocking."""
        return cloudinary.uploader.destroy(public_id, **self._credentials())

    def url(self, public_id: str) -> str:
        """Build the secure delivery URL for a public id.

        Built client-side by the SDK, no request is made.
        """
        url, _ = cloudinary.utils.cloudinary_url(
            public_id,
            cloud_name=self.cloud_name,
            secure=True,
        )
        return url
