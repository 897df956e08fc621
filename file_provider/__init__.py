"""File provider plugin backed by Cloudinary."""

from file_provider.base import FileProviderService
from file_provider.client import CloudinaryClient
from file_provider.cloudinary_service import CloudinaryFileProviderService
from file_provider.exceptions import (
    ConfigurationError,
    FileProviderError,
    UploadError,
)
from file_provider.models import (
    CloudinaryOptions,
    DeleteFileRequest,
    FileResult,
    GetFileRequest,
    UploadFileRequest,
)
from file_provider.registry import PROVIDERS, get_provider

__all__ = [
    # Providers
    "CloudinaryClient",
    "CloudinaryFileProviderService",
    "FileProviderService",
    "PROVIDERS",
    "get_provider",
    # Models
    "CloudinaryOptions",
    "DeleteFileRequest",
    "FileResult",
    "GetFileRequest",
    "UploadFileRequest",
    # Errors
    "ConfigurationError",
    "FileProviderError",
    "UploadError",
]
