"""Exceptions raised by file providers."""


class FileProviderError(Exception):
    """Base class for file provider errors."""


class ConfigurationError(FileProviderError):
    """Provider options are missing or invalid."""


class UploadError(FileProviderError):
    """Upload to the remote service failed."""
