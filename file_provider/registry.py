"""File provider registry."""

from functools import lru_cache
from typing import Any

from file_provider.base import FileProviderService
from file_provider.cloudinary_service import CloudinaryFileProviderService
from file_provider.config import get_settings

PROVIDERS: dict[str, type[FileProviderService]] = {
    CloudinaryFileProviderService.identifier: CloudinaryFileProviderService,
}


def get_provider(identifier: str, options: Any, logger: Any = None) -> FileProviderService:
    """Create a provider by identifier.

    Options are validated before the provider is constructed.

    Args:
        identifier: Provider identifier (e.g. "cloudinary")
        options: Provider options
        logger: Optional logger passed to the provider

    Returns:
        Configured provider instance

    Raises:
        ValueError: If the identifier is unknown
        ConfigurationError: If the options are invalid
    """
    provider_cls = PROVIDERS.get(identifier)
    if provider_cls is None:
        raise ValueError(
            f"Unknown file provider: {identifier}. "
            f"Supported providers: {', '.join(sorted(PROVIDERS))}"
        )

    provider_cls.validate_options(options)
    return provider_cls(options, logger=logger)


@lru_cache
def get_default_provider() -> FileProviderService:
    """Get the Cloudinary provider configured from environment settings."""
    return get_provider(
        CloudinaryFileProviderService.identifier,
        get_settings().to_options(),
    )
