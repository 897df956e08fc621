"""Pydantic models for file provider requests, results and options."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ProviderModel(BaseModel):
    """Base model accepting both snake_case names and camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class UploadFileRequest(ProviderModel):
    """File handed to a provider for upload."""

    filename: str
    mime_type: str | None = None
    content: Any  # bytes, base64 str, or anything bytes() accepts


class FileResult(ProviderModel):
    """Result of a successful upload."""

    url: str
    key: str


class DeleteFileRequest(ProviderModel):
    """Reference to a previously uploaded file to delete."""

    file_key: str


class GetFileRequest(ProviderModel):
    """Reference to a previously uploaded file to fetch."""

    file_key: str


class CloudinaryOptions(ProviderModel):
    """Cloudinary provider options.

    Credentials default to empty strings so that missing values are
    reported by ``validate_options`` rather than by pydantic.
    """

    api_key: str = ""
    api_secret: str = ""
    cloud_name: str = ""
    secure: bool = True
    folder_name: str | None = None


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    format: str = "json"


class ProviderConfig(BaseModel):
    """Full configuration loaded from a YAML file."""

    cloudinary: CloudinaryOptions = Field(default_factory=CloudinaryOptions)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
