"""Configuration loading for the Cloudinary file provider."""

import os
import re
from functools import lru_cache
from pathlib import Path

import yaml
from pydantic_settings import BaseSettings, SettingsConfigDict

from file_provider.models import CloudinaryOptions, ProviderConfig

_ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")


class ProviderSettings(BaseSettings):
    """Provider settings loaded from environment (CLOUDINARY_* variables)."""

    model_config = SettingsConfigDict(
        env_prefix="CLOUDINARY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_key: str = ""
    api_secret: str = ""
    cloud_name: str = ""
    secure: bool = True
    folder_name: str | None = None

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"

    def to_options(self) -> CloudinaryOptions:
        """Get the provider options part of the settings."""
        return CloudinaryOptions(
            api_key=self.api_key,
            api_secret=self.api_secret,
            cloud_name=self.cloud_name,
            secure=self.secure,
            folder_name=self.folder_name,
        )


@lru_cache
def get_settings() -> ProviderSettings:
    """Get cached settings instance."""
    return ProviderSettings()


def load_config(config_path: str | Path = "config.yaml") -> ProviderConfig:
    """Load configuration from YAML file with environment variable substitution.

    Args:
        config_path: Path to the configuration YAML file

    Returns:
        Validated ProviderConfig object

    Raises:
        FileNotFoundError: If config file doesn't exist
        pydantic.ValidationError: If config is invalid
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(path, encoding="utf-8") as f:
        raw_config = yaml.safe_load(f) or {}

    return ProviderConfig(**_expand_env_vars(raw_config))


def _expand_env_vars(data):
    """Recursively substitute ${VAR_NAME} in string values.

    Unset variables are left in place.
    """
    if isinstance(data, dict):
        return {k: _expand_env_vars(v) for k, v in data.items()}
    if isinstance(data, list):
        return [_expand_env_vars(item) for item in data]
    if isinstance(data, str):
        return _ENV_VAR_PATTERN.sub(
            lambda m: os.environ.get(m.group(1)) or m.group(0), data
        )
    return data


def get_default_config() -> dict:
    """Return default configuration as a dictionary.

    This can be used to generate a config.yaml file.
    """
    return {
        "cloudinary": {
            "cloud_name": "${CLOUDINARY_CLOUD_NAME}",
            "api_key": "${CLOUDINARY_API_KEY}",
            "api_secret": "${CLOUDINARY_API_SECRET}",
            "secure": True,
            "folder_name": None,
        },
        "logging": {
            "level": "INFO",
            "format": "json",
        },
    }
