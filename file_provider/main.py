"""Cloudinary file provider CLI.

Commands:
    upload       - Upload a local file
    delete       - Delete a stored file (best effort)
    url          - Print the public URL of a stored file
    download     - Stream a stored file to disk
    init-config  - Write a default configuration file
    validate     - Check the provider options
"""

import asyncio
import mimetypes
from pathlib import Path

import structlog
import typer
import yaml

from file_provider.cloudinary_service import CloudinaryFileProviderService
from file_provider.config import get_default_config, get_settings, load_config
from file_provider.exceptions import ConfigurationError
from file_provider.logging_setup import setup_logging
from file_provider.models import DeleteFileRequest, GetFileRequest, UploadFileRequest

app = typer.Typer(
    name="cloudinary-files",
    help="Upload, fetch and delete files through the Cloudinary file provider",
    add_completion=False,
)

ConfigOption = typer.Option(
    None,
    "--config",
    "-c",
    help="Path to configuration file (defaults to CLOUDINARY_* environment variables)",
)


def _build_provider(config_path: Path | None) -> CloudinaryFileProviderService:
    """Load options, set up logging and create the provider."""
    if config_path is not None:
        config = load_config(config_path)
        setup_logging(config.logging.level, config.logging.format)
        options = config.cloudinary
    else:
        settings = get_settings()
        setup_logging(settings.log_level, settings.log_format)
        options = settings.to_options()

    return CloudinaryFileProviderService(options, logger=structlog.get_logger())


@app.command()
def upload(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="File to upload"),
    mime_type: str = typer.Option(
        None,
        "--mime-type",
        "-m",
        help="Mime type (guessed from the filename when omitted)",
    ),
    config_path: Path = ConfigOption,
) -> None:
    """Upload a local file and print its URL and key."""
    provider = _build_provider(config_path)
    mime = mime_type or mimetypes.guess_type(path.name)[0]

    async def run():
        async with provider:
            return await provider.upload(
                UploadFileRequest(
                    filename=path.name,
                    mime_type=mime,
                    content=path.read_bytes(),
                )
            )

    result = asyncio.run(run())
    typer.echo(f"url: {result.url}")
    typer.echo(f"key: {result.key}")


@app.command()
def delete(
    key: str = typer.Argument(..., help="Key returned by upload"),
    config_path: Path = ConfigOption,
) -> None:
    """Delete a stored file.

    Failures are logged as warnings; the command always succeeds.
    """
    provider = _build_provider(config_path)

    async def run():
        async with provider:
            await provider.delete(DeleteFileRequest(file_key=key))

    asyncio.run(run())
    typer.echo(f"Delete requested for {key}")


@app.command()
def url(
    key: str = typer.Argument(..., help="Key returned by upload"),
    config_path: Path = ConfigOption,
) -> None:
    """Print the public download URL of a stored file."""
    provider = _build_provider(config_path)
    typer.echo(asyncio.run(provider.get_presigned_download_url(GetFileRequest(file_key=key))))


@app.command()
def download(
    key: str = typer.Argument(..., help="Key returned by upload"),
    output: Path = typer.Option(..., "--output", "-o", help="Destination path"),
    config_path: Path = ConfigOption,
) -> None:
    """Stream a stored file to a local path."""
    provider = _build_provider(config_path)

    async def run() -> int:
        written = 0
        async with provider:
            stream = await provider.get_download_stream(GetFileRequest(file_key=key))
            with open(output, "wb") as f:
                async for chunk in stream:
                    f.write(chunk)
                    written += len(chunk)
        return written

    size = asyncio.run(run())
    typer.echo(f"Wrote {size} bytes to {output}")


@app.command()
def init_config(
    output_path: Path = typer.Option(
        Path("config.yaml"),
        "--output",
        "-o",
        help="Path to write configuration file",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Overwrite existing file",
    ),
) -> None:
    """Generate a default configuration file.

    Credentials are written as ${VAR} references to CLOUDINARY_*
    environment variables.
    """
    if output_path.exists() and not force:
        typer.echo(f"File already exists: {output_path}")
        typer.echo("Use --force to overwrite")
        raise typer.Exit(1)

    with open(output_path, "w", encoding="utf-8") as f:
        yaml.dump(get_default_config(), f, default_flow_style=False, sort_keys=False)

    typer.echo(f"Configuration written to: {output_path}")


@app.command()
def validate(config_path: Path = ConfigOption) -> None:
    """Check that the provider options are complete."""
    try:
        options = (
            load_config(config_path).cloudinary
            if config_path is not None
            else get_settings().to_options()
        )
        CloudinaryFileProviderService.validate_options(options)
    except FileNotFoundError as e:
        typer.echo(f"Configuration file not found: {e}")
        raise typer.Exit(1) from None
    except ConfigurationError as e:
        typer.echo(f"Configuration error: {e}")
        raise typer.Exit(1) from None

    typer.echo("Configuration is valid")
    typer.echo(f"  Cloud name: {options.cloud_name}")
    typer.echo(f"  Folder: {options.folder_name or '-'}")


if __name__ == "__main__":
    app()
