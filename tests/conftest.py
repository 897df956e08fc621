"""Pytest fixtures for testing."""

from unittest.mock import MagicMock

import httpx
import pytest

from file_provider.client import CloudinaryClient
from file_provider.cloudinary_service import CloudinaryFileProviderService
from file_provider.models import CloudinaryOptions

DELIVERY_BASE = "https://res.cloudinary.com/demo/image/upload"


@pytest.fixture
def options() -> CloudinaryOptions:
    """Provider options without a folder."""
    return CloudinaryOptions(api_key="key", api_secret="secret", cloud_name="demo")


@pytest.fixture
def folder_options() -> CloudinaryOptions:
    """Provider options with an "uploads" folder."""
    return CloudinaryOptions(
        api_key="key",
        api_secret="secret",
        cloud_name="demo",
        folder_name="uploads",
    )


@pytest.fixture
def mock_client() -> MagicMock:
    """Cloudinary client handle with a pure url() and stubbed API calls."""
    client = MagicMock(spec=CloudinaryClient)
    client.url.side_effect = lambda public_id: f"{DELIVERY_BASE}/{public_id}"
    client.destroy.return_value = {"result": "ok"}
    return client


@pytest.fixture
def mock_logger() -> MagicMock:
    """Logger sink recording info/warning/error calls."""
    return MagicMock()


@pytest.fixture
def http_requests() -> list[httpx.Request]:
    """Requests seen by the mock HTTP transport."""
    return []


@pytest.fixture
def http_client(http_requests: list[httpx.Request]) -> httpx.AsyncClient:
    """HTTP client serving b"file-bytes" for every URL except */missing*."""

    def handler(request: httpx.Request) -> httpx.Response:
        http_requests.append(request)
        if "missing" in request.url.path:
            return httpx.Response(404, content=b"not found")
        return httpx.Response(200, content=b"file-bytes")

    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.fixture
def provider(
    options: CloudinaryOptions,
    mock_logger: MagicMock,
    mock_client: MagicMock,
    http_client: httpx.AsyncClient,
) -> CloudinaryFileProviderService:
    """Provider without a folder, wired to mocks."""
    return CloudinaryFileProviderService(
        options,
        logger=mock_logger,
        client=mock_client,
        http_client=http_client,
    )


@pytest.fixture
def folder_provider(
    folder_options: CloudinaryOptions,
    mock_logger: MagicMock,
    mock_client: MagicMock,
    http_client: httpx.AsyncClient,
) -> CloudinaryFileProviderService:
    """Provider with an "uploads" folder, wired to mocks."""
    return CloudinaryFileProviderService(
        folder_options,
        logger=mock_logger,
        client=mock_client,
        http_client=http_client,
    )
