"""Tests for the CloudinaryClient handle."""

import io
from unittest.mock import patch

from file_provider.client import CloudinaryClient
from file_provider.models import CloudinaryOptions


def make_client() -> CloudinaryClient:
    return CloudinaryClient(cloud_name="demo", api_key="key", api_secret="secret")


class TestCloudinaryClient:
    """Test suite for CloudinaryClient."""

    def test_from_options(self) -> None:
        client = CloudinaryClient.from_options(
            CloudinaryOptions(
                api_key="key", api_secret="secret", cloud_name="demo", secure=False
            )
        )

        assert client.cloud_name == "demo"
        assert client.api_key == "key"
        assert client.api_secret == "secret"
        assert client.secure is False

    @patch("file_provider.client.cloudinary.uploader.upload")
    def test_upload_passes_credentials(self, mock_upload) -> None:
        """Test credentials travel with the call instead of global config."""
        mock_upload.return_value = {"secure_url": "https://x", "public_id": "uploads/id"}
        stream = io.BytesIO(b"data")

        result = make_client().upload(
            stream, resource_type="image", public_id="id", folder="uploads"
        )

        assert result["public_id"] == "uploads/id"
        mock_upload.assert_called_once_with(
            stream,
            resource_type="image",
            public_id="id",
            folder="uploads",
            cloud_name="demo",
            api_key="key",
            api_secret="secret",
            secure=True,
        )

    @patch("file_provider.client.cloudinary.uploader.upload")
    def test_upload_omits_empty_folder(self, mock_upload) -> None:
        make_client().upload(io.BytesIO(b"data"), resource_type="raw", public_id="id")

        assert "folder" not in mock_upload.call_args.kwargs

    @patch("file_provider.client.cloudinary.uploader.destroy")
    def test_destroy_passes_credentials(self, mock_destroy) -> None:
        mock_destroy.return_value = {"result": "ok"}

        assert make_client().destroy("uploads/id") == {"result": "ok"}
        mock_destroy.assert_called_once_with(
            "uploads/id",
            cloud_name="demo",
            api_key="key",
            api_secret="secret",
            secure=True,
        )

    def test_url_is_built_locally(self) -> None:
        """Test URL construction uses the SDK without a request."""
        url = make_client().url("abc123_photo.png")

        assert url.startswith("https://res.cloudinary.com/demo/")
        assert url.endswith("/abc123_photo.png")

    def test_url_is_secure_even_when_client_is_not(self) -> None:
        client = CloudinaryClient(
            cloud_name="demo", api_key="key", api_secret="secret", secure=False
        )

        assert client.url("abc.png").startswith("https://")
