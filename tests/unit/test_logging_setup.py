"""Tests for structured logging setup."""

import json
import logging

import pytest
import structlog

from file_provider.logging_setup import add_provider, setup_logging


@pytest.fixture(autouse=True)
def reset_structlog():
    """Restore structlog defaults after each test."""
    yield
    structlog.reset_defaults()


def test_add_provider_keeps_explicit_value() -> None:
    assert add_provider(None, "info", {"event": "x"})["provider"] == "cloudinary"
    assert add_provider(None, "info", {"provider": "other"})["provider"] == "other"


def test_json_output(capsys: pytest.CaptureFixture[str]) -> None:
    setup_logging("INFO", "json")

    structlog.get_logger("file_provider").info("Uploading file", filename="a.png")

    line = capsys.readouterr().err.strip().splitlines()[-1]
    event = json.loads(line)
    assert event["event"] == "Uploading file"
    assert event["filename"] == "a.png"
    assert event["provider"] == "cloudinary"
    assert event["level"] == "info"
    assert "timestamp" in event


def test_level_filtering(capsys: pytest.CaptureFixture[str]) -> None:
    setup_logging("WARNING", "console")

    logger = structlog.get_logger("file_provider")
    logger.info("hidden")
    logger.warning("Cloudinary delete failed", public_id="abc")

    err = capsys.readouterr().err
    assert "hidden" not in err
    assert "Cloudinary delete failed" in err
    assert logging.getLogger().level == logging.WARNING
