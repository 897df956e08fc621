"""Structured logging setup."""

import logging
import sys

import structlog

PROVIDER_NAME = "cloudinary"


def add_provider(logger, method_name: str, event_dict: dict) -> dict:
    """Tag every event with the provider it came from."""
    event_dict.setdefault("provider", PROVIDER_NAME)
    return event_dict


def setup_logging(level: str = "INFO", log_format: str = "json") -> None:
    """Configure structured logging for the CLI and host processes.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        log_format: Output format ("json" or "console")
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.INFO),
        force=True,
    )

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        add_provider,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]

    if log_format == "json":
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )
