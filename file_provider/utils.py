"""Helpers for building Cloudinary identifiers and upload payloads."""

import base64
import re
import uuid
from typing import Any

_EXTENSION_RE = re.compile(r"\.[^/.]+$")
_UNSAFE_CHARS_RE = re.compile(r"[^a-zA-Z0-9.\-_]")
_UNDERSCORE_RUN_RE = re.compile(r"_+")
_NON_BASE64_RE = re.compile(r"[^A-Za-z0-9+/]")
_URLSAFE_TO_STANDARD = str.maketrans("-_", "+/")


def strip_extension(name: str) -> str:
    """Remove a trailing file extension ("photo.png" -> "photo")."""
    return _EXTENSION_RE.sub("", name)


def clean_filename(filename: str) -> str:
    """Sanitize a filename for use in a public id.

    The extension is dropped, characters outside ``[a-zA-Z0-9.-_]`` become
    underscores, underscore runs collapse to one, leading and trailing
    underscores are trimmed and the result is lower-cased.

    Args:
        filename: Original filename

    Returns:
        Sanitized name, e.g. "My File!!.png" -> "my_file"
    """
    name = _UNSAFE_CHARS_RE.sub("_", strip_extension(filename))
    name = _UNDERSCORE_RUN_RE.sub("_", name)
    return name.strip("_").lower()


def generate_public_id(filename: str) -> str:
    """Build a unique public id from a random token and the cleaned filename."""
    return f"{uuid.uuid4()}_{clean_filename(filename)}"


def resource_type_for(mime_type: str | None) -> str:
    """Classify an upload as "image" or "raw" by mime type."""
    if mime_type and mime_type.startswith("image/"):
        return "image"
    return "raw"


def _decode_base64(text: str) -> bytes:
    """Decode standard or URL-safe base64, padded or not.

    Decoding stops at the first "=", characters outside the alphabet are
    skipped and a dangling final character is dropped.
    """
    text = text.split("=", 1)[0].translate(_URLSAFE_TO_STANDARD)
    text = _NON_BASE64_RE.sub("", text)
    if len(text) % 4 == 1:
        text = text[:-1]
    return base64.b64decode(text + "=" * (-len(text) % 4), validate=True)


def normalize_content(content: Any) -> bytes:
    """Turn upload content into a single byte buffer.

    Strings are treated as base64, bytes pass through unchanged, anything
    else goes through ``bytes()``. Integers are rejected since ``bytes(n)``
    would build a zero-filled buffer.

    Raises:
        TypeError: If the value cannot be converted to bytes
    """
    if isinstance(content, str):
        return _decode_base64(content)
    if isinstance(content, bytes):
        return content
    if isinstance(content, int):
        raise TypeError(f"Cannot convert {type(content).__name__} to upload content")
    return bytes(content)


def folder_prefix(folder_name: str | None) -> str:
    """Return "<folder>/" or an empty string when no folder is set."""
    return f"{folder_name}/" if folder_name else ""


def strip_folder(public_id: str, folder_name: str | None) -> str:
    """Remove the "<folder>/" prefix from a remote public id."""
    return public_id.removeprefix(folder_prefix(folder_name))
