"""Derive a content type from a file path's extension."""

from __future__ import annotations

DEFAULT_MIME_TYPE = "text/plain"

_MIME_TYPES: dict[str, str] = {
    "html": "text/html",
    "css": "text/css",
    "js": "text/javascript",
    "json": "application/json",
    "png": "image/png",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "ico": "image/x-icon",
    "wasm": "application/wasm",
}


def path_mime_type(path: str) -> str:
    """Return the MIME type for whatever follows the last dot in ``path``."""
    _, dot, extension = path.rpartition(".")
    if not dot:
        return DEFAULT_MIME_TYPE
    return _MIME_TYPES.get(extension, DEFAULT_MIME_TYPE)