"""Render the bucket explorer pages as HTML."""

from __future__ import annotations

import logging
from datetime import timezone
from enum import Enum
from html import escape
from pathlib import PurePosixPath
from typing import AbstractSet, Optional
from urllib.parse import quote

from bucketbrowse.bucket import Bucket, Entry, File, list_directory_contents
from bucketbrowse.emoji import file_emoji
from bucketbrowse.state import decode_expanded_keys, encode_expanded_keys

log = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_DECIMAL_UNITS = ("B", "kB", "MB", "GB", "TB", "PB", "EB", "ZB", "YB")


class DirectoryState(Enum):
    """Loading state of a directory row."""

    UNEXPANDED = "unexpanded"
    LOADING = "loading"
    LOADED = "loaded"
    ERROR = "error"

    def to_emoji(self) -> str:
        """Return the icon shown in front of the directory name."""
        return _STATE_EMOJI[self]


_STATE_EMOJI = {
    DirectoryState.UNEXPANDED: "\U0001f4c1",
    DirectoryState.LOADING: "\u23f3",
    DirectoryState.LOADED: "\U0001f4c2",
    DirectoryState.ERROR: "\u274c",
}


def format_size(size: int) -> str:
    """Format a byte count with decimal units and up to two decimal places."""
    if size < 0:
        raise ValueError(f"size must not be negative: {size}")
    value = float(size)
    unit = 0
    while value >= 1000 and unit < len(_DECIMAL_UNITS) - 1:
        value /= 1000
        unit += 1
    if unit == 0:
        return f"{size} B"
    number = f"{value:.0f}" if value.is_integer() else f"{value:.2f}"
    return f"{number} {_DECIMAL_UNITS[unit]}"


def relative_name(key: str) -> str:
    """Return the last path component of ``key``, ignoring trailing slashes."""
    _, separator, name = key.rstrip("/").rpartition("/")
    if not separator:
        raise ValueError(f"key {key!r} has no parent directory")
    return name


def _state_href(keys: AbstractSet[str]) -> str:
    state_string = encode_expanded_keys(keys)
    return f"?state={quote(state_string, safe='')}" if state_string else "?"


def render_entry(
    entry: Entry, depth: int, expanded_keys: AbstractSet[str], bucket: Bucket
) -> str:
    """Render one listing row, followed by its contents if it is an expanded directory."""
    name = escape(relative_name(entry.key))
    if isinstance(entry.type, File):
        extension = PurePosixPath(entry.key).suffix[1:]
        uploaded = entry.type.uploaded.astimezone(timezone.utc).strftime(DATE_FORMAT)
        return (
            "<tr>"
            f'<td data-depth="{depth}">{file_emoji(extension)} '
            f'<a href="/{escape(quote(entry.key))}" download>{name}</a></td>'
            f"<td>{format_size(entry.type.size)}</td>"
            f"<td>{uploaded}</td>"
            "</tr>"
        )

    state = DirectoryState.UNEXPANDED
    children = ""
    if entry.key in expanded_keys:
        children, state = render_directory(bucket, entry.key, depth + 1, expanded_keys)
    toggled = set(expanded_keys) ^ {entry.key}
    row = (
        "<tr>"
        f'<td colspan="3" data-depth="{depth}">{state.to_emoji()} '
        f'<a href="{escape(_state_href(toggled))}">{name}</a></td>'
        "</tr>"
    )
    return row + children


def render_directory(
    bucket: Bucket, path: str, depth: int, expanded_keys: AbstractSet[str]
) -> tuple[str, DirectoryState]:
    """Render the rows under ``path``; return the markup and the resulting state."""
    try:
        entries = list_directory_contents(bucket, path.lstrip("/"))
    except Exception:  # any bucket failure shows as an error icon
        log.exception("Listing %s failed", path)
        return "", DirectoryState.ERROR
    rows = "".join(render_entry(entry, depth, expanded_keys, bucket) for entry in entries)
    return rows, DirectoryState.LOADED


def render_root(bucket: Bucket, path: str, expanded_keys: AbstractSet[str]) -> str:
    """Render the listing table for ``path``, with a link to the parent if it has one."""
    parent, separator, _ = path.strip("/").rpartition("/")
    parent_row = ""
    if separator:
        parent_row = (
            '<tr><td colspan="3">\U0001f4c1 '
            f'<a href="/{escape(quote(parent))}/">../</a></td></tr>'
        )
    rows, _state = render_directory(bucket, path, 0, expanded_keys)
    return (
        "<table>"
        "<thead><tr><th>Name</th><th>Size</th><th>Uploaded</th></tr></thead>"
        f"<tbody>{parent_row}</tbody>"
        f"{rows}"
        "</table>"
    )


def render_page(bucket: Bucket, path: str, state_string: Optional[str] = None) -> str:
    """Render the full HTML page for ``path`` with the directories in ``state_string`` open."""
    expanded_keys = decode_expanded_keys(state_string) if state_string is not None else set()
    return (
        "<!DOCTYPE html>"
        '<html lang="en">'
        "<head>"
        '<meta charset="utf-8" />'
        '<meta name="viewport" content="width=device-width, initial-scale=1"/>'
        '<link rel="stylesheet" href="/styles.css" />'
        "</head>"
        "<body>"
        f"<header><h1>{escape(path)}</h1></header>"
        f"<main>{render_root(bucket, path, expanded_keys)}</main>"
        "</body>"
        "</html>"
    )