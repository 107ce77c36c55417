"""Encode the set of expanded directory keys into a URL-safe state string."""

from __future__ import annotations

import base64
import binascii
from typing import Iterable

_SEPARATOR = "|"


def encode_expanded_keys(keys: Iterable[str]) -> str:
    """Join the keys in sorted order and base64-encode them."""
    joined = _SEPARATOR.join(sorted(keys))
    return base64.b64encode(joined.encode("utf-8")).decode("ascii")


def decode_expanded_keys(state_string: str) -> set[str]:
    """Decode a state string; anything malformed decodes as an empty text."""
    try:
        raw = base64.b64decode(state_string.encode("ascii"), validate=True)
        text = raw.decode("utf-8")
    except (binascii.Error, UnicodeError, ValueError):
        text = ""
    return set(text.split(_SEPARATOR))