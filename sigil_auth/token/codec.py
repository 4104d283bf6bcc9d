"""Segment encoding for compact access tokens."""

from __future__ import annotations

import base64
import json
import re
from typing import Any

from ..utils.hashing import b64url_encode

_B64URL_RE = re.compile(r"[A-Za-z0-9_-]*")


def b64url_decode(text: str) -> bytes:
    """Decode unpadded base64url text, raising ``ValueError`` when malformed."""
    if not _B64URL_RE.fullmatch(text) or len(text) % 4 == 1:
        raise ValueError("invalid base64url segment")
    return base64.urlsafe_b64decode(text + "=" * (-len(text) % 4))


def encode_segment(value: Any) -> str:
    """Serialize a JSON value to compact UTF-8 and base64url encode it."""
    raw = json.dumps(value, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
    return b64url_encode(raw)


def decode_segment(segment: str) -> Any:
    # JSONDecodeError and UnicodeDecodeError are both ValueError subclasses.
    return json.loads(b64url_decode(segment).decode("utf-8"))
