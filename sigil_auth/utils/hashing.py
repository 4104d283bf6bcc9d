"""Digest and comparison helpers."""

from __future__ import annotations

import base64
import hmac
from hashlib import sha512


def b64url_encode(raw: bytes) -> str:
    """Return unpadded URL-safe base64 text for raw bytes."""
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def hmac_sha512_b64url(key: bytes | bytearray, message: str) -> str:
    """Return base64url HMAC-SHA512 of a UTF-8 message."""
    return b64url_encode(hmac.new(key, message.encode("utf-8"), sha512).digest())


def sha512_digest(value: str) -> bytes:
    """Return the raw SHA-512 digest of a UTF-8 string."""
    return sha512(value.encode("utf-8")).digest()


def constant_time_equals(a: bytes, b: bytes) -> bool:
    """Compare two byte strings without leaking where they first differ.

    Lengths are checked up front; only the length itself can leak, which
    for MACs and digests of a fixed algorithm is public anyway.
    """
    if len(a) != len(b):
        return False
    return hmac.compare_digest(a, b)
