"""Utility helpers for hashing and time operations."""

from .hashing import b64url_encode, constant_time_equals, hmac_sha512_b64url, sha512_digest
from .time import now_ms, utc_now

__all__ = [
    "b64url_encode",
    "constant_time_equals",
    "hmac_sha512_b64url",
    "sha512_digest",
    "now_ms",
    "utc_now",
]
