"""HMAC-SHA512 access tokens and hashed refresh tokens."""

from __future__ import annotations

import logging
import secrets
from typing import Any, Callable, Optional, Union

from ..config import CLOCK_SKEW_MS, DEFAULT_ACCESS_TOKEN_TTL_MS, TokenServiceConfig
from ..utils.hashing import b64url_encode, constant_time_equals, hmac_sha512_b64url, sha512_digest
from ..utils.time import now_ms
from .codec import b64url_decode, decode_segment, encode_segment
from .types import DecodedToken, IssuedRefreshToken, TokenHeader

logger = logging.getLogger(__name__)

GENERATED_KEY_BYTES = 32
REFRESH_TOKEN_BYTES = 64


class TokenService:
    """Issue and verify stateless access tokens and opaque refresh tokens.

    Access tokens are ``header.payload.mac`` where each part is unpadded
    base64url, the header is ``{"iat": ms, "exp": ms}`` and the MAC is
    HMAC-SHA512 over the still-encoded ``header.payload`` text.

    Refresh tokens are 64 random bytes. Only their SHA-512 hash should be
    persisted by the caller; it does not involve the secret key, so the hash
    store needs the same protection as a password hash store.

    The key is held in a private buffer for the lifetime of the service.
    ``close()`` overwrites that buffer, which is best-effort only: copies made
    by the interpreter or the caller's original value are out of reach.
    """

    def __init__(
        self,
        secret_key: Optional[Union[bytes, bytearray, str]] = None,
        *,
        access_token_ttl_ms: int = DEFAULT_ACCESS_TOKEN_TTL_MS,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        if secret_key is None:
            logger.warning(
                "No secret key configured for access tokens, generating a temporary key; "
                "tokens will not verify after a restart"
            )
            self._key = bytearray(secrets.token_bytes(GENERATED_KEY_BYTES))
        elif isinstance(secret_key, str):
            self._key = bytearray(secret_key.encode("utf-8"))
        elif isinstance(secret_key, (bytes, bytearray)):
            self._key = bytearray(secret_key)
        else:
            raise TypeError(f"secret_key must be bytes or str, not {type(secret_key).__name__}")
        if not self._key:
            raise ValueError("secret_key must not be empty.")
        self.access_token_ttl_ms = access_token_ttl_ms
        self._clock = clock
        self._closed = False

    @classmethod
    def from_config(cls, config: TokenServiceConfig, *, clock: Callable[[], int] = now_ms) -> "TokenService":
        service = cls(config.secret_key, access_token_ttl_ms=config.access_token_ttl_ms, clock=clock)
        if config.secret_key:
            logger.info("Token service configured with a provided secret key")
        return service

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"<TokenService {state} ttl_ms={self.access_token_ttl_ms}>"

    def __enter__(self) -> "TokenService":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Overwrite the key buffer; issuing is refused afterwards."""
        for i in range(len(self._key)):
            self._key[i] = 0
        self._closed = True

    def _mac(self, encoded_header: str, encoded_payload: str) -> str:
        return hmac_sha512_b64url(self._key, f"{encoded_header}.{encoded_payload}")

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError("TokenService is closed.")

    def issue_access_token(self, payload: Any, ttl_ms: Optional[int] = None) -> str:
        """Return a signed ``header.payload.mac`` token that expires ``ttl_ms`` from now."""
        self._ensure_open()
        issued_at = self._clock()
        lifetime = self.access_token_ttl_ms if ttl_ms is None else ttl_ms
        header = TokenHeader(issued_at=issued_at, expires_at=issued_at + lifetime)

        encoded_header = encode_segment(header.to_wire())
        encoded_payload = encode_segment(payload)
        return f"{encoded_header}.{encoded_payload}.{self._mac(encoded_header, encoded_payload)}"

    def decode_access_token(self, token: str) -> Optional[DecodedToken]:
        """Split and parse a token without checking its MAC or expiry.

        Returns ``None`` for anything that is not three well-formed segments.
        """
        if not isinstance(token, str):
            return None
        parts = token.split(".")
        if len(parts) != 3:
            return None
        encoded_header, encoded_payload, received_mac = parts

        try:
            header = TokenHeader.from_wire(decode_segment(encoded_header))
            payload = decode_segment(encoded_payload)
        except (ValueError, RecursionError):
            return None

        return DecodedToken(
            header=header,
            payload=payload,
            encoded_header=encoded_header,
            encoded_payload=encoded_payload,
            received_mac=received_mac,
        )

    def verify_access_token(self, token: str, allow_expired: bool = False) -> bool:
        """Return True when the token is well-formed, unexpired (or waived) and correctly signed."""
        if self._closed:
            return False

        decoded = self.decode_access_token(token)
        if decoded is None:
            logger.debug("Access token rejected: malformed")
            return False

        if self._clock() - CLOCK_SKEW_MS > decoded.header.expires_at and not allow_expired:
            logger.debug("Access token rejected: expired")
            return False

        expected = self._mac(decoded.encoded_header, decoded.encoded_payload)
        received = decoded.received_mac.encode("utf-8", "surrogatepass")
        if not constant_time_equals(expected.encode("ascii"), received):
            logger.debug("Access token rejected: signature mismatch")
            return False
        return True

    def issue_refresh_token(self) -> IssuedRefreshToken:
        """Return a random refresh token with the hash the caller should persist."""
        self._ensure_open()
        token = b64url_encode(secrets.token_bytes(REFRESH_TOKEN_BYTES))
        return IssuedRefreshToken(token=token, token_hash=b64url_encode(sha512_digest(token)))

    def verify_refresh_token(self, stored_hash: str, presented_token: str) -> bool:
        """Check a presented refresh token against its persisted hash."""
        if not isinstance(stored_hash, str) or not isinstance(presented_token, str):
            return False
        try:
            reference = b64url_decode(stored_hash)
            digest = sha512_digest(presented_token)
        except ValueError:
            logger.debug("Refresh token rejected: malformed input")
            return False
        return constant_time_equals(digest, reference)
