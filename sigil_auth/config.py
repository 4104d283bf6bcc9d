"""Configuration models for the token service and request guard."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional, Tuple, Union

DEFAULT_ACCESS_TOKEN_TTL_MS = 5 * 60 * 1000
CLOCK_SKEW_MS = 60 * 1000

DEFAULT_ACCESS_TOKEN_HEADER = "Authorization"
DEFAULT_REFRESH_TOKEN_HEADER = "X-Sigil-Refresh-Token"


@dataclass(frozen=True)
class TokenServiceConfig:
    """Secret key and default lifetime for issued access tokens.

    ``secret_key`` may be left unset, in which case the service generates a
    temporary random key. Tokens signed with it do not survive a restart.
    """

    secret_key: Optional[Union[bytes, str]] = None
    access_token_ttl_ms: int = DEFAULT_ACCESS_TOKEN_TTL_MS

    def __repr__(self) -> str:
        key_state = "set" if self.secret_key else "unset"
        return f"TokenServiceConfig(secret_key=<{key_state}>, access_token_ttl_ms={self.access_token_ttl_ms})"

    @classmethod
    def from_env(cls) -> "TokenServiceConfig":
        """Read ``SIGIL_AUTH_SECRET_KEY`` and ``SIGIL_AUTH_ACCESS_TOKEN_TTL_MS``."""
        ttl_raw = os.getenv("SIGIL_AUTH_ACCESS_TOKEN_TTL_MS")
        return cls(
            secret_key=os.getenv("SIGIL_AUTH_SECRET_KEY") or None,
            access_token_ttl_ms=int(ttl_raw) if ttl_raw else DEFAULT_ACCESS_TOKEN_TTL_MS,
        )


@dataclass(frozen=True)
class AuthGuardConfig:
    """Route prefixes that require a valid access token, and where to find tokens."""

    protected_routes: Tuple[str, ...] = ()
    access_token_header: str = DEFAULT_ACCESS_TOKEN_HEADER
    refresh_token_header: str = DEFAULT_REFRESH_TOKEN_HEADER

    @classmethod
    def from_env(cls) -> "AuthGuardConfig":
        routes = os.getenv("SIGIL_AUTH_PROTECTED_ROUTES", "")
        return cls(
            protected_routes=tuple(r.strip() for r in routes.split(",") if r.strip()),
            access_token_header=os.getenv("SIGIL_AUTH_ACCESS_TOKEN_HEADER", DEFAULT_ACCESS_TOKEN_HEADER),
            refresh_token_header=os.getenv("SIGIL_AUTH_REFRESH_TOKEN_HEADER", DEFAULT_REFRESH_TOKEN_HEADER),
        )
