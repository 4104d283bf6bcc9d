"""Framework-neutral request guard built on a TokenService."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping, Optional

from .config import AuthGuardConfig
from .token.service import TokenService

logger = logging.getLogger(__name__)

_BEARER_PREFIX = "bearer "


@dataclass(frozen=True)
class AuthCredentials:
    """Tokens found on a request."""

    access_token: Optional[str]
    refresh_token: Optional[str]
    access_token_valid: bool


def _header(headers: Mapping[str, str], name: str) -> Optional[str]:
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value or None
    return None


class AuthGuard:
    """Decide whether a request may reach a route, given its headers.

    Web framework glue only needs to call ``authorize`` from its middleware
    hook, or ``credentials`` to hand tokens to a handler.
    """

    def __init__(self, tokens: TokenService, config: Optional[AuthGuardConfig] = None) -> None:
        self.tokens = tokens
        self.config = config or AuthGuardConfig()
        if not self.config.protected_routes:
            logger.warning("No protected routes configured; requests must be checked explicitly with credentials()")
        else:
            logger.info("Guarding %d protected route prefix(es)", len(self.config.protected_routes))

    def is_protected(self, path: str) -> bool:
        return any(path.startswith(prefix) for prefix in self.config.protected_routes)

    def access_token(self, headers: Mapping[str, str]) -> Optional[str]:
        value = _header(headers, self.config.access_token_header)
        if value and value[: len(_BEARER_PREFIX)].lower() == _BEARER_PREFIX:
            value = value[len(_BEARER_PREFIX) :].strip() or None
        return value

    def credentials(self, headers: Mapping[str, str]) -> AuthCredentials:
        access_token = self.access_token(headers)
        return AuthCredentials(
            access_token=access_token,
            refresh_token=_header(headers, self.config.refresh_token_header),
            access_token_valid=self.tokens.verify_access_token(access_token) if access_token else False,
        )

    def authorize(self, path: str, headers: Mapping[str, str]) -> bool:
        """Return False only for a protected path without a valid access token."""
        if not self.is_protected(path):
            return True
        access_token = self.access_token(headers)
        if not access_token:
            logger.debug("Denied %s: no access token", path)
            return False
        allowed = self.tokens.verify_access_token(access_token)
        if not allowed:
            logger.debug("Denied %s: invalid access token", path)
        return allowed
