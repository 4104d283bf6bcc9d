"""sigil-auth package.

Stateless HMAC-SHA512 access tokens, hashed refresh tokens, and a small
framework-neutral guard for protecting routes with them.
"""

from .config import AuthGuardConfig, TokenServiceConfig
from .guard import AuthCredentials, AuthGuard
from .token import DecodedToken, IssuedRefreshToken, TokenHeader, TokenService

__all__ = [
    "TokenService",
    "TokenServiceConfig",
    "TokenHeader",
    "DecodedToken",
    "IssuedRefreshToken",
    "AuthGuard",
    "AuthGuardConfig",
    "AuthCredentials",
]
