"""Access and refresh token issuance and verification."""

from .service import TokenService
from .types import DecodedToken, IssuedRefreshToken, TokenHeader

__all__ = ["TokenService", "DecodedToken", "IssuedRefreshToken", "TokenHeader"]
