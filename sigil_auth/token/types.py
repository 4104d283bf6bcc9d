"""Token datatypes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class TokenHeader:
    issued_at: int
    expires_at: int

    def to_wire(self) -> Dict[str, int]:
        return {"iat": self.issued_at, "exp": self.expires_at}

    @classmethod
    def from_wire(cls, raw: Any) -> "TokenHeader":
        """Build a header from its decoded JSON form, raising ``ValueError`` on bad shape."""
        if not isinstance(raw, dict):
            raise ValueError("token header must be an object")
        iat, exp = raw.get("iat"), raw.get("exp")
        for value in (iat, exp):
            if not isinstance(value, int) or isinstance(value, bool):
                raise ValueError("token header timestamps must be integers")
        return cls(issued_at=iat, expires_at=exp)


@dataclass(frozen=True)
class DecodedToken:
    """An access token split into its parts, prior to any verification."""

    header: TokenHeader
    payload: Any
    encoded_header: str
    encoded_payload: str
    received_mac: str


@dataclass(frozen=True)
class IssuedRefreshToken:
    token: str
    token_hash: str
