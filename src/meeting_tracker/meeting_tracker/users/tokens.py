"""Bearer token issuing and verification (HS256 JWT)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt

from ..core.constants import DEFAULT_TOKEN_HOURS
from ..core.enums import Role
from ..core.exceptions import AuthorizationError
from .model import Admin

ALGORITHM = "HS256"


@dataclass(frozen=True)
class TokenClaims:
    admin_id: int
    username: str
    role: Role


class TokenService:
    def __init__(self, secret: str, *, expires_hours: int = DEFAULT_TOKEN_HOURS):
        if not secret:
            raise ValueError("JWT secret cannot be empty")
        self._secret = secret
        self._expires = timedelta(hours=expires_hours)

    def issue(self, admin: Admin) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "id": admin.admin_id,
            "username": admin.username,
            "role": admin.role.value,
            "iat": now,
            "exp": now + self._expires,
        }
        return jwt.encode(payload, self._secret, algorithm=ALGORITHM)

    def verify(self, token: str) -> TokenClaims:
        try:
            payload = jwt.decode(token, self._secret, algorithms=[ALGORITHM])
            return TokenClaims(
                admin_id=int(payload["id"]),
                username=str(payload["username"]),
                role=Role(payload["role"]),
            )
        except jwt.ExpiredSignatureError:
            raise AuthorizationError("Access token expired")
        except (jwt.InvalidTokenError, KeyError, ValueError):
            raise AuthorizationError("Access token invalid")
