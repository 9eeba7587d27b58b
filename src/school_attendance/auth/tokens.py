from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

import jwt

from ..common.datetime_utils import now_utc
from ..core.constants import DEFAULT_TOKEN_TTL_HOURS, TOKEN_ALGORITHM
from ..core.enums import Role
from ..core.exceptions import AuthorizationError
from .model import Identity


class TokenService:
    """Issues and verifies signed, self-contained session tokens (JWT)."""

    def __init__(self, secret: str, *, ttl_hours: int = DEFAULT_TOKEN_TTL_HOURS, algorithm: str = TOKEN_ALGORITHM):
        if not secret:
            raise ValueError("Token secret must not be empty")
        self._secret = secret
        self._ttl = timedelta(hours=int(ttl_hours))
        self._algorithm = algorithm

    def issue(self, identity: Identity, *, now: Optional[datetime] = None) -> str:
        issued_at = now or now_utc()
        payload = {
            "id": identity.id,
            "username": identity.username,
            "role": identity.role.value,
            "iat": issued_at,
            "exp": issued_at + self._ttl,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def decode(self, token: str) -> Identity:
        try:
            data = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["exp", "iat"]},
            )
        except jwt.ExpiredSignatureError:
            raise AuthorizationError("Token expired") from None
        except jwt.InvalidTokenError:
            raise AuthorizationError("Invalid token") from None

        try:
            return Identity(id=int(data["id"]), username=str(data["username"]), role=Role(data["role"]))
        except (KeyError, TypeError, ValueError):
            raise AuthorizationError("Invalid token") from None
