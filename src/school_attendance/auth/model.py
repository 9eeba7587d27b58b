from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class Identity:
    """Caller identity carried inside a token and attached to ``flask.g``."""

    id: int
    username: str
    role: Role

    def to_dict(self) -> dict:
        return {"id": self.id, "username": self.username, "role": self.role.value}


@dataclass(frozen=True)
class LoginResult:
    token: str
    user: Identity

    def to_dict(self) -> dict:
        return {"token": self.token, "user": self.user.to_dict()}
