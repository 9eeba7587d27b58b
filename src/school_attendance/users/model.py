from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import to_iso
from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: User (teacher or admin account).

    Note: Plain data object; never serialize ``password_hash``.
    """

    id: int
    username: str
    password_hash: str
    role: Role
    created_at: Optional[datetime] = None

    def to_public(self) -> dict:
        return {
            "id": self.id,
            "username": self.username,
            "role": self.role.value,
            "created_at": to_iso(self.created_at),
        }
