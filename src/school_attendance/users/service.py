from __future__ import annotations

import logging
from typing import Any, Sequence

from ..auth.passwords import hash_password
from ..common.validators import require_choice, require_non_empty
from ..core.constants import BCRYPT_MAX_PASSWORD_BYTES, DEFAULT_BCRYPT_ROUNDS
from ..core.enums import Role
from ..core.exceptions import ConflictError, ValidationError
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)


class UserService:
    """Use case: manage teacher/admin accounts (admin only)."""

    def __init__(self, users: UserRepository, *, bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS):
        self._users = users
        self._bcrypt_rounds = int(bcrypt_rounds)

    def list_users(self) -> Sequence[User]:
        return self._users.list_all()

    def create_user(self, *, username: Any, password: Any, role: Any) -> User:
        username = require_non_empty(username, "Username")
        if password is None or str(password) == "":
            raise ValidationError("Password is required")
        password = str(password)
        if len(password.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
            raise ValidationError(f"Password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes")
        role = require_choice(role, Role, "Role")

        if self._users.get_by_username(username):
            raise ConflictError("Username already exists")

        user = self._users.create_user(
            username=username,
            password_hash=hash_password(password, rounds=self._bcrypt_rounds),
            role=role,
        )
        logger.info("Created %s account %r (id=%d)", role.value, username, user.id)
        return user

    def delete_user(self, user_id: int) -> None:
        if self._users.delete_by_id(user_id):
            logger.info("Deleted user id=%d", user_id)
        else:
            logger.debug("Delete skipped, no user with id=%d", user_id)
