from __future__ import annotations

import logging
from typing import Optional

from ..core.constants import DEFAULT_BCRYPT_ROUNDS
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError
from ..users.repository import UserRepository
from .model import Identity, LoginResult
from .passwords import hash_password, verify_password
from .tokens import TokenService

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


class AuthService:
    """Use cases: login, token authentication, role checks."""

    def __init__(self, users: UserRepository, tokens: TokenService, *, bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS):
        self._users = users
        self._tokens = tokens
        self._bcrypt_rounds = int(bcrypt_rounds)
        self._dummy_hash: Optional[str] = None

    def _burn_hash(self, password: str) -> None:
        # Unknown usernames cost one bcrypt check too, so timing does not reveal them.
        if self._dummy_hash is None:
            self._dummy_hash = hash_password("not-a-real-password", rounds=self._bcrypt_rounds)
        verify_password(password, self._dummy_hash)

    def login(self, username: str, password: str) -> LoginResult:
        user = self._users.get_by_username(username or "")
        if not user:
            self._burn_hash(password or "")
            logger.info("Login failed for %r", username)
            raise AuthenticationError(INVALID_CREDENTIALS)

        if not verify_password(password or "", user.password_hash):
            logger.info("Login failed for %r", username)
            raise AuthenticationError(INVALID_CREDENTIALS)

        identity = Identity(id=user.id, username=user.username, role=user.role)
        logger.info("Login succeeded for %r (id=%d, role=%s)", user.username, user.id, user.role.value)
        return LoginResult(token=self._tokens.issue(identity), user=identity)

    def authenticate(self, token: Optional[str]) -> Identity:
        if not token:
            raise AuthenticationError("Access denied")
        return self._tokens.decode(token)

    def require_role(self, identity: Identity, role: Role) -> None:
        """Check the role against the users table; the token claim is advisory."""
        if identity.role != role:
            raise AuthorizationError(f"{role.value.capitalize()} access required")

        user = self._users.get_by_id(identity.id)
        if not user or user.role != role:
            logger.warning("Stale token for user id=%d rejected (role claim %s)", identity.id, identity.role.value)
            raise AuthorizationError(f"{role.value.capitalize()} access required")
