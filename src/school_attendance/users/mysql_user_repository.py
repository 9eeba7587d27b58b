from __future__ import annotations

from typing import Optional, Sequence

from mysql.connector.errors import IntegrityError

from ..core.enums import Role
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import User
from .repository import UserRepository

_COLUMNS = "id, username, password, role, created_at"


def _to_user(row: dict) -> User:
    return User(
        id=int(row["id"]),
        username=row["username"],
        password_hash=row["password"],
        role=Role(row["role"]),
        created_at=row.get("created_at"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE id=%s", (user_id,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_username(self, username: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE username=%s", (username,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def list_all(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users ORDER BY role, username")
            return [_to_user(r) for r in fetchall(cur)]

    def create_user(self, *, username: str, password_hash: str, role: Role) -> User:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "INSERT INTO users (username, password, role) VALUES (%s, %s, %s)",
                    (username, password_hash, role.value),
                )
                user_id = int(cur.lastrowid)
                cur.execute(f"SELECT {_COLUMNS} FROM users WHERE id=%s", (user_id,))
                return _to_user(fetchone(cur))
        except IntegrityError as e:
            if is_duplicate_key(e):
                raise ConflictError("Username already exists") from e
            raise

    def delete_by_id(self, user_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM users WHERE id=%s", (user_id,))
            return cur.rowcount > 0
