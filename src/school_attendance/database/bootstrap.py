from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

import mysql.connector

from ..auth.passwords import hash_password
from ..core.constants import (
    DEFAULT_BCRYPT_ROUNDS,
    DEFAULT_MAX_ABSENCES,
    DEFAULT_MIN_ATTENDANCE_PERCENT,
    SETTINGS_ROW_ID,
)
from ..core.enums import Role
from .connection import DBConfig

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).with_name("schema.sql")


def _connect(target: DBConfig, *, with_database: bool = True):
    kwargs = dict(
        host=target.host,
        port=target.port,
        user=target.user,
        password=target.password,
        use_pure=True,
    )
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema files (handles ';' inside quotes and '--' comments).
    buf: list[str] = []
    in_single = False
    in_double = False
    in_comment = False
    escape = False

    for i, ch in enumerate(sql):
        if in_comment:
            if ch == "\n":
                in_comment = False
                buf.append(ch)
            continue

        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch == "-" and not in_single and not in_double and sql[i + 1 : i + 2] == "-":
            in_comment = True
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
            buf.append(ch)
            continue

        if ch == '"' and not in_single:
            in_double = not in_double
            buf.append(ch)
            continue

        if ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(target: DBConfig) -> None:
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(target: DBConfig, *, schema_path: str | Path = SCHEMA_PATH) -> None:
    sql = Path(schema_path).read_text(encoding="utf-8")

    conn = _connect(target)
    try:
        cur = conn.cursor()
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()


def ensure_default_admin(
    target: DBConfig,
    *,
    username: str,
    password: str,
    rounds: int = DEFAULT_BCRYPT_ROUNDS,
) -> bool:
    """Create the seed admin account unless the username is already taken.

    Returns True when a row was inserted. An existing account is left as-is,
    so changing ADMIN_PASSWORD later does not reset a live password.
    """
    conn = _connect(target)
    try:
        cur = conn.cursor(dictionary=True)
        cur.execute("SELECT id FROM users WHERE username=%s", (username,))
        if cur.fetchone():
            return False

        cur.execute(
            """
            INSERT INTO users (username, password, role)
            VALUES (%s, %s, %s)
            ON DUPLICATE KEY UPDATE id=id
            """,
            (username, hash_password(password, rounds=rounds), Role.ADMIN.value),
        )
        conn.commit()
        return cur.rowcount == 1
    finally:
        conn.close()


def ensure_default_settings(target: DBConfig) -> None:
    conn = _connect(target)
    try:
        cur = conn.cursor()
        cur.execute(
            """
            INSERT INTO settings (id, min_attendance_percent, max_absences)
            VALUES (%s, %s, %s)
            ON DUPLICATE KEY UPDATE id=id
            """,
            (SETTINGS_ROW_ID, DEFAULT_MIN_ATTENDANCE_PERCENT, DEFAULT_MAX_ABSENCES),
        )
        conn.commit()
    finally:
        conn.close()


def list_tables(target: DBConfig) -> list[str]:
    conn = _connect(target)
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()


def bootstrap_database(
    db_config: dict,
    *,
    admin_username: str,
    admin_password: str,
    create_database: bool = True,
    bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS,
) -> None:
    """Provision database, tables and seed rows. Errors propagate to the caller."""
    target = DBConfig.from_dict(db_config)

    if create_database:
        ensure_database_exists(target)
    else:
        logger.info("Skipping database creation for %s", target.database)

    apply_schema(target)
    if ensure_default_admin(target, username=admin_username, password=admin_password, rounds=bcrypt_rounds):
        logger.info("Seeded default admin account %r", admin_username)
    ensure_default_settings(target)

    logger.info("Database ready: %s (tables=%d)", target.database, len(list_tables(target)))
