from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Optional

from mysql.connector import pooling

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        return cls(
            host=str(db_config.get("host", "localhost")),
            port=int(db_config.get("port", 3306)),
            user=str(db_config.get("user", "root")),
            password=str(db_config.get("password", "")),
            database=str(db_config.get("database", "attendance_db")),
        )


class _BorrowedConnection:
    """Pooled connection whose ``close()`` also frees a slot in the wait queue."""

    def __init__(self, cnx, release):
        self._cnx = cnx
        self._release = release

    def __getattr__(self, name):
        return getattr(self._cnx, name)

    def close(self) -> None:
        if self._release is None:
            return
        release, self._release = self._release, None
        try:
            self._cnx.close()
        finally:
            release()


class DatabaseConnection:
    """Process-wide connection pool handle.

    The pool is created lazily on first use so building the app container
    does not touch the network. mysql-connector fails at once when the pool
    is empty, so borrowers queue on a semaphore sized like the pool instead.
    Call ``close()`` on shutdown.
    """

    def __init__(self, config: DBConfig, *, pool_size: int = 5, pool_name: str = "attendance_pool"):
        self._config = config
        self._pool_size = int(pool_size)
        self._pool_name = pool_name
        self._pool: Optional[pooling.MySQLConnectionPool] = None
        self._lock = threading.Lock()
        self._slots = threading.BoundedSemaphore(self._pool_size)

    @property
    def config(self) -> DBConfig:
        return self._config

    def _get_pool(self) -> pooling.MySQLConnectionPool:
        with self._lock:
            if self._pool is None:
                logger.info(
                    "Opening connection pool %s (size=%d) to %s@%s:%s/%s",
                    self._pool_name,
                    self._pool_size,
                    self._config.user,
                    self._config.host,
                    self._config.port,
                    self._config.database,
                )
                self._pool = pooling.MySQLConnectionPool(
                    pool_name=self._pool_name,
                    pool_size=self._pool_size,
                    pool_reset_session=True,
                    host=self._config.host,
                    port=int(self._config.port),
                    user=self._config.user,
                    password=self._config.password,
                    database=self._config.database,
                )
            return self._pool

    def connect(self) -> _BorrowedConnection:
        """Borrow a pooled connection, waiting for a free one; ``close()`` returns it."""
        self._slots.acquire()
        try:
            cnx = self._get_pool().get_connection()
        except BaseException:
            self._slots.release()
            raise
        return _BorrowedConnection(cnx, self._slots.release)

    def close(self) -> None:
        with self._lock:
            if self._pool is None:
                return
            pool, self._pool = self._pool, None

        # mysql-connector has no public drain API; pinned in pyproject.toml
        remove_connections = getattr(pool, "_remove_connections", None)
        if remove_connections is None:
            logger.warning("Connection pool %s dropped without draining", self._pool_name)
            return
        closed = remove_connections()
        logger.info("Connection pool %s closed (%d connections)", self._pool_name, closed)
