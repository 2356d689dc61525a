from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

import psycopg
from psycopg_pool import ConnectionPool

from app.config.settings import Settings


class Database:
    """Owns the connection pool shared by the repositories of one worker."""

    def __init__(self, pool: ConnectionPool) -> None:
        self._pool: ConnectionPool | None = pool

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        pool = ConnectionPool(
            settings.db_conninfo(),
            min_size=1,
            max_size=settings.db_pool_max_size,
            open=True,
        )
        return cls(pool)

    def close(self) -> None:
        """Close the underlying pool. Safe to call more than once."""
        if self._pool is not None:
            self._pool.close()
            self._pool = None

    @contextmanager
    def connection(self) -> Generator[psycopg.Connection[Any], None, None]:
        """Yield a pooled connection. Caller manages commit/rollback."""
        if self._pool is None:
            raise RuntimeError("Database is closed")
        with self._pool.connection() as conn:
            yield conn
