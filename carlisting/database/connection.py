"""Process-wide PostgreSQL pool used by the settings store."""

from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

import psycopg
from psycopg.conninfo import make_conninfo
from psycopg_pool import ConnectionPool

from carlisting.config.settings import Settings
from carlisting.logging.logger import Log

_pool: ConnectionPool | None = None


class PoolNotInitializedError(RuntimeError):
    """Raised when a connection is requested before init_pool() or after close_pool()."""


def init_pool(settings: Settings) -> None:
    """Open the pool once; later calls reuse it.

    Settings reads fan out across threads, so the pool never has fewer
    connections than ``settings_fetch_workers``.
    """
    global _pool  # noqa: PLW0603
    if _pool is not None:
        return
    conninfo = make_conninfo(
        host=settings.db_host,
        port=settings.db_port,
        dbname=settings.db_database,
        user=settings.db_username,
        password=settings.db_password,
    )
    max_size = max(settings.db_pool_max_size, settings.settings_fetch_workers)
    _pool = ConnectionPool(
        conninfo,
        min_size=1,
        max_size=max_size,
        name="carlisting-settings",
        open=True,
    )
    Log.info(f"Settings database pool opened ({settings.db_host}:{settings.db_port})")


def close_pool() -> None:
    global _pool  # noqa: PLW0603
    if _pool is not None:
        _pool.close()
        _pool = None


@contextmanager
def get_connection() -> Generator[psycopg.Connection[Any], None, None]:
    """Yield a pooled connection. Caller manages commit/rollback."""
    if _pool is None:
        raise PoolNotInitializedError("Connection pool not initialized. Call init_pool() first.")
    with _pool.connection() as conn:
        yield conn
