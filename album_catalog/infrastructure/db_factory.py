"""
Database connection factory utilities for the Album Catalog.

Builds the Postgres DSN from settings and opens the shared connection pool that
the process bootstrap hands to the AlbumStore. The pool is the only resource
shared between request threads; every query borrows its own connection.

Includes retry logic for transient connection failures using tenacity.
"""

from __future__ import annotations

from typing import Optional

import psycopg
from psycopg import Connection, Cursor, sql
from psycopg_pool import ConnectionPool, PoolTimeout
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from album_catalog.config import Settings, get_settings
from album_catalog.domain.errors import StorageError
from album_catalog.utils.logging import get_logger

log = get_logger(__name__)


def build_dsn(settings: Optional[Settings] = None) -> str:
    """Compose a DSN string from settings."""
    settings = settings or get_settings()
    return (
        f"postgresql://{settings.db_user}:{settings.db_password}"
        f"@{settings.db_host}:{settings.db_port}/{settings.db_name}"
    )


def apply_statement_timeout(cur: Cursor, timeout_ms: int) -> None:
    """
    Set a session-level statement timeout. A value <= 0 leaves the server default.
    """
    if timeout_ms <= 0:
        return
    cur.execute(sql.SQL("SET statement_timeout = {}").format(sql.Literal(int(timeout_ms))))


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    retry=retry_if_exception_type(PoolTimeout),
    reraise=True,
)
def _wait_until_ready(pool: ConnectionPool, timeout: float) -> None:
    pool.wait(timeout=timeout)


def open_pool(
    settings: Optional[Settings] = None,
    dsn_override: Optional[str] = None,
    wait_timeout: float = 10.0,
) -> ConnectionPool:
    """
    Open the shared connection pool and block until it holds a live connection.

    Retries up to 3 times with exponential backoff when the server is not yet
    reachable.

    Parameters
    ----------
    settings : Settings, optional
        Source of the DSN, pool sizes and statement timeout.
    dsn_override : str, optional
        Explicit DSN (used by tests and the seed script).
    wait_timeout : float
        Seconds to wait for the first connection on each attempt.

    Returns
    -------
    ConnectionPool
        An open pool; the caller owns it and must close it.

    Raises
    ------
    StorageError
        If no connection could be established after all attempts.
    """
    settings = settings or get_settings()
    timeout_ms = settings.db_statement_timeout_ms

    def _configure(conn: Connection) -> None:
        with conn.cursor() as cur:
            apply_statement_timeout(cur, timeout_ms)

    pool = ConnectionPool(
        conninfo=dsn_override or build_dsn(settings),
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
        kwargs={"autocommit": True},
        configure=_configure,
        open=True,
    )
    try:
        _wait_until_ready(pool, wait_timeout)
    except PoolTimeout as exc:
        pool.close()
        raise StorageError("connect", f"database not reachable: {exc}") from exc

    log.info(
        "Connected!",
        extra={"db_host": settings.db_host, "db_name": settings.db_name},
    )
    return pool


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    retry=retry_if_exception_type((psycopg.OperationalError, psycopg.InterfaceError)),
    reraise=True,
)
def get_sync_connection(dsn_override: Optional[str] = None) -> Connection:
    """
    Acquire a dedicated synchronous connection with automatic retry.

    Use this for one-off operations such as seeding. Request handling goes
    through the pool.

    Raises
    ------
    psycopg.OperationalError
        If connection fails after all retry attempts.
    """
    return psycopg.connect(dsn_override or build_dsn())


__all__ = [
    "apply_statement_timeout",
    "build_dsn",
    "get_sync_connection",
    "open_pool",
]
