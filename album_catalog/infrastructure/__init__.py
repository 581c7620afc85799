"""
Infrastructure package for the Album Catalog.

Centralizes database connectivity concerns (DSN, pool bootstrap, the album
store). Keep this layer focused on I/O and resource management, decoupled from
search dispatch and presentation.
"""

from album_catalog.infrastructure.album_store import AlbumStore
from album_catalog.infrastructure.db_factory import (
    apply_statement_timeout,
    build_dsn,
    get_sync_connection,
    open_pool,
)

__all__ = [
    "AlbumStore",
    "apply_statement_timeout",
    "build_dsn",
    "get_sync_connection",
    "open_pool",
]
