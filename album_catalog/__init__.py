"""
Album Catalog - search, add, edit, and delete album records in Postgres.

This package provides a small server-rendered web application and CLI over a
single `album` table (title, artist, price), including:

- A typed data-access facade (AlbumStore) over a shared connection pool
- A search dispatcher that maps optional title/artist/price criteria to one
  of a fixed set of query strategies
- A Flask front end and a Typer command line sharing the same core

Failures are reported per request; a broken query never takes the process down.
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from album_catalog.config import Settings, get_settings
from album_catalog.dispatcher import available_strategies, dispatch, select_strategy
from album_catalog.domain.errors import (
    AlbumCatalogError,
    AlbumNotFound,
    StorageError,
    ValidationError,
)
from album_catalog.domain.models import Album, Criteria, DispatchResult, PriceRange
from album_catalog.domain.normalize import normalize_price, title_case
from album_catalog.infrastructure.album_store import AlbumStore
from album_catalog.strategies.abstract import AbstractSearchStrategy, SearchStrategy
from album_catalog.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Domain
    "Album",
    "Criteria",
    "DispatchResult",
    "PriceRange",
    "normalize_price",
    "title_case",
    # Errors
    "AlbumCatalogError",
    "AlbumNotFound",
    "StorageError",
    "ValidationError",
    # Store and dispatch
    "AlbumStore",
    "available_strategies",
    "dispatch",
    "select_strategy",
    # Strategy abstractions
    "AbstractSearchStrategy",
    "SearchStrategy",
    # Logging
    "configure_logging",
    "get_logger",
]
