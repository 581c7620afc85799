"""
Domain package for the Album Catalog.

Exports the core models, value normalization helpers, and the error taxonomy
used across the store, the dispatcher, and the web layer.
"""

from album_catalog.domain.errors import (
    AlbumCatalogError,
    AlbumNotFound,
    StorageError,
    ValidationError,
)
from album_catalog.domain.models import Album, Criteria, DispatchResult, PriceRange
from album_catalog.domain.normalize import normalize_price, title_case

__all__ = [
    "Album",
    "AlbumCatalogError",
    "AlbumNotFound",
    "Criteria",
    "DispatchResult",
    "PriceRange",
    "StorageError",
    "ValidationError",
    "normalize_price",
    "title_case",
]
