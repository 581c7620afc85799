"""
Error taxonomy for the Album Catalog.

Every failure that can reach a request boundary is one of these types, so the
web layer and the CLI can map them to a user-facing outcome without knowing
which driver or query raised them.
"""

from __future__ import annotations

from typing import Optional


class AlbumCatalogError(Exception):
    """Base class for all catalog errors."""


class ValidationError(AlbumCatalogError, ValueError):
    """User input could not be turned into a valid value (e.g. a bad price)."""

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field


class AlbumNotFound(AlbumCatalogError, LookupError):
    """A point lookup matched no album."""

    def __init__(self, album_id: int) -> None:
        super().__init__(f"album {album_id}: no such album")
        self.album_id = album_id


class StorageError(AlbumCatalogError):
    """
    The database connection or a query failed.

    The driver exception is chained as ``__cause__``.
    """

    def __init__(self, operation: str, message: str) -> None:
        super().__init__(f"{operation}: {message}")
        self.operation = operation


__all__ = ["AlbumCatalogError", "AlbumNotFound", "StorageError", "ValidationError"]
