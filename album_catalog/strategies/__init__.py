"""
Strategies package for the Album Catalog.

This module re-exports the abstract interfaces and the concrete search
strategies so downstream code can import from `album_catalog.strategies`
directly.
"""

from album_catalog.strategies.abstract import (
    AbstractSearchStrategy,
    AlbumReader,
    SearchStrategy,
    as_result_set,
)
from album_catalog.strategies.by_price import (
    ByPriceAndArtistStrategy,
    ByPriceAndTitleStrategy,
    ByPriceStrategy,
)
from album_catalog.strategies.by_text import ByArtistStrategy, ByTitleStrategy
from album_catalog.strategies.empty import EmptyStrategy

__all__ = [
    # Abstracts
    "AbstractSearchStrategy",
    "AlbumReader",
    "SearchStrategy",
    "as_result_set",
    # Concrete strategies
    "ByArtistStrategy",
    "ByPriceAndArtistStrategy",
    "ByPriceAndTitleStrategy",
    "ByPriceStrategy",
    "ByTitleStrategy",
    "EmptyStrategy",
]
