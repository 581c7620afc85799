"""
Price-led search strategies.

Price is the primary filter whenever it is present: exact price matches are
rare, so a title or artist is used to narrow them down.
"""

from __future__ import annotations

from typing import List

from album_catalog.domain.models import Album, Criteria
from album_catalog.strategies.abstract import AbstractSearchStrategy, AlbumReader, as_result_set


class ByPriceStrategy(AbstractSearchStrategy):
    """Single album with exactly this price."""

    name: str = "by_price"
    description: str = "Exact price match, first album only."

    def execute(self, store: AlbumReader, criteria: Criteria) -> List[Album]:
        return as_result_set(store.find_by_price(criteria.price))


class ByPriceAndTitleStrategy(AbstractSearchStrategy):
    """Single album matching both price and title."""

    name: str = "by_price_and_title"
    description: str = "Exact price and title match, first album only."

    def execute(self, store: AlbumReader, criteria: Criteria) -> List[Album]:
        return as_result_set(store.find_by_price_and_title(criteria.price, criteria.title))


class ByPriceAndArtistStrategy(AbstractSearchStrategy):
    """Every album by the artist at this price, ordered by id."""

    name: str = "by_price_and_artist"
    description: str = "Exact price and artist match."

    def execute(self, store: AlbumReader, criteria: Criteria) -> List[Album]:
        return store.find_by_price_and_artist(criteria.price, criteria.artist)


__all__ = ["ByPriceAndArtistStrategy", "ByPriceAndTitleStrategy", "ByPriceStrategy"]
