from __future__ import annotations

from typing import List

from album_catalog.domain.models import Album, Criteria
from album_catalog.strategies.abstract import AbstractSearchStrategy, AlbumReader


class ByTitleStrategy(AbstractSearchStrategy):
    """
    Exact title match. Titles are assumed more specific than artist names, so
    this wins over ByArtistStrategy when both are given without a price.
    """

    name: str = "by_title"
    description: str = "Exact title match."

    def execute(self, store: AlbumReader, criteria: Criteria) -> List[Album]:
        return store.find_by_title(criteria.title)


class ByArtistStrategy(AbstractSearchStrategy):
    name: str = "by_artist"
    description: str = "Exact artist match."

    def execute(self, store: AlbumReader, criteria: Criteria) -> List[Album]:
        return store.find_by_artist(criteria.artist)


__all__ = ["ByArtistStrategy", "ByTitleStrategy"]
