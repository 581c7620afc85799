from __future__ import annotations

from typing import List

from album_catalog.domain.models import Album, Criteria
from album_catalog.strategies.abstract import AbstractSearchStrategy, AlbumReader


class EmptyStrategy(AbstractSearchStrategy):
    """No criteria given: answer with nothing and never touch the store."""

    name: str = "empty"
    description: str = "No criteria; no query issued."

    def execute(self, store: AlbumReader, criteria: Criteria) -> List[Album]:
        del store, criteria
        return []


__all__ = ["EmptyStrategy"]
