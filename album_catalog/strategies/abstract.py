"""
Abstract search-strategy interfaces for the Album Catalog.

Concrete strategies (by title, by artist, by price, and the price
conjunctions) implement the SearchStrategy protocol and always return a plain
list of albums, so the dispatcher and the presentation layer never have to
tell single-record lookups apart from filters.
"""

from __future__ import annotations

import abc
from decimal import Decimal
from typing import List, Optional, Protocol, runtime_checkable

from album_catalog.domain.models import Album, Criteria


class AlbumReader(Protocol):
    """The subset of AlbumStore that search strategies read from."""

    def find_by_artist(self, artist: str) -> List[Album]: ...

    def find_by_title(self, title: str) -> List[Album]: ...

    def find_by_price(self, price: Decimal) -> Optional[Album]: ...

    def find_by_price_and_artist(self, price: Decimal, artist: str) -> List[Album]: ...

    def find_by_price_and_title(self, price: Decimal, title: str) -> Optional[Album]: ...


@runtime_checkable
class SearchStrategy(Protocol):
    """
    Common interface all search strategies must implement.

    Attributes
    ----------
    name : str
        A short machine-friendly identifier.
    description : str
        A human-friendly summary of the query shape.
    """

    name: str
    description: str

    def execute(self, store: AlbumReader, criteria: Criteria) -> List[Album]:
        """
        Run the query against the store.

        Parameters
        ----------
        store : AlbumReader
            Where to read albums from.
        criteria : Criteria
            The fields this strategy filters on are guaranteed present.

        Returns
        -------
        List[Album]
            Matching albums; empty when nothing matched.
        """
        ...


class AbstractSearchStrategy(abc.ABC):
    """
    Optional ABC helper for class-based implementations.

    Subclasses should set `name` and `description` and implement `execute`.
    """

    name: str
    description: str

    @abc.abstractmethod
    def execute(self, store: AlbumReader, criteria: Criteria) -> List[Album]:  # pragma: no cover
        """Run the query and return matching albums."""
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


def as_result_set(album: Optional[Album]) -> List[Album]:
    """Wrap a single-record lookup into the uniform list shape."""
    return [album] if album is not None else []


__all__ = [
    "AbstractSearchStrategy",
    "AlbumReader",
    "SearchStrategy",
    "as_result_set",
]
