"""
Search dispatcher: picks exactly one search strategy for a set of criteria.

Usage (example from a request handler):
    from album_catalog.dispatcher import dispatch

    result = dispatch(store, Criteria.from_form(request.form))
    print(result.strategy, result.albums)

Precedence, highest first:
- price > 0 with a title   -> by_price_and_title
- price > 0 with an artist -> by_price_and_artist
- price > 0 alone          -> by_price
- title                    -> by_title
- artist                   -> by_artist
- nothing                  -> empty (no query issued)
"""

from __future__ import annotations

from typing import Callable, Dict, List

from album_catalog.domain.errors import StorageError
from album_catalog.domain.models import Criteria, DispatchResult
from album_catalog.strategies.abstract import AlbumReader, SearchStrategy
from album_catalog.strategies.by_price import (
    ByPriceAndArtistStrategy,
    ByPriceAndTitleStrategy,
    ByPriceStrategy,
)
from album_catalog.strategies.by_text import ByArtistStrategy, ByTitleStrategy
from album_catalog.strategies.empty import EmptyStrategy
from album_catalog.utils.logging import get_logger
from album_catalog.utils.profiler import timed_block

log = get_logger(__name__)


def _strategy_factories() -> Dict[str, Callable[[], SearchStrategy]]:
    """Registry of available strategies."""
    return {
        "by_price_and_title": lambda: ByPriceAndTitleStrategy(),
        "by_price_and_artist": lambda: ByPriceAndArtistStrategy(),
        "by_price": lambda: ByPriceStrategy(),
        "by_title": lambda: ByTitleStrategy(),
        "by_artist": lambda: ByArtistStrategy(),
        "empty": lambda: EmptyStrategy(),
    }


def available_strategies() -> List[str]:
    """List available strategy names."""
    return sorted(_strategy_factories().keys())


def resolve_strategy(name: str) -> SearchStrategy:
    factories = _strategy_factories()
    if name not in factories:
        raise ValueError(f"Unknown strategy '{name}'. Available: {', '.join(factories)}")
    return factories[name]()


def strategy_name_for(criteria: Criteria) -> str:
    if criteria.has_price:
        if criteria.title:
            return "by_price_and_title"
        if criteria.artist:
            return "by_price_and_artist"
        return "by_price"
    if criteria.title:
        return "by_title"
    if criteria.artist:
        return "by_artist"
    return "empty"


def select_strategy(criteria: Criteria) -> SearchStrategy:
    return resolve_strategy(strategy_name_for(criteria))


def dispatch(store: AlbumReader, criteria: Criteria) -> DispatchResult:
    """
    Run the one strategy the criteria call for and return its albums.

    Parameters
    ----------
    store : AlbumReader
        The album store (injected by the caller).
    criteria : Criteria
        Parsed search input.

    Returns
    -------
    DispatchResult
        Strategy name, echoed criteria, and the matching albums. An empty
        album list means "no matches", never an error.

    Raises
    ------
    StorageError
        Logged with the strategy and criteria, then re-raised unchanged so the
        request boundary can turn it into a failed response.
    """
    strategy = select_strategy(criteria)
    context = {"strategy": strategy.name, **criteria.as_log_fields()}

    with timed_block(strategy.name) as stats:
        try:
            albums = strategy.execute(store, criteria)
        except StorageError:
            log.exception(f"[SEARCH FAILED] {strategy.name}", extra=context)
            raise

    if albums:
        log.info(
            f"[SEARCH] {strategy.name}",
            extra={**context, "rows": len(albums), "duration_ms": stats.duration_ms},
        )
    elif strategy.name != "empty":
        log.warning(
            f"[SEARCH] {strategy.name} matched nothing",
            extra={**context, "rows": 0, "duration_ms": stats.duration_ms},
        )
    return DispatchResult(strategy=strategy.name, criteria=criteria, albums=albums)


__all__ = [
    "available_strategies",
    "dispatch",
    "resolve_strategy",
    "select_strategy",
    "strategy_name_for",
]
