"""
Data-access facade over the `album` table.

AlbumStore translates typed operations into parameterized SQL and maps rows
back into Album models. It holds no per-request state: every call borrows a
connection from the injected pool, so a single instance is shared by all
request threads.

Driver failures never escape as psycopg exceptions; they are re-raised as
StorageError carrying the name of the operation that failed.
"""

from __future__ import annotations

from contextlib import contextmanager
from decimal import Decimal
from typing import Generator, List, Optional

import psycopg
from psycopg import Cursor
from psycopg.rows import RowFactory, class_row
from psycopg_pool import ConnectionPool

from album_catalog.config import Settings, get_settings
from album_catalog.domain.errors import AlbumNotFound, StorageError, ValidationError
from album_catalog.domain.models import Album, PriceRange
from album_catalog.domain.normalize import (
    PriceInput,
    normalize_price,
    require_title_artist,
    title_case,
)
from album_catalog.infrastructure.db_factory import open_pool
from album_catalog.utils.logging import get_logger

log = get_logger(__name__)

_COLUMNS = "id, title, artist, price"


class AlbumStore:
    """
    Typed operations over the `album` table.

    Parameters
    ----------
    pool : ConnectionPool
        Open pool owned by the process bootstrap (or by this store when built
        through ``from_settings``).
    dump_limit : int
        Default row cap for ``dump``.
    """

    def __init__(self, pool: ConnectionPool, dump_limit: int = 50, owns_pool: bool = False) -> None:
        self._pool = pool
        self.dump_limit = dump_limit
        self._owns_pool = owns_pool

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "AlbumStore":
        """Open a pool from settings and return a store that closes it on ``close()``."""
        settings = settings or get_settings()
        pool = open_pool(settings)
        return cls(pool, dump_limit=settings.dump_limit, owns_pool=True)

    def close(self) -> None:
        if self._owns_pool:
            self._pool.close()

    def __enter__(self) -> "AlbumStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @contextmanager
    def _cursor(
        self, operation: str, row_factory: Optional[RowFactory] = None
    ) -> Generator[Cursor, None, None]:
        try:
            with self._pool.connection() as conn:
                with conn.cursor(row_factory=row_factory) as cur:
                    yield cur
        except psycopg.Error as exc:
            log.error(
                f"[STORE FAILED] {operation}",
                extra={"operation": operation, "error": str(exc)},
            )
            raise StorageError(operation, str(exc)) from exc

    def _fetch_albums(self, operation: str, query: str, params: tuple) -> List[Album]:
        with self._cursor(operation, row_factory=class_row(Album)) as cur:
            cur.execute(query, params)
            albums = cur.fetchall()
        log.debug(operation, extra={"operation": operation, "rows": len(albums)})
        return albums

    def _fetch_album(self, operation: str, query: str, params: tuple) -> Optional[Album]:
        with self._cursor(operation, row_factory=class_row(Album)) as cur:
            cur.execute(query, params)
            album = cur.fetchone()
        log.debug(operation, extra={"operation": operation, "found": album is not None})
        return album

    # Lookups

    def find_by_artist(self, artist: str) -> List[Album]:
        return self._fetch_albums(
            "find_by_artist",
            f"SELECT {_COLUMNS} FROM album WHERE artist = %s ORDER BY id;",
            (artist,),
        )

    def find_by_title(self, title: str) -> List[Album]:
        return self._fetch_albums(
            "find_by_title",
            f"SELECT {_COLUMNS} FROM album WHERE title = %s ORDER BY id;",
            (title,),
        )

    def find_by_id(self, album_id: int) -> Optional[Album]:
        """Point lookup; ``None`` means no such album."""
        return self._fetch_album(
            "find_by_id",
            f"SELECT {_COLUMNS} FROM album WHERE id = %s;",
            (album_id,),
        )

    def get_by_id(self, album_id: int) -> Album:
        album = self.find_by_id(album_id)
        if album is None:
            raise AlbumNotFound(album_id)
        return album

    def find_by_price(self, price: PriceInput) -> Optional[Album]:
        """First album (lowest id) with exactly this price."""
        return self._fetch_album(
            "find_by_price",
            f"SELECT {_COLUMNS} FROM album WHERE price = %s ORDER BY id LIMIT 1;",
            (normalize_price(price),),
        )

    def find_by_price_and_artist(self, price: PriceInput, artist: str) -> List[Album]:
        return self._fetch_albums(
            "find_by_price_and_artist",
            f"SELECT {_COLUMNS} FROM album WHERE price = %s AND artist = %s ORDER BY id;",
            (normalize_price(price), artist),
        )

    def find_by_price_and_title(self, price: PriceInput, title: str) -> Optional[Album]:
        return self._fetch_album(
            "find_by_price_and_title",
            f"SELECT {_COLUMNS} FROM album WHERE price = %s AND title = %s ORDER BY id LIMIT 1;",
            (normalize_price(price), title),
        )

    def dump(self, limit: Optional[int] = None) -> List[Album]:
        """Up to ``limit`` albums ordered by title."""
        limit = self.dump_limit if limit is None else limit
        if limit <= 0:
            raise ValidationError(f"limit must be positive, got {limit}", field="limit")
        return self._fetch_albums(
            "dump",
            f"SELECT {_COLUMNS} FROM album ORDER BY title, id LIMIT %s;",
            (limit,),
        )

    # Distinct lists for form dropdowns

    def _fetch_column(self, operation: str, query: str) -> list:
        with self._cursor(operation) as cur:
            cur.execute(query)
            values = [row[0] for row in cur.fetchall()]
        log.debug(operation, extra={"operation": operation, "rows": len(values)})
        return values

    def distinct_artists(self) -> List[str]:
        return sorted(self._fetch_column("distinct_artists", "SELECT DISTINCT artist FROM album;"))

    def distinct_titles(self) -> List[str]:
        return sorted(self._fetch_column("distinct_titles", "SELECT DISTINCT title FROM album;"))

    def distinct_prices(self) -> List[Decimal]:
        return self._fetch_column(
            "distinct_prices", "SELECT DISTINCT price FROM album ORDER BY price;"
        )

    def price_range(self) -> PriceRange:
        return PriceRange.from_prices(self.distinct_prices())

    def count(self) -> int:
        with self._cursor("count") as cur:
            cur.execute("SELECT COUNT(*) FROM album;")
            return cur.fetchone()[0]

    def ping(self) -> None:
        with self._cursor("ping") as cur:
            cur.execute("SELECT 1;")
            cur.fetchone()

    # Mutations

    def insert(self, title: str, artist: str, price: PriceInput) -> int:
        """Add an album and return its new id."""
        title, artist = require_title_artist(title, artist)
        price = normalize_price(price)
        with self._cursor("insert") as cur:
            cur.execute(
                "INSERT INTO album (title, artist, price) VALUES (%s, %s, %s) RETURNING id;",
                (title, artist, price),
            )
            album_id = cur.fetchone()[0]
        log.info(
            f"Added new album {title} by {artist} ${price} (id# {album_id})",
            extra={"operation": "insert", "album_id": album_id},
        )
        return album_id

    def update(
        self,
        current_title: str,
        current_artist: str,
        new_title: str,
        new_artist: str,
        new_price: Optional[PriceInput] = None,
    ) -> int:
        """
        Rewrite every album matching the current title and artist.

        The new title and artist are title-cased before writing. When
        ``new_price`` is ``None`` each row keeps its current price. Returns the
        number of rows changed; 0 means nothing matched.
        """
        current_title, current_artist = require_title_artist(current_title, current_artist)
        new_title, new_artist = require_title_artist(new_title, new_artist)
        new_title, new_artist = title_case(new_title), title_case(new_artist)
        price = normalize_price(new_price) if new_price is not None else None
        with self._cursor("update") as cur:
            cur.execute(
                "UPDATE album SET title = %s, artist = %s, price = COALESCE(%s::numeric, price) "
                "WHERE title = %s AND artist = %s;",
                (new_title, new_artist, price, current_title, current_artist),
            )
            affected = cur.rowcount
        extra = {
            "operation": "update",
            "current_title": current_title,
            "current_artist": current_artist,
            "affected": affected,
        }
        if affected > 1:
            log.warning(f"{affected} albums share this title and artist; all were updated", extra=extra)
        else:
            log.info(f"{affected} row(s) updated", extra=extra)
        return affected

    def delete(self, title: str, artist: str) -> int:
        """Remove albums with exactly this title and artist; returns the count removed."""
        title, artist = require_title_artist(title, artist)
        with self._cursor("delete") as cur:
            cur.execute("DELETE FROM album WHERE title = %s AND artist = %s;", (title, artist))
            affected = cur.rowcount
        log.info(
            f"Deleted {affected} album(s) {title} by {artist}",
            extra={"operation": "delete", "affected": affected},
        )
        return affected


__all__ = ["AlbumStore"]
