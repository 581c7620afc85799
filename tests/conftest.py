"""
Pytest configuration for the Album Catalog.

Provides fixtures for:
- An in-memory album store for unit tests (no database needed)
- Database connection management for integration tests
- Schema setup and fixture seeding
"""

from __future__ import annotations

import os
from decimal import Decimal
from typing import Generator, List, Optional

import psycopg
import pytest

from album_catalog.config import Settings
from album_catalog.domain.errors import AlbumNotFound, StorageError
from album_catalog.domain.models import Album, PriceRange
from album_catalog.domain.normalize import normalize_price, require_title_artist, title_case
from album_catalog.infrastructure.album_store import AlbumStore
from album_catalog.infrastructure.db_factory import open_pool


class InMemoryAlbumStore:
    """
    Dict-backed stand-in for AlbumStore with the same method contracts.

    Every call is recorded in ``calls``; set ``fail_with`` to make every
    operation raise that error.
    """

    def __init__(self, albums: Optional[List[tuple]] = None) -> None:
        self._rows: dict[int, Album] = {}
        self._next_id = 1
        self.calls: List[str] = []
        self.fail_with: Optional[StorageError] = None
        self.dump_limit = 50
        for title, artist, price in albums or []:
            self._add(title, artist, price)

    def __enter__(self) -> "InMemoryAlbumStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        del exc_type, exc, tb

    def _record(self, name: str) -> None:
        self.calls.append(name)
        if self.fail_with is not None:
            raise self.fail_with

    def _add(self, title: str, artist: str, price) -> int:
        album_id = self._next_id
        self._next_id += 1
        self._rows[album_id] = Album(id=album_id, title=title, artist=artist, price=normalize_price(price))
        return album_id

    def _sorted(self, albums) -> List[Album]:
        return sorted(albums, key=lambda a: a.id)

    def find_by_artist(self, artist: str) -> List[Album]:
        self._record("find_by_artist")
        return self._sorted(a for a in self._rows.values() if a.artist == artist)

    def find_by_title(self, title: str) -> List[Album]:
        self._record("find_by_title")
        return self._sorted(a for a in self._rows.values() if a.title == title)

    def find_by_id(self, album_id: int) -> Optional[Album]:
        self._record("find_by_id")
        return self._rows.get(album_id)

    def get_by_id(self, album_id: int) -> Album:
        album = self.find_by_id(album_id)
        if album is None:
            raise AlbumNotFound(album_id)
        return album

    def find_by_price(self, price) -> Optional[Album]:
        self._record("find_by_price")
        price = normalize_price(price)
        matches = self._sorted(a for a in self._rows.values() if a.price == price)
        return matches[0] if matches else None

    def find_by_price_and_artist(self, price, artist: str) -> List[Album]:
        self._record("find_by_price_and_artist")
        price = normalize_price(price)
        return self._sorted(
            a for a in self._rows.values() if a.price == price and a.artist == artist
        )

    def find_by_price_and_title(self, price, title: str) -> Optional[Album]:
        self._record("find_by_price_and_title")
        price = normalize_price(price)
        matches = self._sorted(
            a for a in self._rows.values() if a.price == price and a.title == title
        )
        return matches[0] if matches else None

    def dump(self, limit: Optional[int] = None) -> List[Album]:
        self._record("dump")
        limit = self.dump_limit if limit is None else limit
        return sorted(self._rows.values(), key=lambda a: (a.title, a.id))[:limit]

    def distinct_artists(self) -> List[str]:
        self._record("distinct_artists")
        return sorted({a.artist for a in self._rows.values()})

    def distinct_titles(self) -> List[str]:
        self._record("distinct_titles")
        return sorted({a.title for a in self._rows.values()})

    def distinct_prices(self) -> List[Decimal]:
        self._record("distinct_prices")
        return sorted({a.price for a in self._rows.values()})

    def price_range(self) -> PriceRange:
        return PriceRange.from_prices(self.distinct_prices())

    def count(self) -> int:
        self._record("count")
        return len(self._rows)

    def insert(self, title: str, artist: str, price) -> int:
        self._record("insert")
        title, artist = require_title_artist(title, artist)
        return self._add(title, artist, price)

    def update(self, current_title, current_artist, new_title, new_artist, new_price=None) -> int:
        self._record("update")
        current_title, current_artist = require_title_artist(current_title, current_artist)
        new_title, new_artist = require_title_artist(new_title, new_artist)
        affected = 0
        for album_id, album in list(self._rows.items()):
            if album.title == current_title and album.artist == current_artist:
                self._rows[album_id] = Album(
                    id=album_id,
                    title=title_case(new_title),
                    artist=title_case(new_artist),
                    price=album.price if new_price is None else normalize_price(new_price),
                )
                affected += 1
        return affected

    def delete(self, title: str, artist: str) -> int:
        self._record("delete")
        title, artist = require_title_artist(title, artist)
        doomed = [i for i, a in self._rows.items() if a.title == title and a.artist == artist]
        for album_id in doomed:
            del self._rows[album_id]
        return len(doomed)


RECORDINGS = [
    ("Blue Train", "John Coltrane", "56.99"),
    ("Giant Steps", "John Coltrane", "63.99"),
    ("Jeru", "Gerry Mulligan", "17.99"),
    ("Sarah Vaughan", "Sarah Vaughan", "34.98"),
]


@pytest.fixture
def memory_store() -> InMemoryAlbumStore:
    """In-memory store preloaded with the recordings fixture."""
    return InMemoryAlbumStore(RECORDINGS)


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """
    Settings fixture with test-specific overrides.

    Can be overridden via environment variables in CI or local testing.
    """
    return Settings(
        db_host=os.getenv("DB_HOST", "localhost"),
        db_port=int(os.getenv("DB_PORT", "5432")),
        db_user=os.getenv("DBUSER", "postgres"),
        db_password=os.getenv("DBPASS", "postgres"),
        db_name=os.getenv("DB_NAME", "recordings"),
        db_pool_max_size=4,
        log_level="DEBUG",
    )


@pytest.fixture(scope="session")
def test_dsn(test_settings: Settings) -> str:
    """
    Database connection string for tests.
    """
    return (
        f"postgresql://{test_settings.db_user}:{test_settings.db_password}"
        f"@{test_settings.db_host}:{test_settings.db_port}/{test_settings.db_name}"
    )


@pytest.fixture(scope="session")
def db_connection_available(test_dsn: str) -> bool:
    """
    Check if database is reachable.

    Used to conditionally skip integration tests when DB is not available.
    """
    try:
        with psycopg.connect(test_dsn, connect_timeout=5) as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT 1;")
                cur.fetchone()
        return True
    except psycopg.Error:
        return False


@pytest.fixture(scope="session")
def db_connection(
    test_dsn: str, db_connection_available: bool
) -> Generator[psycopg.Connection, None, None]:
    """
    Provide a session-scoped database connection for integration tests.

    Skips tests if database is not available.
    """
    if not db_connection_available:
        pytest.skip("Database not available for integration tests")

    conn = psycopg.connect(test_dsn)
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture(scope="session")
def db_schema_initialized(db_connection: psycopg.Connection) -> bool:
    """
    Ensure the album table exists, creating it from db/init.sql if necessary.
    """
    from scripts.seed_albums import _ensure_schema

    _ensure_schema(db_connection)
    return True


@pytest.fixture(scope="function")
def clean_album_table(db_connection: psycopg.Connection, db_schema_initialized: bool):
    """
    Empty the album table before and after each test function.
    """
    with db_connection.cursor() as cur:
        cur.execute("TRUNCATE TABLE public.album RESTART IDENTITY;")
    db_connection.commit()
    yield
    with db_connection.cursor() as cur:
        cur.execute("TRUNCATE TABLE public.album RESTART IDENTITY;")
    db_connection.commit()


@pytest.fixture(scope="function")
def pg_store(
    test_settings: Settings, test_dsn: str, clean_album_table
) -> Generator[AlbumStore, None, None]:
    """
    AlbumStore over a real pool against an empty album table.
    """
    pool = open_pool(test_settings, dsn_override=test_dsn)
    try:
        yield AlbumStore(pool, dump_limit=test_settings.dump_limit)
    finally:
        pool.close()


@pytest.fixture(scope="function")
def seeded_store(db_connection: psycopg.Connection, pg_store: AlbumStore) -> AlbumStore:
    """
    AlbumStore over a table holding the recordings fixture.
    """
    from scripts.seed_albums import RECORDINGS as SEED_ROWS
    from scripts.seed_albums import _load_albums

    _load_albums(db_connection, SEED_ROWS)
    return pg_store
