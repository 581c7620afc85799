"""
Schema bootstrap and fixture loading for the Album Catalog.

Creates the `album` table from `db/init.sql` when it is missing and loads the
classic recordings fixture used in demos and integration tests.
"""

from __future__ import annotations

import sys
import time
from decimal import Decimal
from pathlib import Path
from typing import Iterable, Tuple

import psycopg
import typer

from album_catalog.infrastructure.db_factory import get_sync_connection

app = typer.Typer(help="Create the album table and load the recordings fixture.")

INIT_SQL = Path(__file__).resolve().parent.parent / "db" / "init.sql"

RECORDINGS: Tuple[Tuple[str, str, Decimal], ...] = (
    ("Blue Train", "John Coltrane", Decimal("56.99")),
    ("Giant Steps", "John Coltrane", Decimal("63.99")),
    ("Jeru", "Gerry Mulligan", Decimal("17.99")),
    ("Sarah Vaughan", "Sarah Vaughan", Decimal("34.98")),
    ("Lessons", "Umfundisi", Decimal("1.50")),
)


def _ensure_schema(conn: psycopg.Connection) -> None:
    with conn.cursor() as cur:
        cur.execute(INIT_SQL.read_text(encoding="utf-8"))
    conn.commit()


def _load_albums(
    conn: psycopg.Connection,
    albums: Iterable[Tuple[str, str, Decimal]],
    truncate: bool = False,
) -> int:
    rows = list(albums)
    with conn.cursor() as cur:
        if truncate:
            cur.execute("TRUNCATE TABLE public.album RESTART IDENTITY;")
        cur.executemany(
            "INSERT INTO public.album (title, artist, price) VALUES (%s, %s, %s);",
            rows,
        )
    conn.commit()
    return len(rows)


def seed(
    dsn: str | None = None,
    truncate: bool = False,
    albums: Iterable[Tuple[str, str, Decimal]] = RECORDINGS,
) -> int:
    """
    Create the schema if needed and insert ``albums``; returns rows inserted.

    ``dsn`` defaults to the one built from settings.
    """
    with get_sync_connection(dsn) as conn:
        _ensure_schema(conn)
        return _load_albums(conn, albums, truncate=truncate)


@app.command()
def main(
    dsn: str | None = typer.Option(
        None,
        "--dsn",
        help="Optional DSN override for Postgres.",
    ),
    truncate: bool = typer.Option(
        False,
        "--truncate",
        help="Empty the album table (and reset ids) before loading.",
    ),
    schema_only: bool = typer.Option(
        False,
        "--schema-only",
        help="Only create the table; skip loading the fixture.",
    ),
) -> None:
    """
    Create the album table and load the recordings fixture.
    """
    start = time.perf_counter()

    if schema_only:
        with get_sync_connection(dsn) as conn:
            _ensure_schema(conn)
        typer.echo(f"Schema ready ({INIT_SQL.name}).")
        return

    loaded = seed(dsn, truncate=truncate)
    typer.echo(f"Loaded {loaded} album(s) in {time.perf_counter() - start:.2f}s.")


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)
