from __future__ import annotations

import sys
from contextlib import contextmanager
from typing import Generator, Optional

import typer

from album_catalog.config import get_settings
from album_catalog.dispatcher import dispatch
from album_catalog.domain.errors import AlbumCatalogError
from album_catalog.domain.models import Criteria
from album_catalog.infrastructure.album_store import AlbumStore
from album_catalog.reporter import print_albums, print_prices, print_search_result
from album_catalog.utils.logging import configure_logging

app = typer.Typer(help="Album Catalog CLI.")


@contextmanager
def _open_store() -> Generator[AlbumStore, None, None]:
    """Configure logging, open the store, and turn catalog errors into a clean exit."""
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    try:
        with AlbumStore.from_settings(settings) as store:
            yield store
    except AlbumCatalogError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc


@app.command()
def info() -> None:
    """
    Show effective configuration values and the album count.
    """
    settings = get_settings()
    typer.echo(
        f"DB={settings.db_user}@{settings.db_host}:{settings.db_port}/{settings.db_name} | "
        f"pool=({settings.db_pool_min_size},{settings.db_pool_max_size}) "
        f"http={settings.http_host}:{settings.http_port}"
    )
    with _open_store() as store:
        typer.echo(f"albums={store.count()}")


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address (default from settings)."),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port (default from settings)."),
) -> None:
    """
    Serve the web front end. Each request runs on its own thread.
    """
    from album_catalog.web.app import create_app

    settings = get_settings()
    with _open_store() as store:
        web = create_app(store=store, settings=settings)
        web.run(
            host=host or settings.http_host,
            port=port or settings.http_port,
            threaded=True,
            debug=settings.app_env == "development",
            use_reloader=False,
        )


@app.command()
def search(
    title: Optional[str] = typer.Option(None, "--title", "-t", help="Exact album title."),
    artist: Optional[str] = typer.Option(None, "--artist", "-a", help="Exact artist name."),
    price: Optional[str] = typer.Option(None, "--price", "-p", help="Exact price, e.g. 17.99."),
) -> None:
    """
    Search albums the same way the web search form does.
    """
    with _open_store() as store:
        criteria = Criteria.from_form({"title": title, "artist": artist, "price": price})
        print_search_result(dispatch(store, criteria))


@app.command()
def add(
    title: str = typer.Argument(..., help="Album title."),
    artist: str = typer.Argument(..., help="Artist name."),
    price: str = typer.Argument("0", help="Price, rounded to cents."),
) -> None:
    """
    Add an album and print its new id.
    """
    with _open_store() as store:
        album_id = store.insert(title, artist, price)
        typer.echo(f"Added {title} by {artist} (id# {album_id})")


@app.command()
def edit(
    current_title: str = typer.Argument(..., help="Title of the album to edit."),
    current_artist: str = typer.Argument(..., help="Artist of the album to edit."),
    title: Optional[str] = typer.Option(None, "--title", help="New title."),
    artist: Optional[str] = typer.Option(None, "--artist", help="New artist."),
    price: Optional[str] = typer.Option(None, "--price", help="New price; omit to keep the current one."),
) -> None:
    """
    Edit every album matching the current title and artist.
    """
    with _open_store() as store:
        count = store.update(
            current_title,
            current_artist,
            title or current_title,
            artist or current_artist,
            price,
        )
        typer.echo(f"{count} row(s) updated.")


@app.command()
def delete(
    title: str = typer.Argument(..., help="Album title."),
    artist: str = typer.Argument(..., help="Artist name."),
) -> None:
    """
    Delete albums with exactly this title and artist.
    """
    with _open_store() as store:
        count = store.delete(title, artist)
        if count == 0:
            typer.echo(f"This album doesn't exist! {title} by {artist}")
        else:
            typer.echo(f"Deleted {count} album(s): {title} by {artist}")


@app.command()
def dump(
    limit: Optional[int] = typer.Option(None, "--limit", "-n", help="Row cap (default from settings)."),
) -> None:
    """
    List albums ordered by title.
    """
    with _open_store() as store:
        print_albums(store.dump(limit), title="All albums")


@app.command()
def prices() -> None:
    """
    List distinct prices and the whole-dollar range the search form offers.
    """
    with _open_store() as store:
        print_prices(store.distinct_prices())


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
