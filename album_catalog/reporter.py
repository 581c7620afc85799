from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

from rich import box
from rich.console import Console
from rich.table import Table

from album_catalog.domain.models import Album, DispatchResult, PriceRange


def build_album_table(albums: Sequence[Album], title: str = "Albums", caption: Optional[str] = None) -> Table:
    """
    Render albums as a rich table, in the order given.
    """
    table = Table(title=title, box=box.ROUNDED, caption=caption)

    table.add_column("ID", justify="right", style="magenta", no_wrap=True)
    table.add_column("Title", style="cyan")
    table.add_column("Artist", style="green")
    table.add_column("Price ($)", justify="right", style="yellow")

    for album in albums:
        table.add_row(str(album.id), album.title, album.artist, f"{album.price:.2f}")
    return table


def print_albums(
    albums: Sequence[Album],
    title: str = "Albums",
    console: Optional[Console] = None,
) -> None:
    console = console or Console()
    if not albums:
        console.print("[yellow]No albums to display.[/yellow]")
        return
    console.print(build_album_table(albums, title=title, caption=f"{len(albums)} album(s)"))


def print_search_result(result: DispatchResult, console: Optional[Console] = None) -> None:
    """
    Render a search outcome, echoing the criteria used.
    """
    console = console or Console()
    criteria = result.criteria
    parts = []
    if criteria.title:
        parts.append(f"title={criteria.title!r}")
    if criteria.artist:
        parts.append(f"artist={criteria.artist!r}")
    if criteria.has_price:
        parts.append(f"price={criteria.price}")

    if result.empty:
        if result.strategy == "empty":
            console.print("[yellow]Nothing to search for. Give a title, artist, or price.[/yellow]")
        else:
            console.print(f"[yellow]No matches for {', '.join(parts)}.[/yellow]")
        return

    title = f"Search: {', '.join(parts)}\n[dim]strategy: {result.strategy}[/dim]"
    console.print(build_album_table(result.albums, title=title, caption=f"{len(result.albums)} match(es)"))


def print_prices(prices: Sequence[Decimal], console: Optional[Console] = None) -> None:
    console = console or Console()
    if not prices:
        console.print("[yellow]No prices recorded.[/yellow]")
        return
    price_range = PriceRange.from_prices(prices)
    console.print(", ".join(f"{price:.2f}" for price in prices))
    console.print(f"[dim]Range: ${price_range.low} - ${price_range.high}[/dim]")


__all__ = ["build_album_table", "print_albums", "print_prices", "print_search_result"]
