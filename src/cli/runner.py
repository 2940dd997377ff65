# src/cli/runner.py

"""Headless CLI runner that drives the same catalog pipeline as the TUI."""

import json
import logging
import sys
from collections.abc import Sequence

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from src.clients.deals_gateway import DealsGateway
from src.config.settings import Settings
from src.models.criteria import SortKey
from src.models.deal import DealDetail, DealRecord
from src.services.catalog_pipeline import CatalogPipeline

logger = logging.getLogger("deal_catalog.cli")

# Stderr console for status messages so stdout stays clean for JSON
_err = Console(stderr=True)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_EMPTY = 2


class ConsoleView:
    """CatalogView that records the last rendered state for printing."""

    def __init__(self) -> None:
        self.records: list[DealRecord] = []
        self.detail: DealDetail | None = None
        self.state: str = "idle"
        self.alert: str | None = None

    def render_list(self, records: Sequence[DealRecord]) -> None:
        self.records = list(records)
        self.state = "list"

    def render_empty(self) -> None:
        self.records = []
        self.state = "empty"

    def render_error(self) -> None:
        self.records = []
        self.state = "error"

    def clear_status(self) -> None:
        self.state = "idle"

    def set_loading(self, loading: bool) -> None:
        if loading:
            _err.print("[dim]Loading...[/dim]")

    def render_detail(self, detail: DealDetail) -> None:
        self.detail = detail

    def show_alert(self, message: str) -> None:
        self.alert = message


def resolve_store(store_id: str | None) -> str | None:
    """Validate a store id against the registry.

    Raises ``SystemExit`` on unknown IDs.
    """
    if store_id is None:
        return None
    known = {s["id"] for s in Settings.AVAILABLE_STORES}
    if store_id not in known:
        valid = ", ".join(
            f"{s['id']} ({s['label']})" for s in Settings.AVAILABLE_STORES
        )
        _err.print(f"[red]Unknown store: {store_id}[/red]")
        _err.print(f"[dim]Available: {valid}[/dim]")
        raise SystemExit(1)
    return store_id


def resolve_sort(sort_key: str | None) -> SortKey | None:
    """Parse a sort key name. Raises ``SystemExit`` on unknown keys."""
    try:
        return SortKey.parse(sort_key)
    except ValueError:
        valid = ", ".join(k.value for k in SortKey)
        _err.print(f"[red]Unknown sort key: {sort_key}[/red]")
        _err.print(f"[dim]Available: {valid}[/dim]")
        raise SystemExit(1) from None


def _deals_to_dicts(records: Sequence[DealRecord]) -> list[dict[str, object]]:
    """Serialise deals to plain dicts for JSON output."""
    return [
        {
            "gameID": d.game_id,
            "title": d.title,
            "storeID": d.store_id,
            "salePrice": d.sale_price,
            "normalPrice": d.normal_price,
            "savings": d.savings,
            "steamRatingPercent": d.steam_rating_percent,
            "thumb": d.thumb,
        }
        for d in records
    ]


def _print_table(records: Sequence[DealRecord]) -> None:
    """Render a Rich table of deals to stdout, in display order."""
    table = Table(
        title="Game Deals",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("#", style="dim", width=4)
    table.add_column("Title", max_width=50)
    table.add_column("Store", style="magenta")
    table.add_column("Normal", justify="right")
    table.add_column("Sale", justify="right", style="green")
    table.add_column("Discount", justify="right", style="red")
    table.add_column("Rating", justify="center")
    table.add_column("Game ID", style="dim")

    for idx, d in enumerate(records, 1):
        table.add_row(
            str(idx),
            escape(d.title[:50]),
            d.store_label,
            f"[strike]${d.normal_price:.2f}[/strike]"
            if d.has_discount
            else f"${d.normal_price:.2f}",
            f"${d.sale_price:.2f}",
            f"-{d.discount_percent}%" if d.has_discount else "—",
            f"★ {d.rating_label}",
            d.game_id,
        )

    Console().print(table)


def _print_detail(detail: DealDetail) -> None:
    offer = detail.best_offer
    lines = [f"[dim]{detail.info.thumb}[/dim]"] if detail.info.thumb else []
    if offer is not None:
        lines.append(
            f"Original price: [strike]${offer.retail_price:.2f}[/strike]"
        )
        lines.append(
            f"Sale price: [bold green]${offer.price:.2f}[/bold green]"
            f" ({Settings.store_label(offer.store_id)})"
        )
    else:
        lines.append("[yellow]No offers listed.[/yellow]")
    if detail.steam_url:
        lines.append(f"Steam: {detail.steam_url}")
    Console().print(
        Panel(
            "\n".join(lines),
            title=escape(detail.info.title or detail.game_id),
            title_align="left",
        )
    )


async def cli_browse(
    term: str | None,
    store_id: str | None,
    sort_key: str | None,
    output_format: str,
    gateway: DealsGateway | None = None,
) -> int:
    """Load or search once, apply filter/sort, print, return an exit code."""
    store = resolve_store(store_id)
    sort = resolve_sort(sort_key)

    view = ConsoleView()
    async with gateway or DealsGateway() as gw:
        pipeline = CatalogPipeline(gw, view)
        if term:
            _err.print(f"[bold]Searching:[/bold] {escape(term)}")
        await pipeline.search(term or "")

        if view.state == "error":
            _err.print("[red]Could not load deals.[/red]")
            return EXIT_ERROR

        if store is not None:
            pipeline.set_store_filter(store)
        if sort is not None:
            pipeline.set_sort(sort)

    logger.info(
        "CLI browse term=%r store=%s sort=%s: %d of %d deals",
        term,
        store,
        sort,
        len(view.records),
        len(pipeline.result_set),
    )
    if not view.records:
        _err.print("[yellow]No games found.[/yellow]")
        return EXIT_EMPTY

    _err.print(
        f"[green]✓ {len(view.records)} of "
        f"{len(pipeline.result_set)} deals[/green]"
    )
    if output_format == "table":
        _print_table(view.records)
    else:
        json.dump(
            _deals_to_dicts(view.records),
            sys.stdout,
            ensure_ascii=False,
            indent=2,
        )
        sys.stdout.write("\n")
    return EXIT_OK


async def cli_detail(
    game_id: str,
    gateway: DealsGateway | None = None,
) -> int:
    """Print the detail for one game."""
    view = ConsoleView()
    async with gateway or DealsGateway() as gw:
        pipeline = CatalogPipeline(gw, view)
        detail = await pipeline.fetch_detail(game_id)

    if detail is None:
        _err.print(f"[red]{view.alert}[/red]")
        return EXIT_ERROR
    _print_detail(detail)
    return EXIT_OK


def list_stores() -> int:
    """Print the storefront registry."""
    table = Table(title="Stores", title_style="bold cyan")
    table.add_column("ID", justify="right")
    table.add_column("Store", style="magenta")
    for store in Settings.AVAILABLE_STORES:
        table.add_row(store["id"], store["label"])
    Console().print(table)
    return EXIT_OK
