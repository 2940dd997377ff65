# src/ui/app.py

"""Terminal UI for browsing game deals."""

import logging
from collections.abc import Sequence
from typing import cast

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal
from textual.screen import ModalScreen
from textual.widgets import (
    Button,
    DataTable,
    Footer,
    Header,
    Input,
    LoadingIndicator,
    Select,
    Static,
)

from src.clients.deals_gateway import DealsGateway
from src.config.settings import Settings
from src.models.criteria import SortKey
from src.models.deal import DealDetail, DealRecord
from src.services.catalog_pipeline import CatalogPipeline
from src.ui.screens import AlertScreen, DealDetailScreen

logger = logging.getLogger("deal_catalog.ui")

EMPTY_MESSAGE = "No games found."
ERROR_MESSAGE = "Could not load deals. Please try again."

_ALL_STORES = ""
_DEFAULT_ORDER = ""


class DealCatalogApp(App[object]):
    """Terminal UI for browsing game deals."""

    CSS = """
    #search_bar, #view_controls {
        height: auto;
    }
    #search_input {
        width: 1fr;
    }
    #store_select, #sort_select {
        width: 1fr;
    }
    #loading {
        height: 1;
    }
    #status.error {
        color: $error;
    }
    #status.empty {
        color: $warning;
    }
    #results_table {
        height: 1fr;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("r", "reload", "Reload"),
    ]

    def __init__(self, gateway: DealsGateway | None = None) -> None:
        super().__init__()
        self.settings = Settings()
        self.gateway = gateway or DealsGateway()
        self.pipeline = CatalogPipeline(self.gateway, self)
        self.displayed: list[DealRecord] = []

    async def on_unmount(self) -> None:
        """Close the HTTP session when the app shuts down."""
        await self.gateway.aclose()

    def compose(self) -> ComposeResult:
        """Build the widget tree for the TUI."""
        store_options = [("All stores", _ALL_STORES)] + [
            (s["label"], s["id"]) for s in self.settings.AVAILABLE_STORES
        ]
        sort_options = [("Default order", _DEFAULT_ORDER)] + [
            (key.label, key.value) for key in SortKey
        ]

        yield Header()
        yield Container(
            Static("🎮 Game Deals", id="title"),

            Horizontal(
                Input(placeholder="Search games...", id="search_input"),
                Button("Search", variant="primary", id="search_btn"),
                id="search_bar",
            ),

            Horizontal(
                Select(
                    store_options,
                    value=_ALL_STORES,
                    allow_blank=False,
                    id="store_select",
                ),
                Select(
                    sort_options,
                    value=_DEFAULT_ORDER,
                    allow_blank=False,
                    id="sort_select",
                ),
                id="view_controls",
            ),

            LoadingIndicator(id="loading"),
            Static("", id="status"),
            cast(
                DataTable[str | Text],
                DataTable(
                    id="results_table",
                    zebra_stripes=True,
                    cursor_type="row",
                ),
            ),
            Button("No more games", id="load_more", disabled=True),
            id="main_container",
        )
        yield Footer()

    def on_mount(self) -> None:
        """Configure the table and start the initial load."""
        self._table().add_columns(
            "Title", "Store", "Normal", "Sale", "Discount", "Rating", "About"
        )
        self.set_loading(False)
        self.run_worker(
            self.pipeline.load_initial(), group="catalog", exclusive=False
        )

    def _table(self) -> DataTable[str | Text]:
        return cast(
            DataTable[str | Text],
            self.query_one("#results_table", DataTable),
        )

    # ── User intents ─────────────────────────────────────

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "search_btn":
            self.submit_search()

    async def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "search_input":
            self.submit_search()

    def submit_search(self) -> None:
        """Start a search for the current input value."""
        term = self.query_one("#search_input", Input).value
        logger.info("Search submitted: '%s'", term)
        self.run_worker(
            self.pipeline.search(term), group="catalog", exclusive=False
        )

    def on_select_changed(self, event: Select.Changed) -> None:
        """Re-derive the view when the store filter or sort changes."""
        value = event.value if isinstance(event.value, str) else ""
        criteria = self.pipeline.criteria
        if event.select.id == "store_select":
            if (value or None) != criteria.store_filter:
                self.pipeline.set_store_filter(value)
        elif event.select.id == "sort_select":
            if SortKey.parse(value) != criteria.sort_key:
                self.pipeline.set_sort(value)

    def on_data_table_row_selected(
        self, event: DataTable.RowSelected
    ) -> None:
        """Request the detail for the selected deal."""
        if 0 <= event.cursor_row < len(self.displayed):
            game_id = self.displayed[event.cursor_row].game_id
            self.run_worker(
                self.pipeline.fetch_detail(game_id),
                group="detail",
                exclusive=False,
            )

    def action_reload(self) -> None:
        """Reload the initial deal list."""
        self.run_worker(
            self.pipeline.load_initial(), group="catalog", exclusive=False
        )

    # ── CatalogView ──────────────────────────────────────

    def render_list(self, records: Sequence[DealRecord]) -> None:
        """Fill the table with one row per deal."""
        self._set_status("", None)
        table = self._table()
        table.clear()
        self.displayed = list(records)
        for deal in self.displayed:
            normal = Text(
                f"${deal.normal_price:.2f}",
                style="strike dim" if deal.has_discount else "",
            )
            badge = (
                Text(f"-{deal.discount_percent}%", style="bold white on red")
                if deal.has_discount
                else Text("")
            )
            table.add_row(
                Text(deal.title[:60]),
                deal.store_label,
                normal,
                Text(f"${deal.sale_price:.2f}", style="bold green"),
                badge,
                Text(f"★ {deal.rating_label}", style="yellow"),
                Text(deal.blurb, style="dim"),
            )
        self._sync_selects()

    def render_empty(self) -> None:
        self._clear_rows()
        self._set_status(EMPTY_MESSAGE, "empty")
        self._sync_selects()

    def render_error(self) -> None:
        self._clear_rows()
        self._set_status(ERROR_MESSAGE, "error")

    def clear_status(self) -> None:
        self._set_status("", None)

    def set_loading(self, loading: bool) -> None:
        self.query_one("#loading", LoadingIndicator).display = loading

    def render_detail(self, detail: DealDetail) -> None:
        """Show the detail modal, replacing whatever modal is open."""
        self._close_modals()
        self.push_screen(DealDetailScreen(detail))

    def show_alert(self, message: str) -> None:
        self._close_modals()
        self.push_screen(AlertScreen(message))

    # ── Helpers ──────────────────────────────────────────

    def _close_modals(self) -> None:
        """Pop open modals so at most one is ever shown."""
        while isinstance(self.screen, ModalScreen):
            self.pop_screen()

    def _clear_rows(self) -> None:
        self._table().clear()
        self.displayed = []

    def _set_status(self, message: str, kind: str | None) -> None:
        status = self.query_one("#status", Static)
        status.update(message)
        status.set_class(kind == "error", "error")
        status.set_class(kind == "empty", "empty")

    def _sync_selects(self) -> None:
        """Reflect reset criteria in the selects after a fresh load."""
        criteria = self.pipeline.criteria
        if not criteria.is_empty:
            return
        store_select = self.query_one("#store_select", Select)
        sort_select = self.query_one("#sort_select", Select)
        if store_select.value != _ALL_STORES:
            store_select.value = _ALL_STORES
        if sort_select.value != _DEFAULT_ORDER:
            sort_select.value = _DEFAULT_ORDER
