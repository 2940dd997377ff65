# src/ui/screens.py

"""Modal screens for game details and blocking alerts."""

import logging
import webbrowser

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Label, Static

from src.config.settings import Settings
from src.models.deal import DealDetail

logger = logging.getLogger("deal_catalog.ui")


def _price(value: float | None) -> str:
    return f"${value:.2f}" if value is not None else "—"


class DealDetailScreen(ModalScreen[None]):
    """Detail view for one game: prices of the first offer and a Steam link."""

    DEFAULT_CSS = """
    DealDetailScreen {
        align: center middle;
    }
    #detail_dialog {
        width: 70;
        height: auto;
        border: thick $primary;
        background: $surface;
        padding: 1 2;
    }
    #detail_title {
        text-style: bold;
        margin-bottom: 1;
    }
    #detail_prices {
        height: auto;
        margin: 1 0;
    }
    .price_box {
        width: 1fr;
        border: round $panel;
        padding: 0 1;
    }
    #detail_buttons {
        height: auto;
        align-horizontal: center;
    }
    """

    BINDINGS = [Binding("escape", "close", "Close")]

    def __init__(self, detail: DealDetail) -> None:
        super().__init__()
        self.detail = detail

    def compose(self) -> ComposeResult:
        offer = self.detail.best_offer
        retail = offer.retail_price if offer else None
        price = offer.price if offer else None
        store = (
            Settings.store_label(offer.store_id) if offer else "—"
        )

        yield Vertical(
            Label(
                Text(self.detail.info.title or "Untitled"),
                id="detail_title",
            ),
            Static(Text(self.detail.info.thumb, style="dim"), id="detail_thumb"),
            Horizontal(
                Static(
                    Text.assemble(
                        ("Original price\n", "bold"),
                        (_price(retail), "strike"),
                    ),
                    id="detail_retail",
                    classes="price_box",
                ),
                Static(
                    Text.assemble(
                        (f"Sale price ({store})\n", "bold green"),
                        (_price(price), "bold green"),
                    ),
                    id="detail_price",
                    classes="price_box",
                ),
                id="detail_prices",
            ),
            Horizontal(
                Button(
                    "Open in Steam",
                    variant="primary",
                    id="open_steam",
                    disabled=self.detail.steam_url is None,
                ),
                Button("Close", id="close_detail"),
                id="detail_buttons",
            ),
            id="detail_dialog",
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "open_steam" and self.detail.steam_url:
            logger.info("Opening %s", self.detail.steam_url)
            webbrowser.open(self.detail.steam_url)
        elif event.button.id == "close_detail":
            self.dismiss()

    def action_close(self) -> None:
        self.dismiss()


class AlertScreen(ModalScreen[None]):
    """Blocking message the user must acknowledge."""

    DEFAULT_CSS = """
    AlertScreen {
        align: center middle;
    }
    #alert_dialog {
        width: 50;
        height: auto;
        border: thick $error;
        background: $surface;
        padding: 1 2;
    }
    #alert_message {
        margin-bottom: 1;
    }
    """

    BINDINGS = [Binding("escape", "close", "Close")]

    def __init__(self, message: str) -> None:
        super().__init__()
        self.message = message

    def compose(self) -> ComposeResult:
        yield Vertical(
            Label(Text(self.message), id="alert_message"),
            Button("OK", variant="error", id="alert_ok"),
            id="alert_dialog",
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "alert_ok":
            self.dismiss()

    def action_close(self) -> None:
        self.dismiss()
