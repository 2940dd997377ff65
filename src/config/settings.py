# src/config/settings.py

"""Central configuration for the deal_catalog viewer."""

import os
from pathlib import Path

from curl_cffi.requests import BrowserTypeLiteral
from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Central configuration for the deal_catalog viewer."""

    # --- Deals API ---
    API_BASE_URL: str = os.getenv(
        "DEAL_CATALOG_API_URL",
        "https://www.cheapshark.com/api/1.0",
    ).rstrip("/")
    MAX_GAMES: int = 15                 # Hard cap on every result set
    INITIAL_STORE_ID: str = "1"         # Storefront for the initial view

    # --- Transport ---
    IMPERSONATE_BROWSER: BrowserTypeLiteral = "chrome131"
    DEFAULT_HEADERS: dict[str, str] = {
        "Accept": "application/json",
        "Accept-Language": "en-US,en;q=0.9",
    }

    # --- Links ---
    STEAM_APP_URL: str = "https://store.steampowered.com/app/{app_id}"

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    LOGS_DIR: Path = BASE_DIR / "logs"

    # --- Logging ---
    # Stderr level for headless runs; the TUI never logs to the terminal
    CONSOLE_LOG_LEVEL: str = os.getenv("DEAL_CATALOG_LOG_LEVEL", "WARNING")
    # Per-logger floors applied under the deal_catalog root (run file is DEBUG)
    LOGGER_LEVELS: dict[str, str] = {
        "deal_catalog.gateway": os.getenv(
            "DEAL_CATALOG_HTTP_LOG_LEVEL", "INFO"
        ),
        "deal_catalog.filters": "INFO",
    }

    # --- Storefronts (CheapShark store IDs) ---
    AVAILABLE_STORES: list[dict[str, str]] = [
        {"id": "1", "label": "Steam"},
        {"id": "2", "label": "GamersGate"},
        {"id": "3", "label": "GreenManGaming"},
        {"id": "7", "label": "GOG"},
        {"id": "8", "label": "Origin"},
        {"id": "11", "label": "Humble Store"},
        {"id": "13", "label": "Uplay"},
        {"id": "15", "label": "Fanatical"},
        {"id": "23", "label": "GameBillet"},
        {"id": "25", "label": "Epic Games Store"},
    ]

    @classmethod
    def store_label(cls, store_id: str) -> str:
        """Return the display label for a store id."""
        for store in cls.AVAILABLE_STORES:
            if store["id"] == store_id:
                return store["label"]
        return f"Store {store_id}" if store_id else "—"
