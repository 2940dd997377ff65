# tests/test_settings.py

"""Tests for the Settings configuration class."""

import logging
import unittest
from pathlib import Path

from src.config.settings import Settings


class TestSettings(unittest.TestCase):
    """Verify Settings constants and store registry."""

    def test_max_games_is_fifteen(self) -> None:
        """Every result set is capped at 15 deals."""
        self.assertEqual(Settings.MAX_GAMES, 15)

    def test_initial_store_is_steam(self) -> None:
        """The initial view lists deals from store 1."""
        self.assertEqual(Settings.INITIAL_STORE_ID, "1")

    def test_api_base_url_has_no_trailing_slash(self) -> None:
        """Endpoint paths are joined with a single slash."""
        self.assertTrue(Settings.API_BASE_URL.startswith("http"))
        self.assertFalse(Settings.API_BASE_URL.endswith("/"))

    def test_each_store_has_required_keys(self) -> None:
        """Every store must have id and label keys."""
        for store in Settings.AVAILABLE_STORES:
            with self.subTest(store=store.get("id", "?")):
                self.assertIn("id", store)
                self.assertIn("label", store)

    def test_store_ids_are_unique(self) -> None:
        """No duplicate store ids."""
        ids = [s["id"] for s in Settings.AVAILABLE_STORES]
        self.assertEqual(len(ids), len(set(ids)))

    def test_initial_store_is_registered(self) -> None:
        """The initial store appears in the store registry."""
        ids = {s["id"] for s in Settings.AVAILABLE_STORES}
        self.assertIn(Settings.INITIAL_STORE_ID, ids)

    def test_store_label_known_and_unknown(self) -> None:
        """Known ids map to labels; unknown ids get a generic label."""
        self.assertEqual(Settings.store_label("1"), "Steam")
        self.assertEqual(Settings.store_label("999"), "Store 999")
        self.assertEqual(Settings.store_label(""), "—")

    def test_logging_levels_are_known_names(self) -> None:
        """Configured level names resolve to logging levels."""
        names = [Settings.CONSOLE_LOG_LEVEL, *Settings.LOGGER_LEVELS.values()]
        for name in names:
            with self.subTest(level=name):
                self.assertIsInstance(
                    logging.getLevelName(name.upper()), int
                )

    def test_gateway_has_a_level_floor(self) -> None:
        self.assertIn("deal_catalog.gateway", Settings.LOGGER_LEVELS)

    def test_path_constants_are_paths(self) -> None:
        """Path-typed settings are Path instances."""
        self.assertIsInstance(Settings.BASE_DIR, Path)
        self.assertIsInstance(Settings.LOGS_DIR, Path)

    def test_impersonate_browser_is_string(self) -> None:
        """IMPERSONATE_BROWSER must be a non-empty string."""
        self.assertIsInstance(Settings.IMPERSONATE_BROWSER, str)
        self.assertTrue(len(Settings.IMPERSONATE_BROWSER) > 0)

    def test_default_headers_accept_json(self) -> None:
        """The API is JSON-only."""
        self.assertEqual(
            Settings.DEFAULT_HEADERS["Accept"], "application/json"
        )


if __name__ == "__main__":
    unittest.main()
