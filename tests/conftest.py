# tests/conftest.py

"""Shared pytest fixtures for all deal_catalog tests."""

import logging
from collections.abc import Generator
from pathlib import Path

import pytest

from src.config.settings import Settings


@pytest.fixture(autouse=True)
def isolated_logs_dir(tmp_path: Path) -> Generator[Path, None, None]:
    """Point Settings.LOGS_DIR at a temp dir so runs never write to logs/."""
    original = Settings.LOGS_DIR
    logs_dir = tmp_path / "logs"
    Settings.LOGS_DIR = logs_dir
    yield logs_dir
    Settings.LOGS_DIR = original
    root_logger = logging.getLogger("deal_catalog")
    for handler in list(root_logger.handlers):
        handler.close()
        root_logger.removeHandler(handler)
    for name in Settings.LOGGER_LEVELS:
        logging.getLogger(name).setLevel(logging.NOTSET)
