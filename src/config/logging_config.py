# src/config/logging_config.py

"""Per-run logging for deal_catalog.

Each launch writes one ``logs/run_<timestamp>.log`` file that collects every
``deal_catalog.*`` logger (gateway, pipeline, filters, ui, cli).  Headless
runs also echo records at ``Settings.CONSOLE_LOG_LEVEL`` to stderr, which
keeps stdout free for JSON.  The TUI gets no console handler because
Textual owns the terminal while it runs.

Noisy loggers are held to the floors in ``Settings.LOGGER_LEVELS``; the
gateway, for instance, logs every request URL at DEBUG and only reaches the
run file when ``DEAL_CATALOG_HTTP_LOG_LEVEL=DEBUG``.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from src.config.settings import Settings

_FILE_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | %(funcName)s:%(lineno)d | "
    "%(message)s"
)

_CONSOLE_FORMAT = "%(levelname)s %(name)s: %(message)s"

_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

ROOT_LOGGER_NAME = "deal_catalog"


def resolve_level(name: str, default: int = logging.WARNING) -> int:
    """Turn a level name such as ``"info"`` into its numeric value.

    Unknown names fall back to *default* so a typo in ``.env`` never stops
    the app from starting.
    """
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else default


def _existing_run_file(root_logger: logging.Logger) -> Path | None:
    for handler in root_logger.handlers:
        if isinstance(handler, logging.FileHandler):
            return Path(handler.baseFilename)
    return None


def setup_logging(console: bool = True) -> Path:
    """Initialise the ``deal_catalog`` logger tree for the current run.

    Args:
        console: Attach a stderr handler.  Pass ``False`` for the TUI.

    Returns:
        The path of this run's log file.  Repeated calls return the file
        opened by the first call and add no handlers.
    """
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    existing = _existing_run_file(root_logger)
    if existing is not None:
        return existing

    logs_dir: Path = Settings.LOGS_DIR
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = logs_dir / f"run_{timestamp}.log"

    root_logger.setLevel(logging.DEBUG)

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(_FILE_FORMAT, datefmt=_DATE_FORMAT)
    )
    root_logger.addHandler(file_handler)

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(resolve_level(Settings.CONSOLE_LOG_LEVEL))
        console_handler.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
        root_logger.addHandler(console_handler)

    for name, level in Settings.LOGGER_LEVELS.items():
        logging.getLogger(name).setLevel(
            resolve_level(level, default=logging.INFO)
        )

    root_logger.info(
        "Logging initialised (console=%s), log file: %s", console, log_file
    )
    return log_file
