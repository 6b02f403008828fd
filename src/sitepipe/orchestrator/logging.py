from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
import os


LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
ROOT_LOGGER = "sitepipe"

_configured = False


def _ensure_base_logger() -> None:
    global _configured
    if _configured:
        return
    level = os.getenv("SITEPIPE_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format=LOG_FORMAT,
    )
    _configured = True


def configure_logging(level: str | None = None, log_file: Path | None = None) -> None:
    """Adjust the `sitepipe` logger tree once the CLI has parsed its options.

    `level` overrides SITEPIPE_LOG_LEVEL; `log_file` adds a rotating file
    handler that every task logger propagates into.
    """
    _ensure_base_logger()
    root = logging.getLogger(ROOT_LOGGER)
    if level:
        root.setLevel(getattr(logging, level.upper(), logging.INFO))
    # Do not duplicate handlers if already set
    if log_file and not any(
        isinstance(h, RotatingFileHandler) for h in root.handlers
    ):
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(log_file, maxBytes=1_000_000, backupCount=3)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    _ensure_base_logger()
    return logging.getLogger(name)
