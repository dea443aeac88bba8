"""Logging helpers shared across the order form."""
from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Optional

ROOT_LOGGER_NAME = "order_form"
LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"


def get_logger(name: str = "") -> logging.Logger:
    """Return a logger under the ``order_form`` namespace."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}" if name else ROOT_LOGGER_NAME)


def configure_logging(log_file: Optional[str] = None, level: str = "INFO") -> logging.Logger:
    """
    Install console + rotating file handlers on the package root logger.

    Streamlit re-executes the script on every interaction, so handlers are only
    added the first time. A log file that cannot be opened leaves console-only
    logging in place.
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(level)
    if getattr(root, "_order_form_configured", False):
        return root

    formatter = logging.Formatter(LOG_FORMAT)
    console = logging.StreamHandler()
    console.setFormatter(formatter)
    root.addHandler(console)

    if log_file:
        try:
            path = Path(log_file)
            path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(path, maxBytes=1_000_000, backupCount=3, encoding="utf-8")
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)
        except OSError as exc:
            root.warning("File logging disabled, console only: %s", exc)

    root.propagate = False
    root._order_form_configured = True
    return root


def start_section(logger: logging.Logger, title: str) -> None:
    separator = "=" * 50
    logger.info(separator)
    logger.info(title)
    logger.info(separator)


def recent_log_lines(log_file: str, lines: int = 50) -> List[str]:
    path = Path(log_file)
    if not path.is_file():
        return []
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        content = f.read().splitlines()
    return content[-lines:]


__all__ = ["get_logger", "configure_logging", "start_section", "recent_log_lines", "ROOT_LOGGER_NAME"]
