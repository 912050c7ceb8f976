"""Logging setup for applications embedding the engine. Library modules only call logging.getLogger(__name__)."""

import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """Attach a stream handler to the `src` logger tree. Safe to call more than once."""
    if level is None:
        from src.core.config import get_settings

        level = get_settings().log_level

    root = logging.getLogger("src")
    root.setLevel(level)
    if not any(getattr(h, "_tictactoe", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._tictactoe = True  # type: ignore[attr-defined]
        root.addHandler(handler)
