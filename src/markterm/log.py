"""Logging setup - stdlib logging routed through rich on stderr."""

from __future__ import annotations

import logging
import os
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "markterm"
DEFAULT_LEVEL = "WARNING"

_configured = False


def _parse_level(raw: str) -> int:
    level = logging.getLevelName(str(raw or DEFAULT_LEVEL).strip().upper())
    return level if isinstance(level, int) else logging.WARNING


def configure(level: Optional[str] = None) -> int:
    """
    Attach a RichHandler to the ``markterm`` logger.
    
    ``level`` falls back to ``$MARKTERM_LOG_LEVEL`` and then WARNING.
    Repeated calls only adjust the level. Returns the effective level.
    """
    global _configured
    resolved = _parse_level(level or os.environ.get("MARKTERM_LOG_LEVEL", DEFAULT_LEVEL))

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(resolved)
    if not _configured:
        handler = RichHandler(
            console=Console(stderr=True),
            show_time=False,
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(handler)
        logger.propagate = False
        _configured = True
    return resolved
