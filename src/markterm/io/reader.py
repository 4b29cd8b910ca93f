"""Load markdown sources from disk or stdin."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TextIO

from markterm.errors import InputUnavailableError

logger = logging.getLogger(__name__)

STDIN_NAME = "-"
STDIN_TITLE = "(stdin)"


def read_text(path: str | Path) -> str:
    """
    Read a markdown file from disk.
    
    Tries UTF-8 (with and without BOM) before falling back to Latin-1,
    so any byte sequence decodes. Raises InputUnavailableError when the
    file cannot be opened or read.
    """
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise InputUnavailableError(str(path), e.strerror or str(e)) from e

    try:
        text = data.decode("utf-8-sig")
    except UnicodeDecodeError:
        text = data.decode("latin-1")
    logger.debug("read %s (%d bytes)", path, len(data))
    return text


def read_stream(stream: TextIO, name: str = STDIN_TITLE) -> str:
    """Read everything from an open text stream."""
    try:
        return stream.read()
    except (OSError, UnicodeDecodeError) as e:
        raise InputUnavailableError(name, str(e)) from e


def load(source: str | Path) -> str:
    """Load markdown from a path, or from stdin when ``source`` is ``-``."""
    if str(source) == STDIN_NAME:
        return read_stream(sys.stdin)
    return read_text(source)


def source_title(source: str | Path) -> str:
    """Title shown in the pager status bar for a source."""
    return STDIN_TITLE if str(source) == STDIN_NAME else str(source)
