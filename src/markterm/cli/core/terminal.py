"""Low-level terminal operations - platform-independent abstraction."""

from __future__ import annotations

import os
import sys
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional

from markterm.core.constants import (
    CLEAR_SCREEN,
    CURSOR_HOME,
    HIDE_CURSOR,
    RESET,
    SHOW_CURSOR,
)

DEFAULT_ROWS = 24
DEFAULT_COLS = 80


@dataclass(frozen=True)
class TerminalSize:
    """Terminal dimensions."""
    rows: int
    cols: int


class Terminal:
    """Terminal I/O abstraction for the pager."""

    @staticmethod
    def size() -> TerminalSize:
        """Get current terminal dimensions (80x24 when unknown)."""
        try:
            size = os.get_terminal_size()
            return TerminalSize(size.lines, size.columns)
        except OSError:
            return TerminalSize(DEFAULT_ROWS, DEFAULT_COLS)

    @staticmethod
    def clear() -> None:
        """Clear screen and move cursor to home."""
        sys.stdout.write(CLEAR_SCREEN + CURSOR_HOME)
        sys.stdout.flush()

    @staticmethod
    def reset() -> None:
        """Reset all terminal attributes."""
        sys.stdout.write(RESET)
        sys.stdout.flush()

    @staticmethod
    def hide_cursor() -> None:
        """Hide the cursor."""
        sys.stdout.write(HIDE_CURSOR)
        sys.stdout.flush()

    @staticmethod
    def show_cursor() -> None:
        """Show the cursor."""
        sys.stdout.write(SHOW_CURSOR)
        sys.stdout.flush()

    @staticmethod
    def write(text: str) -> None:
        """Write text to terminal."""
        sys.stdout.write(text)
        sys.stdout.flush()

    @staticmethod
    @contextmanager
    def raw_mode(fd: Optional[int] = None) -> Iterator[None]:
        """Context manager for raw terminal mode (Unix only)."""
        try:
            import termios
            import tty
        except ImportError:
            # Windows or no termios - just yield
            yield
            return

        if fd is None:
            fd = sys.stdin.fileno()
        old_settings = termios.tcgetattr(fd)
        try:
            tty.setraw(fd)
            yield
        finally:
            termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)

    @staticmethod
    @contextmanager
    def interactive_mode(fd: Optional[int] = None) -> Iterator[None]:
        """Pager mode: raw input and hidden cursor, both restored on exit."""
        with Terminal.raw_mode(fd):
            Terminal.hide_cursor()
            try:
                yield
            finally:
                Terminal.show_cursor()
                Terminal.reset()
