"""Interactive pager - shows rendered lines one screenful at a time."""

from __future__ import annotations

import logging
from typing import Optional, Protocol, Sequence

from markterm.cli.core.input import InputReader, KeyEvent
from markterm.cli.core.shortcuts import ShortcutRegistry, pager_registry
from markterm.cli.core.terminal import Terminal
from markterm.cli.widgets.base import Rect
from markterm.cli.widgets.status_bar import StatusBarWidget

logger = logging.getLogger(__name__)

FILLER = "~"


class KeySource(Protocol):
    """Anything that can block for the next key event."""

    fd: int

    def read_blocking(self) -> KeyEvent:
        ...


class Pager:
    """
    A ``more``-style pager over pre-rendered lines.
    
    If the viewport has no rows, or every line fits on one page, the
    pager is disabled and simply writes the lines out. Otherwise it takes
    the terminal into raw mode and loops: draw a page, wait for a key,
    move. The scroll offset is always clamped to
    ``0 <= offset <= max(0, total - page_height)``.
    
    ``terminal`` and ``reader`` default to the real terminal and stdin;
    tests pass stand-ins with the same methods.
    """

    def __init__(
        self,
        lines: Sequence[str],
        page_height: int,
        title: str,
        terminal=Terminal,
        reader: Optional[KeySource] = None,
        shortcuts: Optional[ShortcutRegistry] = None,
    ) -> None:
        self.lines = list(lines)
        self.page_height = max(0, page_height)
        self.title = title
        self.terminal = terminal
        self.reader = reader
        self.shortcuts = shortcuts or pager_registry()
        self.status_bar = StatusBarWidget()
        self.offset = 0
        self.running = False

    @property
    def total(self) -> int:
        return len(self.lines)

    @property
    def interactive(self) -> bool:
        """False when there is no room to page or nothing to page through."""
        return self.page_height > 0 and self.total > self.page_height

    @property
    def max_offset(self) -> int:
        return max(0, self.total - self.page_height)

    # -- navigation ---------------------------------------------------------

    def scroll_to(self, offset: int) -> None:
        self.offset = min(max(0, offset), self.max_offset)

    def scroll_by(self, delta: int) -> None:
        self.scroll_to(self.offset + delta)

    def quit(self) -> None:
        self.running = False

    def page_down(self) -> None:
        self.scroll_by(self.page_height)

    def page_up(self) -> None:
        self.scroll_by(-self.page_height)

    def line_down(self) -> None:
        self.scroll_by(1)

    def line_up(self) -> None:
        self.scroll_by(-1)

    def top(self) -> None:
        self.scroll_to(0)

    def bottom(self) -> None:
        self.scroll_to(self.max_offset)

    def half_page_down(self) -> None:
        self.scroll_by(self.page_height // 2)

    def half_page_up(self) -> None:
        self.scroll_by(-(self.page_height // 2))

    def handle_input(self, event: KeyEvent) -> bool:
        """Apply the command bound to a key. Returns False for unmapped keys."""
        shortcut = self.shortcuts.match(event)
        if shortcut is None:
            return False
        getattr(self, shortcut.handler)()
        return True

    # -- drawing ------------------------------------------------------------

    def visible_range(self) -> tuple[int, int]:
        """Half-open ``[start, end)`` slice of lines on the current page."""
        end = min(self.offset + self.page_height, self.total)
        return self.offset, end

    def render_frame(self, term_width: int) -> str:
        """Build one full screen: page lines, filler rows, status bar."""
        start, end = self.visible_range()
        rows = [f"{line}\r\n" for line in self.lines[start:end]]
        rows.extend(f"{FILLER}\r\n" for _ in range(self.page_height - (end - start)))

        self.status_bar.set_position(self.title, self.offset, end, self.total)
        rows.extend(self.status_bar.render(Rect(0, 0, term_width, 1)))
        return "".join(rows)

    def draw(self) -> None:
        # Width is re-read every frame since the terminal may have been resized
        size = self.terminal.size()
        self.terminal.clear()
        self.terminal.write(self.render_frame(size.cols))

    # -- main loop ----------------------------------------------------------

    def run(self) -> None:
        """Show the lines, interactively when they need more than one page."""
        if not self.interactive:
            self.terminal.write("".join(f"{line}\n" for line in self.lines))
            return

        if self.reader is None:
            self.reader = InputReader()

        logger.debug("paging %d lines, %d per page", self.total, self.page_height)
        self.running = True
        with self.terminal.interactive_mode(self.reader.fd):
            while self.running:
                self.draw()
                self.handle_input(self.reader.read_blocking())
        # Leave the shell prompt below the status bar
        self.terminal.write("\r\n")
        logger.debug("pager closed at offset %d", self.offset)
