"""Status bar widget for the pager's bottom row."""

from __future__ import annotations

from markterm.cli.widgets.base import BaseWidget, Rect
from markterm.core.ansi_text import apply_style, clip, pad_to_width, visible_len
from markterm.core.constants import REVERSE

HELP_LEGEND = " [Space] next  [b] back  [q] quit "


def position_text(title: str, offset: int, end: int, total: int) -> str:
    """Left segment: title, 1-based visible range, total and percentage."""
    # Halves round up
    percentage = int(100 * end / total + 0.5) if total else 100
    return f" {title} | lines {offset + 1}-{end} of {total} ({percentage}%) "


class StatusBarWidget(BaseWidget):
    """Reverse-video bar with position info on the left and help on the right."""

    def __init__(self, help_text: str = HELP_LEGEND) -> None:
        super().__init__()
        self._left_text = ""
        self._help_text = help_text

    def set_position(self, title: str, offset: int, end: int, total: int) -> None:
        self._left_text = position_text(title, offset, end, total)

    def render(self, bounds: Rect) -> list[str]:
        """Render the bar padded (or clipped) to exactly ``bounds.width`` columns."""
        width = bounds.width
        left = pad_to_width(self._left_text, width - visible_len(self._help_text))
        line = clip(left + self._help_text, width)
        return [apply_style(line, (REVERSE,), True)]
