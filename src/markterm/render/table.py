"""Box-drawn table rendering for the layout engine."""

from __future__ import annotations

from markterm.core import constants as c
from markterm.core.ansi_text import apply_style
from markterm.core.theme import DARK, Theme

MIN_COLUMN_WIDTH = 3
TABLE_MARGIN = "  "


def column_widths(rows: list[list[str]]) -> list[int]:
    """Widest cell per column, never narrower than ``MIN_COLUMN_WIDTH``."""
    num_cols = max((len(row) for row in rows), default=0)
    widths = [MIN_COLUMN_WIDTH] * num_cols
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))
    return widths


def render_table(rows: list[list[str]], use_color: bool, theme: Theme = DARK) -> list[str]:
    """
    Render finalized table rows as bordered lines.
    
    The first row is treated as the header: it is bold and followed by a
    separator. Cells are left-justified plain text. Returns no lines when
    there is nothing to draw.
    """
    widths = column_widths(rows)
    if not widths:
        return []

    def muted(text: str) -> str:
        return apply_style(text, theme.muted, use_color)

    def border(left: str, mid: str, right: str) -> str:
        segments = [c.BOX["h"] * (w + 2) for w in widths]
        return muted(f"{TABLE_MARGIN}{left}{mid.join(segments)}{right}")

    if use_color:
        edge_left = f"{TABLE_MARGIN}{muted(c.BOX['v'])} "
        divider = f" {muted(c.BOX['v'])} "
        edge_right = f" {muted(c.BOX['v'])}"
    else:
        edge_left = f"{TABLE_MARGIN}| "
        divider = " | "
        edge_right = " |"

    lines = [border(c.BOX["top_left"], c.BOX["top_mid"], c.BOX["top_right"])]

    for row_idx, row in enumerate(rows):
        cells: list[str] = []
        for i, width in enumerate(widths):
            cell = row[i] if i < len(row) else ""
            padded = cell.ljust(width)
            if row_idx == 0:
                padded = apply_style(padded, (c.BOLD,), use_color)
            cells.append(padded)
        lines.append(edge_left + divider.join(cells) + edge_right)

        if row_idx == 0:
            lines.append(border(c.BOX["mid_left"], c.BOX["mid_mid"], c.BOX["mid_right"]))

    lines.append(border(c.BOX["bot_left"], c.BOX["bot_mid"], c.BOX["bot_right"]))
    return lines
