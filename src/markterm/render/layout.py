"""Layout engine - turns document events into styled, width-limited lines."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from markterm.core import constants as c
from markterm.core import events as ev
from markterm.core.ansi_text import apply_style, split_styled_words, truncate, visible_len
from markterm.core.theme import DARK, Theme
from markterm.render.table import render_table

logger = logging.getLogger(__name__)


@dataclass
class ListContext:
    """One open list: ``number`` is the next item number for ordered lists."""
    depth: int
    number: Optional[int] = None

    @property
    def ordered(self) -> bool:
        return self.number is not None


class LayoutEngine:
    """
    Stateful renderer that consumes document events into display lines.
    
    Text is accumulated into a pending line and only wrapped (or
    truncated) when the line is flushed, so style changes in the middle
    of a sentence never force a break. Each instance handles exactly one
    document; use :func:`render` for the one-shot form.
    """

    def __init__(
        self,
        width: int,
        use_color: bool = False,
        no_wrap: bool = False,
        theme: Theme = DARK,
    ):
        self.width = max(0, width)
        self.use_color = use_color
        self.no_wrap = no_wrap
        self.theme = theme

        # Output
        self.lines: list[str] = []
        self.current_line = ""
        self._marker_pending = False

        # Block state
        self.indent = 0
        self.heading: Optional[int] = None
        self.in_code_block = False
        self.blockquote_depth = 0
        self.list_stack: list[ListContext] = []

        # Inline state
        self.bold = False
        self.italic = False
        self.strikethrough = False
        self.link_url: Optional[str] = None

        # Table state
        self.in_table_cell = False
        self.table_row: list[str] = []
        self.table_cell_buf = ""
        self.table_rows: list[list[str]] = []
        self.table_alignments: tuple[ev.Alignment, ...] = ()

    # -- public API ---------------------------------------------------------

    def feed(self, events: Iterable[ev.Event]) -> "LayoutEngine":
        """Process every event in order."""
        for event in events:
            self.handle(event)
        return self

    def finish(self) -> list[str]:
        """Flush whatever is still pending and return the finished lines."""
        self.flush()
        return self.lines

    def handle(self, event: ev.Event) -> None:
        """Dispatch a single event to its handler."""
        if isinstance(event, ev.StartBlock):
            self._start_block(event.kind)
        elif isinstance(event, ev.EndBlock):
            self._end_block(event.kind)
        elif isinstance(event, ev.StartInline):
            self._start_inline(event.kind)
        elif isinstance(event, ev.EndInline):
            self._end_inline(event.kind)
        elif isinstance(event, ev.Text):
            self._text(event.text)
        elif isinstance(event, ev.InlineCode):
            self._inline_code(event.code)
        elif isinstance(event, ev.SoftBreak):
            if not self.in_code_block:
                self.current_line += " "
        elif isinstance(event, ev.HardBreak):
            self.flush()
        elif isinstance(event, ev.Rule):
            self._rule()
        elif isinstance(event, ev.TaskMarker):
            self._task_marker(event.checked)

    # -- line emission ------------------------------------------------------

    def push_line(self, line: str) -> None:
        self.lines.append(line)

    def push_blank(self) -> None:
        """Flush pending text, then add a blank line unless one is already last."""
        self.flush()
        if not self.lines or self.lines[-1] != "":
            self.lines.append("")

    def line_prefix(self) -> str:
        """Blockquote marker (if any) followed by the list indent."""
        prefix = ""
        if self.blockquote_depth > 0:
            if self.use_color:
                prefix += f"{c.DIM}  {c.BOX['v']} {c.RESET}"
            else:
                prefix += "  | "
        return prefix + " " * self.indent

    def flush(self) -> None:
        """Wrap (or truncate) the pending line into finished lines."""
        if not self.current_line:
            return
        text = self.current_line
        self.current_line = ""
        self._marker_pending = False

        prefix = self.line_prefix()
        available = max(0, self.width - visible_len(prefix))

        if available == 0:
            self.lines.append(prefix + text)
            return

        if self.no_wrap:
            full = prefix + text
            if visible_len(full) <= self.width:
                self.lines.append(full)
            else:
                self.lines.append(truncate(full, self.width - 1, self.use_color))
            return

        line_buf = prefix
        line_visible = 0
        for word in split_styled_words(text):
            word_visible = visible_len(word)
            if line_visible == 0:
                # First word always fits, even when it overflows
                line_buf += word
                line_visible = word_visible
            elif line_visible + 1 + word_visible <= available:
                line_buf += " " + word
                line_visible += 1 + word_visible
            else:
                self.lines.append(line_buf)
                line_buf = prefix + word
                line_visible = word_visible

        if line_visible > 0 or line_buf != prefix:
            self.lines.append(line_buf)

    # -- styling ------------------------------------------------------------

    def _style_codes(self) -> list[str]:
        codes: list[str] = []
        if self.heading is not None:
            codes.extend(self.theme.heading_codes(self.heading))
        if self.bold:
            codes.append(c.BOLD)
        if self.italic:
            codes.append(c.ITALIC)
        if self.strikethrough:
            codes.append(c.STRIKETHROUGH)
        return codes

    def _muted(self, text: str) -> str:
        return apply_style(text, self.theme.muted, self.use_color)

    # -- block handlers -----------------------------------------------------

    def _start_block(self, kind: ev.BlockKind) -> None:
        if isinstance(kind, ev.Heading):
            self.push_blank()
            self.heading = kind.level
        elif isinstance(kind, ev.Paragraph):
            if self._marker_pending:
                # First paragraph of a loose list item shares the marker line
                self._marker_pending = False
            elif not self.in_code_block:
                self.push_blank()
        elif isinstance(kind, ev.BlockQuote):
            self.push_blank()
            self.blockquote_depth += 1
        elif isinstance(kind, ev.CodeBlock):
            self.push_blank()
            self.in_code_block = True
            if kind.language:
                label = f"  {c.BOX['round_top']}{c.BOX['h']} {kind.language} "
            else:
                label = f"  {c.BOX['round_top']}{c.BOX['h'] * 3}"
            self.push_line(self._muted(label))
        elif isinstance(kind, ev.List):
            # Parent item text keeps its own indent
            self.flush()
            if not self.list_stack:
                self.push_blank()
            depth = len(self.list_stack)
            self.list_stack.append(ListContext(depth=depth, number=kind.start))
            self.indent = (depth + 1) * 2
        elif isinstance(kind, ev.ListItem):
            self._start_item()
        elif isinstance(kind, ev.Table):
            self.push_blank()
            self.table_alignments = kind.alignments
            self.table_rows = []
        elif isinstance(kind, (ev.TableHead, ev.TableRow)):
            self.table_row = []
        elif isinstance(kind, ev.TableCell):
            self.in_table_cell = True
            self.table_cell_buf = ""

    def _end_block(self, kind: ev.BlockKind) -> None:
        if isinstance(kind, ev.Heading):
            self.flush()
            self.heading = None
        elif isinstance(kind, (ev.Paragraph, ev.ListItem)):
            self.flush()
        elif isinstance(kind, ev.BlockQuote):
            self.flush()
            self.blockquote_depth = max(0, self.blockquote_depth - 1)
        elif isinstance(kind, ev.CodeBlock):
            self.push_line(self._muted(f"  {c.BOX['round_bot']}{c.BOX['h'] * 3}"))
            self.in_code_block = False
        elif isinstance(kind, ev.List):
            if self.list_stack:
                self.list_stack.pop()
            self.indent = len(self.list_stack) * 2
            if not self.list_stack:
                self.push_blank()
        elif isinstance(kind, ev.Table):
            self.lines.extend(render_table(self.table_rows, self.use_color, self.theme))
            self.table_rows = []
            self.table_alignments = ()
        elif isinstance(kind, (ev.TableHead, ev.TableRow)):
            self.table_rows.append(self.table_row)
            self.table_row = []
        elif isinstance(kind, ev.TableCell):
            self.table_row.append(self.table_cell_buf)
            self.table_cell_buf = ""
            self.in_table_cell = False

    def _start_item(self) -> None:
        self.flush()
        context = self.list_stack[-1] if self.list_stack else None
        if context is None:
            marker = c.BULLETS[0]
        elif context.number is not None:
            marker = f"{context.number}. "
            context.number += 1
        else:
            marker = c.BULLETS[min(context.depth, len(c.BULLETS) - 1)]
        # flush() adds the prefix, so only the marker is seeded here
        self.current_line = apply_style(marker, self.theme.list_marker, self.use_color)
        self._marker_pending = True

    # -- inline handlers ----------------------------------------------------

    def _start_inline(self, kind: ev.InlineKind) -> None:
        if isinstance(kind, ev.Emphasis):
            self.italic = True
        elif isinstance(kind, ev.Strong):
            self.bold = True
        elif isinstance(kind, ev.Strikethrough):
            self.strikethrough = True
        elif isinstance(kind, ev.Link):
            self.link_url = kind.url

    def _end_inline(self, kind: ev.InlineKind) -> None:
        if isinstance(kind, ev.Emphasis):
            self.italic = False
        elif isinstance(kind, ev.Strong):
            self.bold = False
        elif isinstance(kind, ev.Strikethrough):
            self.strikethrough = False
        elif isinstance(kind, ev.Link):
            if self.link_url is not None and self.in_table_cell:
                self.table_cell_buf += f" ({self.link_url})"
            elif self.link_url is not None:
                self.current_line += self._muted(f" ({self.link_url})")
            self.link_url = None

    def _text(self, text: str) -> None:
        if self.in_code_block:
            marker = self._muted(f"  {c.BOX['v']} ") if self.use_color else "  | "
            for line in text.splitlines():
                self.push_line(marker + line)
            return

        if self.in_table_cell:
            self.table_cell_buf += text
            return

        self.current_line += apply_style(text, self._style_codes(), self.use_color)

    def _inline_code(self, code: str) -> None:
        if self.in_table_cell:
            self.table_cell_buf += code
            return
        if self.use_color:
            self.current_line += apply_style(f" {code} ", self.theme.code_span, True)
        else:
            self.current_line += f"`{code}`"

    def _rule(self) -> None:
        self.push_blank()
        if self.width > 0:
            self.push_line(self._muted(c.BOX["h"] * self.width))
        self.push_blank()

    def _task_marker(self, checked: bool) -> None:
        if checked:
            marker = apply_style(f"[{c.CHECK_MARK}]", self.theme.task_checked, self.use_color)
        else:
            marker = self._muted("[ ]")
        self.current_line += f"{marker} "


def render(
    events: Iterable[ev.Event],
    width: int,
    use_color: bool = False,
    no_wrap: bool = False,
    theme: Theme = DARK,
) -> list[str]:
    """
    Render document events into display lines.
    
    Args:
        events: Ordered document events, consumed once
        width: Target line width in terminal columns
        use_color: Emit ANSI style codes
        no_wrap: Truncate long lines with an ellipsis instead of wrapping
        theme: Style codes to use when color is enabled
    """
    engine = LayoutEngine(width, use_color=use_color, no_wrap=no_wrap, theme=theme)
    lines = engine.feed(events).finish()
    logger.debug("rendered %d lines at width %d", len(lines), engine.width)
    return lines
