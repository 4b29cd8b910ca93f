"""Color themes for rendered documents.

A theme only chooses escape codes; whether they are emitted at all is
decided by the ``use_color`` flag passed to the renderer.
"""

from __future__ import annotations

from dataclasses import dataclass

from markterm.core import constants as c


@dataclass(frozen=True)
class Theme:
    """Style codes for each styled element of a document."""
    name: str
    heading1: tuple[str, ...]
    heading2: tuple[str, ...]
    heading3: tuple[str, ...]
    heading_other: tuple[str, ...]
    list_marker: tuple[str, ...]
    code_span: tuple[str, ...]
    task_checked: tuple[str, ...]
    muted: tuple[str, ...] = (c.DIM,)

    def heading_codes(self, level: int) -> tuple[str, ...]:
        """Return style codes for a heading level (levels past 3 share one style)."""
        if level <= 1:
            return self.heading1
        if level == 2:
            return self.heading2
        if level == 3:
            return self.heading3
        return self.heading_other


DARK = Theme(
    name="dark",
    heading1=(c.BOLD, c.UNDERLINE, c.FG_BRIGHT_WHITE),
    heading2=(c.BOLD, c.FG_BRIGHT_CYAN),
    heading3=(c.BOLD, c.FG_BRIGHT_YELLOW),
    heading_other=(c.BOLD,),
    list_marker=(c.FG_CYAN,),
    code_span=(c.BG_GREY_DARK,),
    task_checked=(c.FG_GREEN, c.BOLD),
)

LIGHT = Theme(
    name="light",
    heading1=(c.BOLD, c.UNDERLINE, c.FG_BLACK),
    heading2=(c.BOLD, c.FG_BLUE),
    heading3=(c.BOLD, c.FG_MAGENTA),
    heading_other=(c.BOLD,),
    list_marker=(c.FG_BLUE,),
    code_span=(c.BG_GREY_LIGHT,),
    task_checked=(c.FG_GREEN, c.BOLD),
)

THEMES: dict[str, Theme] = {
    DARK.name: DARK,
    LIGHT.name: LIGHT,
}
