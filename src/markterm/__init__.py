"""
markterm: render markdown in the terminal

Turns markdown into styled, word-wrapped terminal lines and pages
through them with ``less``-style keys.

Quick Start:
    >>> import markterm
    >>> for line in markterm.render_markdown("# Hello", width=40):
    ...     print(line)

Features:
    - Headings, emphasis, links, lists, task lists, block quotes
    - Boxed code blocks and tables
    - ANSI-aware word wrapping or truncation with an ellipsis
    - Dark, light and colorless themes (respects NO_COLOR)
    - Built-in pager with status bar
"""

__version__ = "0.1.0"

from markterm.core.theme import DARK, LIGHT, Theme
from markterm.parse.markdown import parse
from markterm.render.layout import LayoutEngine, render


def render_markdown(
    text: str,
    width: int = 80,
    use_color: bool = False,
    no_wrap: bool = False,
    theme: Theme = DARK,
) -> list[str]:
    """Parse and render markdown text in one call."""
    return render(parse(text), width, use_color=use_color, no_wrap=no_wrap, theme=theme)


__all__ = [
    "__version__",
    "parse",
    "render",
    "render_markdown",
    "LayoutEngine",
    "Theme",
    "DARK",
    "LIGHT",
]
