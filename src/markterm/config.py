"""Render configuration resolved from CLI options and the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from markterm.core.theme import DARK, LIGHT, THEMES, Theme

# Columns kept free on the right when the width comes from the terminal
RENDER_MARGIN = 2

THEME_CHOICES = ("auto", "dark", "light", "none")

# COLORFGBG background indices that mean a light terminal
_LIGHT_BACKGROUNDS = {"7", "15"}


@dataclass(frozen=True)
class RenderOptions:
    """Everything the layout engine needs besides the events."""
    width: int
    color: bool
    no_wrap: bool = False
    theme: Theme = DARK


def detect_theme(environ: Mapping[str, str]) -> Theme:
    """Guess dark vs light from ``COLORFGBG`` (``"fg;bg"``), defaulting to dark."""
    colorfgbg = environ.get("COLORFGBG", "")
    background = colorfgbg.rsplit(";", 1)[-1] if colorfgbg else ""
    return LIGHT if background in _LIGHT_BACKGROUNDS else DARK


def resolve_options(
    width: Optional[int] = None,
    theme: Optional[str] = None,
    no_wrap: bool = False,
    term_cols: int = 80,
    environ: Optional[Mapping[str, str]] = None,
) -> RenderOptions:
    """
    Combine explicit options, terminal size and environment.
    
    - ``width`` overrides the terminal; otherwise the terminal width minus
      ``RENDER_MARGIN`` is used.
    - ``theme`` defaults to ``$MARKTERM_THEME`` and then ``auto``.
    - ``none`` or a non-empty ``$NO_COLOR`` turns color off.
    """
    env = os.environ if environ is None else environ

    name = (theme or env.get("MARKTERM_THEME") or "auto").strip().lower()
    if name not in THEME_CHOICES:
        raise ValueError(f"Unknown theme: {name!r} (expected one of {', '.join(THEME_CHOICES)})")

    color = name != "none" and not env.get("NO_COLOR")
    if name in THEMES:
        resolved = THEMES[name]
    else:
        resolved = detect_theme(env)

    if width is None:
        width = term_cols - RENDER_MARGIN

    return RenderOptions(
        width=max(0, width),
        color=color,
        no_wrap=no_wrap,
        theme=resolved,
    )
