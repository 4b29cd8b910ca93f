"""Core types - styling constants, ANSI text helpers, document events, themes."""

from markterm.core.ansi_text import (
    apply_style,
    clip,
    iter_tokens,
    pad_to_width,
    split_styled_words,
    strip_ansi,
    truncate,
    visible_len,
)
from markterm.core.theme import DARK, LIGHT, THEMES, Theme

__all__ = [
    "apply_style",
    "clip",
    "iter_tokens",
    "pad_to_width",
    "split_styled_words",
    "strip_ansi",
    "truncate",
    "visible_len",
    "Theme",
    "DARK",
    "LIGHT",
    "THEMES",
]
