"""ANSI text utilities - measuring, splitting and truncating styled strings.

Every helper here folds over :func:`iter_tokens`, a single scanner that
splits a string into visible characters and escape runs. An escape run
starts at ``ESC`` and ends at (and includes) the first ASCII letter after
it; an unterminated run swallows the rest of the string.
"""

from __future__ import annotations

from typing import Iterable, Iterator

from markterm.core.constants import ELLIPSIS, ESC, RESET

# Word breaks; non-breaking spaces stay inside words
_BREAKS = " \t\r\n"


def _is_terminator(ch: str) -> bool:
    return ch.isascii() and ch.isalpha()


def iter_tokens(s: str) -> Iterator[tuple[bool, str]]:
    """
    Yield ``(is_escape, text)`` tokens for a styled string.
    
    Visible characters are yielded one at a time; escape runs are
    yielded whole so callers can pass them through untouched.
    """
    i = 0
    n = len(s)
    while i < n:
        if s[i] == ESC:
            j = i + 1
            while j < n and not _is_terminator(s[j]):
                j += 1
            j = min(j + 1, n)
            yield True, s[i:j]
            i = j
        else:
            yield False, s[i]
            i += 1


def visible_len(s: str) -> int:
    """Get visible length of string (excluding ANSI escape codes)."""
    return sum(1 for is_escape, _ in iter_tokens(s) if not is_escape)


def strip_ansi(s: str) -> str:
    """Remove all escape runs, leaving only visible characters."""
    return "".join(text for is_escape, text in iter_tokens(s) if not is_escape)


def apply_style(text: str, codes: Iterable[str], use_color: bool) -> str:
    """
    Wrap text in style codes followed by a reset.
    
    Returns ``text`` unchanged when color is disabled. Existing resets
    inside ``text`` are not taken into account.
    """
    if not use_color:
        return text
    return f"{''.join(codes)}{text}{RESET}"


def truncate(s: str, max_visible: int, use_color: bool) -> str:
    """
    Cut a styled string after ``max_visible`` visible characters.
    
    Escape runs are copied through without counting. The result always
    ends with an ellipsis, preceded by a reset when color is enabled, so
    its visible width is at most ``max_visible + 1``.
    """
    out: list[str] = []
    visible = 0
    for is_escape, text in iter_tokens(s):
        if is_escape:
            out.append(text)
            continue
        if visible >= max_visible:
            break
        out.append(text)
        visible += 1

    if use_color:
        out.append(RESET)
    out.append(ELLIPSIS)
    return "".join(out)


def split_styled_words(s: str) -> list[str]:
    """
    Split a styled string into words at spaces, tabs and newlines.
    
    Escape runs stay attached to the word they sit in (or to the next
    word when they sit between words). Whitespace itself is dropped; the
    wrapper puts single spaces back while packing.
    """
    words: list[str] = []
    current: list[str] = []
    has_visible = False

    for is_escape, text in iter_tokens(s):
        if is_escape:
            current.append(text)
        elif text in _BREAKS:
            if has_visible:
                words.append("".join(current))
                current = []
                has_visible = False
        else:
            current.append(text)
            has_visible = True

    if current:
        if has_visible or not words:
            words.append("".join(current))
        else:
            # Trailing resets belong to the last word, not a word of their own
            words[-1] += "".join(current)
    return words


def pad_to_width(s: str, width: int, char: str = " ") -> str:
    """Pad string with char to reach exactly width visible characters."""
    current = visible_len(s)
    if current >= width:
        return s
    return s + char * (width - current)


def clip(s: str, max_visible: int) -> str:
    """Keep at most ``max_visible`` visible characters, without an ellipsis."""
    out: list[str] = []
    visible = 0
    for is_escape, text in iter_tokens(s):
        if not is_escape:
            if visible >= max_visible:
                break
            visible += 1
        out.append(text)
    return "".join(out)
