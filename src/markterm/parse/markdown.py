"""Markdown parsing - adapts markdown-it-py tokens into document events.

markdown-it produces a flat list of block tokens with nested ``inline``
tokens carrying their own children. This module flattens both levels
into the start/end event stream the layout engine expects.
"""

from __future__ import annotations

import logging
import re
from typing import Iterator, Optional

from markdown_it import MarkdownIt
from markdown_it.token import Token

from markterm.core import events as ev

logger = logging.getLogger(__name__)

_TASK_PATTERN = re.compile(r"^\[([ xX])\]\s+")

_ALIGNMENTS = {
    "text-align:left": ev.Alignment.LEFT,
    "text-align:center": ev.Alignment.CENTER,
    "text-align:right": ev.Alignment.RIGHT,
}

_SIMPLE_BLOCKS = {
    "blockquote": ev.BlockQuote(),
    "list_item": ev.ListItem(),
    "thead": ev.TableHead(),
    "th": ev.TableCell(),
    "td": ev.TableCell(),
}

_SIMPLE_INLINES = {
    "em": ev.Emphasis(),
    "strong": ev.Strong(),
    "s": ev.Strikethrough(),
}


def create_parser() -> MarkdownIt:
    """CommonMark parser with GFM tables and strikethrough enabled."""
    return MarkdownIt("commonmark").enable(["table", "strikethrough"])


def _split_tag(token_type: str) -> tuple[str, str]:
    """Split ``paragraph_open`` into ``("paragraph", "open")``."""
    base, _, suffix = token_type.rpartition("_")
    return base, suffix


def _table_alignments(tokens: list[Token], start: int) -> tuple[ev.Alignment, ...]:
    """Read column alignments from the header cells following ``table_open``."""
    alignments: list[ev.Alignment] = []
    for token in tokens[start + 1:]:
        if token.type == "th_open":
            style = str(token.attrs.get("style", "")).replace(" ", "")
            alignments.append(_ALIGNMENTS.get(style, ev.Alignment.NONE))
        elif token.type in ("thead_close", "table_close"):
            break
    return tuple(alignments)


class MarkdownEventParser:
    """
    Converts markdown text into a list of document events.
    
    Task-list items (``- [x] done``) are recognised here since markdown-it
    has no core rule for them: a leading ``[ ]``/``[x]`` in the first text
    of a list item becomes a :class:`~markterm.core.events.TaskMarker`.
    """

    def __init__(self, md: Optional[MarkdownIt] = None):
        self.md = md or create_parser()
        self._in_thead = False
        self._item_fresh = False
        # One entry per open markdown-it block token; None when it maps to no event
        self._open_blocks: list[Optional[ev.BlockKind]] = []
        self._links: list[ev.Link] = []

    def parse(self, text: str) -> list[ev.Event]:
        tokens = self.md.parse(text)
        events = list(self._block_events(tokens))
        logger.debug("parsed %d tokens into %d events", len(tokens), len(events))
        return events

    def _block_events(self, tokens: list[Token]) -> Iterator[ev.Event]:
        for index, token in enumerate(tokens):
            t = token.type

            if token.nesting == 1:
                kind = self._open_kind(token, tokens, index)
                self._open_blocks.append(kind)
                if kind is not None:
                    yield ev.StartBlock(kind)
            elif token.nesting == -1:
                if t == "thead_close":
                    self._in_thead = False
                kind = self._open_blocks.pop() if self._open_blocks else None
                if kind is not None:
                    yield ev.EndBlock(kind)
            elif t == "inline":
                yield from self._inline_events(token.children or [])
            elif t in ("fence", "code_block"):
                info = token.info.strip()
                kind = ev.CodeBlock(language=info.split()[0] if info else None)
                yield ev.StartBlock(kind)
                yield ev.Text(token.content)
                yield ev.EndBlock(kind)
            elif t == "hr":
                yield ev.Rule()
            # html_block and anything unknown is dropped

    def _open_kind(self, token: Token, tokens: list[Token], index: int) -> Optional[ev.BlockKind]:
        tag = token.type[: -len("_open")]
        if tag == "heading":
            return ev.Heading(level=int(token.tag[1:]))
        if tag == "paragraph":
            return None if token.hidden else ev.Paragraph()
        if tag == "bullet_list":
            return ev.List()
        if tag == "ordered_list":
            return ev.List(start=int(token.attrs.get("start", 1)))
        if tag == "table":
            return ev.Table(alignments=_table_alignments(tokens, index))
        if tag == "thead":
            self._in_thead = True
        elif tag == "tr":
            # Header cells belong to TableHead directly, without a row
            return None if self._in_thead else ev.TableRow()
        elif tag == "list_item":
            self._item_fresh = True
        return _SIMPLE_BLOCKS.get(tag)

    def _inline_events(self, children: list[Token]) -> Iterator[ev.Event]:
        check_task = self._item_fresh
        self._item_fresh = False

        for position, child in enumerate(children):
            t = child.type
            if t == "text":
                content = child.content
                if check_task and position == 0:
                    match = _TASK_PATTERN.match(content)
                    if match:
                        yield ev.TaskMarker(checked=match.group(1) != " ")
                        content = content[match.end():]
                if content:
                    yield ev.Text(content)
            elif t == "code_inline":
                yield ev.InlineCode(child.content)
            elif t == "softbreak":
                yield ev.SoftBreak()
            elif t == "hardbreak":
                yield ev.HardBreak()
            elif t == "image":
                # Alt text stands in for the image
                yield from self._inline_events(child.children or [])
            elif t == "link_open":
                link = ev.Link(url=str(child.attrs.get("href", "")))
                self._links.append(link)
                yield ev.StartInline(link)
            elif t == "link_close":
                yield ev.EndInline(self._links.pop() if self._links else ev.Link())
            else:
                tag, suffix = _split_tag(t)
                kind = _SIMPLE_INLINES.get(tag)
                if kind is not None and suffix == "open":
                    yield ev.StartInline(kind)
                elif kind is not None and suffix == "close":
                    yield ev.EndInline(kind)


def parse(text: str) -> list[ev.Event]:
    """Parse markdown text into document events."""
    return MarkdownEventParser().parse(text)
