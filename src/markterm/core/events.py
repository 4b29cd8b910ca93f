"""Document events - the structural stream consumed by the layout engine.

A parser turns markup into a flat, ordered sequence of these values.
Container elements arrive as matching start/end pairs; leaf content
arrives as single events in between.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class Alignment(Enum):
    """Column alignment declared by a table's delimiter row."""
    NONE = "none"
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


# Block kinds

@dataclass(frozen=True, slots=True)
class Heading:
    level: int = 1


@dataclass(frozen=True, slots=True)
class Paragraph:
    pass


@dataclass(frozen=True, slots=True)
class BlockQuote:
    pass


@dataclass(frozen=True, slots=True)
class CodeBlock:
    """Fenced or indented code; ``language`` is the fence info word, if any."""
    language: Optional[str] = None


@dataclass(frozen=True, slots=True)
class List:
    """A list; ``start`` is set for ordered lists and ``None`` for bullets."""
    start: Optional[int] = None

    @property
    def ordered(self) -> bool:
        return self.start is not None


@dataclass(frozen=True, slots=True)
class ListItem:
    pass


@dataclass(frozen=True, slots=True)
class Table:
    alignments: tuple[Alignment, ...] = ()


@dataclass(frozen=True, slots=True)
class TableHead:
    pass


@dataclass(frozen=True, slots=True)
class TableRow:
    pass


@dataclass(frozen=True, slots=True)
class TableCell:
    pass


BlockKind = Union[
    Heading, Paragraph, BlockQuote, CodeBlock, List, ListItem,
    Table, TableHead, TableRow, TableCell,
]


# Inline kinds

@dataclass(frozen=True, slots=True)
class Emphasis:
    pass


@dataclass(frozen=True, slots=True)
class Strong:
    pass


@dataclass(frozen=True, slots=True)
class Strikethrough:
    pass


@dataclass(frozen=True, slots=True)
class Link:
    url: str = ""


InlineKind = Union[Emphasis, Strong, Strikethrough, Link]


# Events

@dataclass(frozen=True, slots=True)
class StartBlock:
    kind: BlockKind


@dataclass(frozen=True, slots=True)
class EndBlock:
    kind: BlockKind


@dataclass(frozen=True, slots=True)
class StartInline:
    kind: InlineKind


@dataclass(frozen=True, slots=True)
class EndInline:
    kind: InlineKind


@dataclass(frozen=True, slots=True)
class Text:
    text: str


@dataclass(frozen=True, slots=True)
class InlineCode:
    code: str


@dataclass(frozen=True, slots=True)
class SoftBreak:
    pass


@dataclass(frozen=True, slots=True)
class HardBreak:
    pass


@dataclass(frozen=True, slots=True)
class Rule:
    pass


@dataclass(frozen=True, slots=True)
class TaskMarker:
    checked: bool = False


Event = Union[
    StartBlock, EndBlock, StartInline, EndInline,
    Text, InlineCode, SoftBreak, HardBreak, Rule, TaskMarker,
]
