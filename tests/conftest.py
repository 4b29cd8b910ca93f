"""Shared fixtures: a recording terminal and a scripted key source."""

from contextlib import contextmanager
from typing import Iterable, Iterator, Optional

import pytest

from markterm.cli.core.input import Key, KeyEvent
from markterm.cli.core.terminal import TerminalSize


class FakeTerminal:
    """Records writes and interactive-mode entry/exit instead of touching a tty."""

    def __init__(self, rows: int = 10, cols: int = 80) -> None:
        self.rows = rows
        self.cols = cols
        self.output: list[str] = []
        self.clears = 0
        self.acquired = 0
        self.released = 0

    def size(self) -> TerminalSize:
        return TerminalSize(self.rows, self.cols)

    def clear(self) -> None:
        self.clears += 1

    def write(self, text: str) -> None:
        self.output.append(text)

    @contextmanager
    def interactive_mode(self, fd: Optional[int] = None) -> Iterator[None]:
        self.acquired += 1
        try:
            yield
        finally:
            self.released += 1

    @property
    def text(self) -> str:
        return "".join(self.output)


class ScriptedReader:
    """Hands out a fixed sequence of key events, then behaves like a closed input."""

    fd = -1

    def __init__(self, keys: Iterable[object]) -> None:
        self.events = [to_event(k) for k in keys]

    def read_blocking(self) -> KeyEvent:
        if not self.events:
            raise EOFError("script exhausted")
        return self.events.pop(0)


def to_event(key: object) -> KeyEvent:
    """Turn ``"q"`` or ``Key.UP`` into the matching KeyEvent."""
    if isinstance(key, KeyEvent):
        return key
    if isinstance(key, Key):
        return KeyEvent(key=key)
    return KeyEvent(char=str(key), raw=str(key))


@pytest.fixture
def fake_terminal() -> FakeTerminal:
    return FakeTerminal()


@pytest.fixture
def doc_lines() -> list[str]:
    """Thirty numbered lines, enough for several pages."""
    return [f"line {i}" for i in range(1, 31)]
