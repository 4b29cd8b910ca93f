"""Core TUI infrastructure - terminal I/O, input handling, shortcuts."""

from markterm.cli.core.terminal import Terminal, TerminalSize
from markterm.cli.core.input import InputReader, KeyEvent, Key
from markterm.cli.core.shortcuts import ShortcutDef, ShortcutRegistry, pager_registry

__all__ = [
    "Terminal",
    "TerminalSize",
    "InputReader",
    "KeyEvent",
    "Key",
    "ShortcutDef",
    "ShortcutRegistry",
    "pager_registry",
]
