"""Keyboard shortcut registry for the pager.

Shortcuts are defined with keys, labels, descriptions and handler names,
so the key table lives in one place and doubles as the help listing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from markterm.cli.core.input import Key, KeyEvent


@dataclass
class ShortcutDef:
    """Definition of a keyboard shortcut.
    
    Attributes:
        id: Unique identifier for the shortcut
        keys: Keys/chars that trigger this shortcut
        label: Short label (e.g., "Next page")
        description: Longer description for the help listing
        handler: Name of the handler method to call
    """
    id: str
    keys: list[str | Key]
    label: str
    description: str
    handler: str = ""

    def matches(self, event: KeyEvent) -> bool:
        """Check if a key event matches this shortcut."""
        for key in self.keys:
            if isinstance(key, Key):
                if event.key == key:
                    return True
            elif event.is_char and event.char == key:
                return True
        return False

    @property
    def key_display(self) -> str:
        """Get display string for the keys."""
        return "/".join(_key_to_display(key) for key in self.keys)


def _key_to_display(key: str | Key) -> str:
    """Convert a key to its display string."""
    if isinstance(key, str):
        return "Space" if key == " " else key
    display_map = {
        Key.UP: "↑",
        Key.DOWN: "↓",
        Key.ENTER: "Enter",
        Key.ESCAPE: "Esc",
        Key.HOME: "Home",
        Key.END: "End",
        Key.PAGE_UP: "PgUp",
        Key.PAGE_DOWN: "PgDn",
        Key.CTRL_C: "Ctrl-C",
        Key.CTRL_F: "Ctrl-F",
    }
    return display_map.get(key, key.name)


class ShortcutRegistry:
    """Ordered collection of shortcuts; the first match wins."""

    def __init__(self) -> None:
        self._shortcuts: dict[str, ShortcutDef] = {}

    def register(self, shortcut: ShortcutDef) -> None:
        """Register a shortcut definition."""
        self._shortcuts[shortcut.id] = shortcut

    def get(self, shortcut_id: str) -> Optional[ShortcutDef]:
        return self._shortcuts.get(shortcut_id)

    def match(self, event: KeyEvent) -> Optional[ShortcutDef]:
        """Find the shortcut matching a key event, if any."""
        for shortcut in self._shortcuts.values():
            if shortcut.matches(event):
                return shortcut
        return None

    def all(self) -> list[ShortcutDef]:
        return list(self._shortcuts.values())


PAGER_SHORTCUTS = (
    ShortcutDef("quit", ["q", Key.ESCAPE, Key.CTRL_C], "Quit",
                "Leave the pager", "quit"),
    ShortcutDef("page_down", [" ", Key.PAGE_DOWN, Key.CTRL_F], "Next page",
                "Scroll forward one page", "page_down"),
    ShortcutDef("page_up", ["b", Key.PAGE_UP], "Previous page",
                "Scroll back one page", "page_up"),
    ShortcutDef("line_down", [Key.ENTER, Key.DOWN, "j"], "Next line",
                "Scroll forward one line", "line_down"),
    ShortcutDef("line_up", [Key.UP, "k"], "Previous line",
                "Scroll back one line", "line_up"),
    ShortcutDef("top", ["g", Key.HOME], "Top",
                "Jump to the first line", "top"),
    ShortcutDef("bottom", ["G", Key.END], "Bottom",
                "Jump to the last page", "bottom"),
    ShortcutDef("half_down", ["d"], "Half page down",
                "Scroll forward half a page", "half_page_down"),
    ShortcutDef("half_up", ["u"], "Half page up",
                "Scroll back half a page", "half_page_up"),
)


def pager_registry() -> ShortcutRegistry:
    """Registry with the default pager key bindings."""
    registry = ShortcutRegistry()
    for shortcut in PAGER_SHORTCUTS:
        registry.register(shortcut)
    return registry
