"""Reusable TUI widgets."""

from markterm.cli.widgets.base import BaseWidget, Rect
from markterm.cli.widgets.status_bar import StatusBarWidget

__all__ = [
    "BaseWidget",
    "Rect",
    "StatusBarWidget",
]
