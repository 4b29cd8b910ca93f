"""Renderers for turning document events into terminal lines."""

from markterm.render.layout import LayoutEngine, render
from markterm.render.table import render_table

__all__ = ["LayoutEngine", "render", "render_table"]
