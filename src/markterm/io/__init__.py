"""Input sources for markdown documents."""

from markterm.io.reader import load, read_stream, read_text, source_title

__all__ = ["load", "read_stream", "read_text", "source_title"]
