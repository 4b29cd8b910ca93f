"""Markup parsers producing document event streams."""

from markterm.parse.markdown import MarkdownEventParser, create_parser, parse

__all__ = ["MarkdownEventParser", "create_parser", "parse"]
