"""Typer CLI application."""

from __future__ import annotations

import logging
import os
import sys
from contextlib import contextmanager
from typing import Annotated, Iterator, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from markterm import __version__
from markterm.cli.core.input import InputReader
from markterm.errors import MarktermError

logger = logging.getLogger(__name__)

TTY_PATH = "/dev/tty"


def _version_callback(value: bool) -> None:
    if value:
        print(f"markterm {__version__}")
        raise typer.Exit()


def _keys_callback(value: bool) -> None:
    if not value:
        return
    from markterm.cli.core.shortcuts import pager_registry

    table = Table(title="Pager keys", show_header=True, header_style="bold")
    table.add_column("Keys", style="cyan")
    table.add_column("Action")
    for shortcut in pager_registry().all():
        table.add_row(shortcut.key_display, shortcut.description)
    Console().print(table)
    raise typer.Exit()


@contextmanager
def open_key_reader() -> Iterator[InputReader]:
    """Read keys from stdin, or from the controlling terminal when stdin is piped."""
    if sys.stdin.isatty():
        yield InputReader()
        return
    fd = os.open(TTY_PATH, os.O_RDONLY)
    try:
        yield InputReader(fd)
    finally:
        os.close(fd)


def create_app() -> typer.Typer:
    """Create and configure the CLI application."""
    app = typer.Typer(
        name="markterm",
        help="Render markdown in the terminal with built-in paging.",
        add_completion=False,
        rich_markup_mode="rich",
    )
    err_console = Console(stderr=True)

    @app.command()
    def show(
        file: Annotated[str, typer.Argument(help="Markdown file to display (use - for stdin)")],
        width: Annotated[Optional[int], typer.Option("--width", "-w", min=0, help="Override terminal width")] = None,
        theme: Annotated[Optional[str], typer.Option("--theme", "-t", help="Color theme: auto, dark, light, none")] = None,
        no_pager: Annotated[bool, typer.Option("--no-pager", help="Dump rendered output without paging")] = False,
        no_wrap: Annotated[bool, typer.Option("--no-wrap", help="Truncate long lines instead of wrapping")] = False,
        verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log debug details to stderr")] = False,
        version: Annotated[bool, typer.Option("--version", callback=_version_callback, is_eager=True, help="Show version and exit")] = False,
        keys: Annotated[bool, typer.Option("--keys", callback=_keys_callback, is_eager=True, help="List pager keys and exit")] = False,
    ) -> None:
        """Render a markdown FILE and page through it."""
        from markterm import log
        from markterm.cli.core.terminal import Terminal
        from markterm.cli.pager import Pager
        from markterm.config import resolve_options
        from markterm.io.reader import load, source_title
        from markterm.parse.markdown import parse
        from markterm.render.layout import render

        log.configure("DEBUG" if verbose else None)

        try:
            content = load(file)
        except MarktermError as e:
            err_console.print(f"[red]markterm: {escape(str(e))}[/]", highlight=False, soft_wrap=True)
            raise typer.Exit(1)

        size = Terminal.size()
        try:
            options = resolve_options(width=width, theme=theme, no_wrap=no_wrap, term_cols=size.cols)
        except ValueError as e:
            err_console.print(f"[red]markterm: {escape(str(e))}[/]", highlight=False, soft_wrap=True)
            raise typer.Exit(2)

        lines = render(
            parse(content),
            options.width,
            use_color=options.color,
            no_wrap=options.no_wrap,
            theme=options.theme,
        )

        if no_pager or not sys.stdout.isatty():
            for line in lines:
                print(line)
            return

        try:
            with open_key_reader() as reader:
                Pager(lines, size.rows - 1, source_title(file), reader=reader).run()
        except (OSError, EOFError) as e:
            logger.debug("pager failed", exc_info=True)
            err_console.print(f"[red]markterm: pager error: {escape(str(e))}[/]", highlight=False, soft_wrap=True)
            raise typer.Exit(1)

    return app
