"""Tests for option resolution, logging setup and loading sources."""

import io
import logging

import pytest

from markterm import log
from markterm.config import RENDER_MARGIN, detect_theme, resolve_options
from markterm.core.theme import DARK, LIGHT
from markterm.errors import InputUnavailableError, MarktermError
from markterm.io import load, read_stream, read_text, source_title


class TestResolveOptions:
    """Width, color and theme resolution."""

    def test_defaults_from_terminal(self) -> None:
        options = resolve_options(term_cols=100, environ={})
        assert options.width == 100 - RENDER_MARGIN
        assert options.color is True
        assert options.theme is DARK
        assert options.no_wrap is False

    def test_explicit_width_wins(self) -> None:
        assert resolve_options(width=40, term_cols=100, environ={}).width == 40

    def test_width_never_negative(self) -> None:
        assert resolve_options(term_cols=1, environ={}).width == 0

    def test_theme_none_disables_color(self) -> None:
        assert resolve_options(theme="none", environ={}).color is False

    def test_no_color_env(self) -> None:
        options = resolve_options(theme="light", environ={"NO_COLOR": "1"})
        assert options.color is False
        assert options.theme is LIGHT

    def test_empty_no_color_is_ignored(self) -> None:
        assert resolve_options(environ={"NO_COLOR": ""}).color is True

    def test_theme_from_env(self) -> None:
        options = resolve_options(environ={"MARKTERM_THEME": "Light"})
        assert options.theme is LIGHT

    def test_explicit_theme_beats_env(self) -> None:
        options = resolve_options(theme="dark", environ={"MARKTERM_THEME": "light"})
        assert options.theme is DARK

    def test_unknown_theme(self) -> None:
        with pytest.raises(ValueError, match="Unknown theme"):
            resolve_options(theme="solarized", environ={})

    def test_no_wrap_passed_through(self) -> None:
        assert resolve_options(no_wrap=True, environ={}).no_wrap is True


class TestDetectTheme:
    @pytest.mark.parametrize("value, expected", [
        ("0;15", LIGHT),
        ("0;7", LIGHT),
        ("0;default;15", LIGHT),
        ("15;0", DARK),
        ("garbage", DARK),
        ("", DARK),
    ])
    def test_colorfgbg(self, value: str, expected) -> None:
        assert detect_theme({"COLORFGBG": value}) is expected

    def test_missing(self) -> None:
        assert detect_theme({}) is DARK


class TestReader:
    """Loading markdown from files and streams."""

    def test_read_utf8(self, tmp_path) -> None:
        path = tmp_path / "doc.md"
        path.write_text("# Café\n", encoding="utf-8")
        assert read_text(path) == "# Café\n"

    def test_bom_stripped(self, tmp_path) -> None:
        path = tmp_path / "bom.md"
        path.write_bytes(b"\xef\xbb\xbf# T\n")
        assert read_text(path) == "# T\n"

    def test_latin1_fallback(self, tmp_path) -> None:
        path = tmp_path / "old.md"
        path.write_bytes(b"caf\xe9")
        assert read_text(path) == "café"

    def test_missing_file(self, tmp_path) -> None:
        missing = tmp_path / "nope.md"
        with pytest.raises(InputUnavailableError) as exc_info:
            read_text(missing)
        assert exc_info.value.source == str(missing)
        assert str(exc_info.value).startswith(f"{missing}: ")
        assert isinstance(exc_info.value, MarktermError)

    def test_directory_is_unavailable(self, tmp_path) -> None:
        with pytest.raises(InputUnavailableError):
            read_text(tmp_path)

    def test_read_stream(self) -> None:
        assert read_stream(io.StringIO("- a\n")) == "- a\n"

    def test_load_stdin(self, monkeypatch) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO("piped"))
        assert load("-") == "piped"

    def test_load_path(self, tmp_path) -> None:
        path = tmp_path / "a.md"
        path.write_text("x")
        assert load(str(path)) == "x"

    def test_source_title(self) -> None:
        assert source_title("-") == "(stdin)"
        assert source_title("notes/a.md") == "notes/a.md"


class TestLogging:
    def test_level_from_argument(self) -> None:
        assert log.configure("debug") == logging.DEBUG
        assert logging.getLogger("markterm").level == logging.DEBUG

    def test_level_from_env(self, monkeypatch) -> None:
        monkeypatch.setenv("MARKTERM_LOG_LEVEL", "INFO")
        assert log.configure() == logging.INFO

    def test_bad_level_falls_back(self) -> None:
        assert log.configure("chatty") == logging.WARNING

    def test_single_handler(self) -> None:
        log.configure()
        log.configure()
        handlers = logging.getLogger("markterm").handlers
        assert len(handlers) == 1
        assert logging.getLogger("markterm").propagate is False
