"""Tests for the pager, status bar and key bindings (no real terminal needed)."""

import random

import pytest

from markterm.cli.core.input import Key, KeyEvent
from markterm.cli.core.shortcuts import PAGER_SHORTCUTS, ShortcutDef, ShortcutRegistry, pager_registry
from markterm.cli.pager import FILLER, Pager
from markterm.cli.widgets.base import Rect
from markterm.cli.widgets.status_bar import HELP_LEGEND, StatusBarWidget, position_text
from markterm.core.ansi_text import strip_ansi, visible_len
from markterm.core.constants import REVERSE

from conftest import FakeTerminal, ScriptedReader, to_event


def _pager(lines, page_height=9, keys=(), terminal=None) -> Pager:
    return Pager(
        lines,
        page_height,
        "doc.md",
        terminal=terminal or FakeTerminal(),
        reader=ScriptedReader(keys),
    )


class TestDisabledPager:
    """Pager falls back to plain output when paging makes no sense."""

    def test_zero_height_writes_everything(self, fake_terminal: FakeTerminal) -> None:
        pager = _pager(["a", "b"], page_height=0, terminal=fake_terminal)
        assert not pager.interactive
        pager.run()
        assert fake_terminal.text == "a\nb\n"
        assert fake_terminal.acquired == 0

    def test_fits_on_one_page(self, fake_terminal: FakeTerminal) -> None:
        pager = _pager(["a", "b", "c"], page_height=3, terminal=fake_terminal)
        assert not pager.interactive
        pager.run()
        assert fake_terminal.text == "a\nb\nc\n"
        assert fake_terminal.clears == 0

    def test_empty_document(self, fake_terminal: FakeTerminal) -> None:
        _pager([], page_height=5, terminal=fake_terminal).run()
        assert fake_terminal.text == ""


class TestInteractiveRun:
    def test_page_then_quit(self, fake_terminal: FakeTerminal, doc_lines: list[str]) -> None:
        pager = _pager(doc_lines, keys=[" ", "q"], terminal=fake_terminal)
        pager.run()
        assert pager.offset == 9
        assert fake_terminal.acquired == fake_terminal.released == 1
        assert fake_terminal.clears == 2
        assert fake_terminal.output[-1] == "\r\n"

    def test_unmapped_keys_redraw(self, fake_terminal: FakeTerminal, doc_lines: list[str]) -> None:
        pager = _pager(doc_lines, keys=["x", "z", Key.ESCAPE], terminal=fake_terminal)
        pager.run()
        assert pager.offset == 0
        assert fake_terminal.clears == 3

    def test_terminal_released_on_read_error(self, fake_terminal: FakeTerminal, doc_lines: list[str]) -> None:
        class BrokenReader:
            fd = -1

            def read_blocking(self) -> KeyEvent:
                raise OSError("tty gone")

        pager = Pager(doc_lines, 9, "doc.md", terminal=fake_terminal, reader=BrokenReader())
        with pytest.raises(OSError):
            pager.run()
        assert fake_terminal.acquired == fake_terminal.released == 1

    def test_terminal_released_on_closed_input(self, fake_terminal: FakeTerminal, doc_lines: list[str]) -> None:
        pager = _pager(doc_lines, keys=[" "], terminal=fake_terminal)
        with pytest.raises(EOFError):
            pager.run()
        assert fake_terminal.released == 1

    def test_first_frame_shows_first_page(self, fake_terminal: FakeTerminal, doc_lines: list[str]) -> None:
        _pager(doc_lines, keys=["q"], terminal=fake_terminal).run()
        frame = fake_terminal.output[0]
        assert frame.startswith("line 1\r\n")
        assert "line 9\r\n" in frame
        assert "line 10\r\n" not in frame
        assert "lines 1-9 of 30 (30%)" in frame

    def test_width_remeasured_every_draw(self, doc_lines: list[str]) -> None:
        terminal = FakeTerminal(cols=80)
        widths = [80, 50, 33]

        class ResizingReader(ScriptedReader):
            def read_blocking(self) -> KeyEvent:
                # The terminal is resized while waiting for each key
                widths.append(widths.pop(0))
                terminal.cols = widths[0]
                return super().read_blocking()

        pager = Pager(doc_lines, 9, "doc.md", terminal=terminal, reader=ResizingReader([" ", " ", "q"]))
        pager.run()
        frames = terminal.output[:-1]
        assert [visible_len(frame.split("\r\n")[-1]) for frame in frames] == [80, 50, 33]


class TestCommands:
    """Every bound command on 30 lines with a 9-line page (max offset 21)."""

    @pytest.mark.parametrize("keys, expected", [
        ([" "], 9),
        ([" ", " "], 18),
        ([" ", " ", " "], 21),
        ([Key.PAGE_DOWN], 9),
        ([Key.CTRL_F, Key.CTRL_F], 18),
        (["G", "b"], 12),
        (["G", Key.PAGE_UP, Key.PAGE_UP, Key.PAGE_UP], 0),
        (["j", "j"], 2),
        ([Key.ENTER, Key.DOWN], 2),
        (["j", "k"], 0),
        (["k"], 0),
        (["G", Key.UP], 20),
        (["G"], 21),
        ([Key.END], 21),
        (["G", "g"], 0),
        (["G", Key.HOME], 0),
        (["d"], 4),
        (["G", "u"], 17),
        (["G", "d"], 21),
        (["u"], 0),
    ])
    def test_offset_after(self, doc_lines: list[str], keys: list, expected: int) -> None:
        pager = _pager(doc_lines)
        for key in keys:
            assert pager.handle_input(to_event(key))
        assert pager.offset == expected

    @pytest.mark.parametrize("key", ["q", Key.ESCAPE, Key.CTRL_C])
    def test_quit_keys(self, doc_lines: list[str], key) -> None:
        pager = _pager(doc_lines)
        pager.running = True
        pager.handle_input(to_event(key))
        assert pager.running is False

    def test_unmapped_key(self, doc_lines: list[str]) -> None:
        pager = _pager(doc_lines)
        assert pager.handle_input(to_event("x")) is False
        assert pager.handle_input(KeyEvent(key=Key.LEFT)) is False
        assert pager.offset == 0

    def test_offset_always_clamped(self, doc_lines: list[str]) -> None:
        keys = [" ", "b", "j", "k", "g", "G", "d", "u", Key.UP, Key.DOWN, Key.END, "x"]
        rng = random.Random(7)
        for page_height in (1, 4, 9, 29):
            pager = _pager(doc_lines, page_height=page_height)
            for _ in range(200):
                pager.handle_input(to_event(rng.choice(keys)))
                assert 0 <= pager.offset <= max(0, pager.total - page_height)

    def test_scroll_to_clamps(self, doc_lines: list[str]) -> None:
        pager = _pager(doc_lines)
        pager.scroll_to(100)
        assert pager.offset == pager.max_offset == 21
        pager.scroll_to(-3)
        assert pager.offset == 0


class TestFrame:
    def test_last_page(self, doc_lines: list[str]) -> None:
        pager = _pager(doc_lines)
        pager.bottom()
        assert pager.visible_range() == (21, 30)
        frame = pager.render_frame(80)
        assert frame.startswith("line 22\r\n")
        assert "lines 22-30 of 30 (100%)" in frame
        assert FILLER not in strip_ansi(frame)

    def test_filler_rows(self) -> None:
        pager = _pager(["a", "b"], page_height=5)
        rows = pager.render_frame(40).split("\r\n")
        assert rows[:5] == ["a", "b", FILLER, FILLER, FILLER]

    def test_status_bar_spans_width(self, doc_lines: list[str]) -> None:
        pager = _pager(doc_lines)
        status = pager.render_frame(72).split("\r\n")[-1]
        assert status.startswith(REVERSE)
        assert visible_len(status) == 72


class TestStatusBar:
    def test_position_text(self) -> None:
        assert position_text("doc.md", 0, 9, 30) == " doc.md | lines 1-9 of 30 (30%) "

    def test_percentage_rounds(self) -> None:
        assert position_text("x", 0, 1, 3).endswith("(33%) ")
        assert position_text("x", 0, 2, 3).endswith("(67%) ")

    @pytest.mark.parametrize("end, expected", [(1, 13), (3, 38), (5, 63), (8, 100)])
    def test_halves_round_up(self, end: int, expected: int) -> None:
        assert position_text("x", 0, end, 8).endswith(f"({expected}%) ")

    def test_render_layout(self) -> None:
        bar = StatusBarWidget()
        bar.set_position("doc.md", 0, 9, 30)
        (line,) = bar.render(Rect(0, 0, 80, 1))
        plain = strip_ansi(line)
        assert len(plain) == 80
        assert plain.startswith(" doc.md | lines 1-9 of 30 (30%) ")
        assert plain.endswith(HELP_LEGEND)

    def test_render_clips_when_narrow(self) -> None:
        bar = StatusBarWidget()
        bar.set_position("a very long title that does not fit", 0, 9, 30)
        (line,) = bar.render(Rect(0, 0, 20, 1))
        assert visible_len(line) == 20


class TestShortcuts:
    def test_registry_has_defaults(self) -> None:
        registry = pager_registry()
        assert [s.id for s in registry.all()] == [s.id for s in PAGER_SHORTCUTS]
        assert registry.get("quit").handler == "quit"

    def test_match_char_and_key(self) -> None:
        registry = pager_registry()
        assert registry.match(to_event(" ")).id == "page_down"
        assert registry.match(KeyEvent(key=Key.PAGE_UP)).id == "page_up"
        assert registry.match(to_event("?")) is None

    def test_named_key_does_not_match_char(self) -> None:
        shortcut = ShortcutDef("x", ["j"], "X", "x")
        assert not shortcut.matches(KeyEvent(key=Key.ENTER, char="j"))

    def test_key_display(self) -> None:
        registry = pager_registry()
        assert registry.get("page_down").key_display == "Space/PgDn/Ctrl-F"
        assert registry.get("quit").key_display == "q/Esc/Ctrl-C"

    def test_handlers_exist_on_pager(self) -> None:
        pager = Pager([], 1, "t")
        for shortcut in pager_registry().all():
            assert callable(getattr(pager, shortcut.handler))

    def test_custom_registry(self, doc_lines: list[str]) -> None:
        registry = ShortcutRegistry()
        registry.register(ShortcutDef("down", ["n"], "Down", "Down", "line_down"))
        pager = Pager(doc_lines, 9, "t", terminal=FakeTerminal(), shortcuts=registry)
        assert pager.handle_input(to_event("n"))
        assert not pager.handle_input(to_event(" "))
        assert pager.offset == 1
