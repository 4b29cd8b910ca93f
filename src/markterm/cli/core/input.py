"""Keyboard input handling with event abstraction."""

from __future__ import annotations

import os
import sys
import select
import time
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


class Key(Enum):
    """Named key constants."""
    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()
    ENTER = auto()
    ESCAPE = auto()
    TAB = auto()
    BACKSPACE = auto()
    HOME = auto()
    END = auto()
    PAGE_UP = auto()
    PAGE_DOWN = auto()
    DELETE = auto()
    INSERT = auto()
    CTRL_C = auto()
    CTRL_F = auto()


@dataclass(frozen=True)
class KeyEvent:
    """Represents a keyboard input event."""
    key: Optional[Key] = None  # Named key if recognized
    char: Optional[str] = None  # Character if printable
    raw: str = ""  # Raw escape sequence

    @property
    def is_char(self) -> bool:
        """Check if this is a printable character."""
        return self.char is not None and self.key is None


class InputReader:
    """
    Keyboard input reader for a raw-mode terminal.
    
    Uses os.read() to bypass Python's I/O buffering and properly
    handle escape sequences that may arrive split across reads.
    Read errors propagate to the caller.
    """

    # Escape sequence mappings (without the \x1b prefix)
    SEQUENCES: dict[str, Key] = {
        # Arrow keys (CSI)
        '[A': Key.UP,
        '[B': Key.DOWN,
        '[C': Key.RIGHT,
        '[D': Key.LEFT,
        # Arrow keys (SS3 - application mode)
        'OA': Key.UP,
        'OB': Key.DOWN,
        'OC': Key.RIGHT,
        'OD': Key.LEFT,
        # Navigation
        '[H': Key.HOME,
        '[F': Key.END,
        'OH': Key.HOME,
        'OF': Key.END,
        '[1~': Key.HOME,
        '[4~': Key.END,
        '[7~': Key.HOME,
        '[8~': Key.END,
        '[5~': Key.PAGE_UP,
        '[6~': Key.PAGE_DOWN,
        '[2~': Key.INSERT,
        '[3~': Key.DELETE,
    }
    
    SIMPLE_KEYS: dict[str, Key] = {
        '\r': Key.ENTER,
        '\n': Key.ENTER,
        '\t': Key.TAB,
        '\x7f': Key.BACKSPACE,
        '\x08': Key.BACKSPACE,
        '\x03': Key.CTRL_C,
        '\x06': Key.CTRL_F,
    }

    def __init__(self, fd: Optional[int] = None) -> None:
        self._buffer = ""
        self.fd = sys.stdin.fileno() if fd is None else fd

    def read(self, timeout: float = 0.1) -> Optional[KeyEvent]:
        """
        Read a single key event.
        
        Returns None if no input available within timeout.
        Raises EOFError when the input is closed.
        """
        # Process any buffered input first
        if self._buffer:
            return self._process_buffer()
        
        if not self._has_input(timeout):
            return None

        self._read_available()
        
        if self._buffer:
            return self._process_buffer()
        
        return None

    def read_blocking(self) -> KeyEvent:
        """Read a key event, blocking until input is available."""
        while True:
            event = self.read(timeout=1.0)
            if event is not None:
                return event

    def _read_available(self) -> None:
        """Read all currently available input into buffer using os.read."""
        data = os.read(self.fd, 1024)
        if not data:
            raise EOFError("keyboard input closed")
        self._buffer += data.decode('utf-8', errors='replace')
        
        # If buffer is just escape, wait for potential sequence
        if self._buffer == '\x1b':
            self._wait_for_escape_sequence()

    def _wait_for_escape_sequence(self) -> None:
        """Wait for escape sequence to complete with proper timeouts."""
        deadline = time.monotonic() + 0.1  # 100ms total wait
        
        while time.monotonic() < deadline:
            remaining = deadline - time.monotonic()
            wait_time = min(remaining, 0.025)  # 25ms intervals
            
            if wait_time <= 0:
                break
                
            if self._has_input(wait_time):
                data = os.read(self.fd, 1024)
                if not data:
                    return
                self._buffer += data.decode('utf-8', errors='replace')
                
                # Check if sequence looks complete
                rest = self._buffer[1:]
                if rest and (rest[-1].isalpha() or rest[-1] == '~'):
                    return

    def _process_buffer(self) -> Optional[KeyEvent]:
        """Process buffered input and return next key event."""
        if not self._buffer:
            return None
        
        # Simple keys
        if self._buffer[0] in self.SIMPLE_KEYS:
            key = self.SIMPLE_KEYS[self._buffer[0]]
            raw = self._buffer[0]
            self._buffer = self._buffer[1:]
            return KeyEvent(key=key, raw=raw)
        
        # Escape sequence
        if self._buffer[0] == '\x1b':
            return self._parse_escape_sequence()
        
        # Printable character
        if self._buffer[0].isprintable():
            ch = self._buffer[0]
            self._buffer = self._buffer[1:]
            return KeyEvent(char=ch, raw=ch)
        
        # Unknown control character - skip it
        self._buffer = self._buffer[1:]
        return None

    def _parse_escape_sequence(self) -> KeyEvent:
        """Parse an escape sequence from the buffer."""
        if len(self._buffer) == 1:
            # Just escape, no sequence
            self._buffer = ""
            return KeyEvent(key=Key.ESCAPE, raw='\x1b')
        
        rest = self._buffer[1:]
        
        # Find where this sequence ends
        end_idx = 0
        for i, ch in enumerate(rest):
            if ch == '\x1b':
                # Start of next escape sequence
                end_idx = i
                break
            if i > 0 and (ch.isalpha() or ch == '~'):
                # End of this sequence (the introducer itself may be a letter)
                end_idx = i + 1
                break
            end_idx = i + 1
        
        if end_idx == 0:
            # Lone escape followed by another sequence
            self._buffer = rest
            return KeyEvent(key=Key.ESCAPE, raw='\x1b')
        
        seq = rest[:end_idx]
        raw = '\x1b' + seq
        self._buffer = self._buffer[1 + end_idx:]
        
        if seq in self.SEQUENCES:
            return KeyEvent(key=self.SEQUENCES[seq], raw=raw)
        
        # Unknown sequence
        return KeyEvent(raw=raw)

    def _has_input(self, timeout: float) -> bool:
        """Check if input is available within timeout."""
        ready, _, _ = select.select([self.fd], [], [], timeout)
        return bool(ready)
