"""Raw terminal mode and a minimal line editor on top of it."""

from __future__ import annotations

import codecs
import os
import sys
import termios
from typing import TYPE_CHECKING, TextIO

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from .completion import TabCompleter

ENTER_KEYS = ("\r", "\n")
BACKSPACE_KEYS = ("\x7f", "\x08")
CTRL_D = "\x04"
TAB = "\t"
ESC = "\x1b"
CLEAR_LINE = "\r\x1b[K"

# termios.tcgetattr list layout
_LFLAG = 3
_CC = 6


class RawTerminal:
    """Owns the saved terminal attributes of ``fd`` while raw mode is active."""

    def __init__(self, fd: int) -> None:
        self.fd = fd
        self._saved: list | None = None

    @property
    def active(self) -> bool:
        return self._saved is not None

    def enter(self) -> None:
        if self._saved is not None:
            raise RuntimeError("raw mode is already active")
        saved = termios.tcgetattr(self.fd)
        mode = termios.tcgetattr(self.fd)
        mode[_LFLAG] &= ~(termios.ICANON | termios.ECHO | termios.ISIG | termios.IEXTEN)
        mode[_CC][termios.VMIN] = 1
        mode[_CC][termios.VTIME] = 0
        termios.tcsetattr(self.fd, termios.TCSAFLUSH, mode)
        self._saved = saved

    def restore(self) -> None:
        """Put the original attributes back; later calls do nothing."""

        if self._saved is None:
            return
        saved, self._saved = self._saved, None
        termios.tcsetattr(self.fd, termios.TCSADRAIN, saved)

    def __enter__(self) -> "RawTerminal":
        self.enter()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.restore()


class LineEditor:
    """Reads one line a character at a time from ``fd`` and echoes it."""

    def __init__(
        self,
        fd: int,
        output: TextIO | None = None,
        *,
        completer: "TabCompleter | None" = None,
    ) -> None:
        self.fd = fd
        self.output = output or sys.stdout
        self.completer = completer
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

    def _write(self, text: str) -> None:
        self.output.write(text)
        self.output.flush()

    def read_char(self) -> str:
        while True:
            data = os.read(self.fd, 1)
            if not data:
                raise EOFError
            text = self._decoder.decode(data)
            if text:
                return text

    def read_line(self, prompt: str) -> str:
        """Return the next line; raises ``EOFError`` at end of input or Ctrl-D."""

        buffer: list[str] = []
        self._write(prompt)
        while True:
            char = self.read_char()
            if char in ENTER_KEYS:
                self._write("\r\n")
                return "".join(buffer)
            if char == CTRL_D:
                if not buffer:
                    raise EOFError
                continue
            if char in BACKSPACE_KEYS:
                if buffer:
                    buffer.pop()
                    self._write("\b \b")
                continue
            if char == TAB:
                if buffer and self.completer is not None:
                    buffer = list(self._complete(prompt, "".join(buffer)))
                continue
            if char == ESC:
                self._skip_escape_sequence()
                continue
            if char.isprintable():
                buffer.append(char)
                self._write(char)

    def _complete(self, prompt: str, line: str) -> str:
        assert self.completer is not None
        result = self.completer.complete(line)
        if result.committed:
            self._write(f"{CLEAR_LINE}{prompt}{result.line}")
            return result.line
        if result.primed:
            self._write("\r\n")
        else:
            self._write("\r\n" + "\t".join(result.matches) + "\r\n")
        self._write(f"{prompt}{line}")
        return line

    def _skip_escape_sequence(self) -> None:
        # CSI/SS3 sequences end with a byte in the range "@" to "~".
        if self.read_char() not in ("[", "O"):
            return
        while not "@" <= self.read_char() <= "~":
            pass


__all__ = ["LineEditor", "RawTerminal"]
