"""Interactive read-execute loop over a raw-mode terminal."""

from __future__ import annotations

import logging
import sys
import termios
from typing import TextIO

from .completion import TabCompleter
from .exceptions import StartupError
from .shell import Shell
from .terminal import LineEditor, RawTerminal

logger = logging.getLogger(__name__)

EXIT_COMMAND = "exit"
EXIT_OK = 0
EXIT_EOF = 1
FALLBACK_PROMPT = "$ "
MAX_CONSECUTIVE_READ_ERRORS = 100


class InteractiveSession:
    def __init__(
        self,
        shell: Shell,
        *,
        fd: int | None = None,
        output: TextIO | None = None,
    ) -> None:
        self.shell = shell
        self.fd = sys.stdin.fileno() if fd is None else fd
        self.terminal = RawTerminal(self.fd)
        self.editor = LineEditor(
            self.fd,
            output or shell.stdout,
            completer=TabCompleter(shell.context.tab_state),
        )

    def _prompt(self) -> str:
        try:
            return self.shell.prompt
        except (OSError, KeyError) as exc:
            logger.error("cannot build prompt: %s", exc)
            return FALLBACK_PROMPT

    def run(self) -> int:
        """Run until ``exit`` (status 0) or end of input (status 1)."""

        try:
            prompt = self.shell.prompt
        except (OSError, KeyError) as exc:
            raise StartupError(f"cannot build prompt: {exc}") from exc
        logger.debug("starting session on fd %d with prompt %r", self.fd, prompt)
        try:
            self.terminal.enter()
        except (termios.error, OSError) as exc:
            raise StartupError(f"cannot enter raw mode: {exc}") from exc
        try:
            return self._loop()
        finally:
            self.terminal.restore()

    def _loop(self) -> int:
        failures = 0
        while True:
            try:
                line = self.editor.read_line(self._prompt())
            except EOFError:
                logger.debug("end of input")
                return EXIT_EOF
            except (OSError, ValueError) as exc:
                failures += 1
                logger.error("error while reading line: %s", exc)
                if failures >= MAX_CONSECUTIVE_READ_ERRORS:
                    logger.error("giving up after %d consecutive read errors", failures)
                    return EXIT_EOF
                continue
            failures = 0
            if line.strip() == EXIT_COMMAND:
                return EXIT_OK
            self.shell.exec(line)


__all__ = ["InteractiveSession", "EXIT_EOF", "EXIT_OK"]
