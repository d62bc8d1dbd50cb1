"""Shell facade: run one input line end to end."""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from typing import TextIO

from ..aliases import resolve_alias
from ..exceptions import InputError, ShellError, StageFailedError
from ..prompt import format_prompt
from ..session import SessionContext
from ..shell_parser import Redirection, resolve_redirection, tokenize
from .builtins import resolve_builtin, run_builtin
from .common import CommandResult
from .pipeline import execute_pipeline
from .redirection import apply_redirection_only

logger = logging.getLogger(__name__)


class Shell:
    """Resolves aliases, builtins and redirections, then runs the pipeline."""

    def __init__(
        self,
        context: SessionContext,
        *,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
        prompt_factory: Callable[[], str] = format_prompt,
    ) -> None:
        self.context = context
        self.stdout = stdout or sys.stdout
        self.stderr = stderr or sys.stderr
        self.prompt_factory = prompt_factory
        self._prompt: str | None = None

    @property
    def prompt(self) -> str:
        if self._prompt is None:
            self._prompt = self.prompt_factory()
        return self._prompt

    def refresh_prompt(self) -> None:
        self._prompt = None

    def report(self, message: object) -> None:
        self.stderr.write(f"eshell: {message}\n")
        self.stderr.flush()

    def _emit(self, result: CommandResult) -> None:
        if result.stdout:
            self.stdout.write(result.stdout)
            self.stdout.flush()
        if result.stderr:
            self.stderr.write(result.stderr)
            self.stderr.flush()

    # ------------------------------------------------------------------
    # Dispatcher
    # ------------------------------------------------------------------
    def exec(self, line: str) -> int:
        """Run ``line`` and return 0 on success, non-zero after a reported error."""

        try:
            return self._exec_line(line)
        except StageFailedError as exc:
            logger.debug("stage failed: %s", exc)
            self.report(exc)
            return exc.returncode if exc.returncode > 0 else 1
        except ShellError as exc:
            logger.debug("line aborted: %s", exc)
            self.report(exc)
            return 1

    def _exec_line(self, line: str) -> int:
        stages = tokenize(line)
        if not stages:
            return 0
        for position, stage in enumerate(stages, start=1):
            if not stage:
                raise InputError(f"empty command at pipeline position {position}")

        status = 0
        commands: list[str] = []
        redirection: Redirection | None = None
        for stage in stages:
            stage = resolve_alias(stage, self.context.aliases)
            call = resolve_builtin(stage)
            if call is not None:
                logger.debug("builtin %s %r", call.builtin.value, call.argument)
                try:
                    self._emit(run_builtin(self.context, call))
                except ShellError as exc:
                    self.report(exc)
                    status = 1
                finally:
                    self.refresh_prompt()
                continue
            resolved = resolve_redirection(stage)
            if resolved.redirection is not None:
                if not resolved.command:
                    apply_redirection_only(resolved.redirection)
                    continue
                # One slot per line: the last redirection seen wins, earlier
                # targets are still created or truncated.
                if redirection is not None:
                    apply_redirection_only(redirection)
                redirection = resolved.redirection
            commands.append(resolved.command)

        self.stdout.flush()
        execute_pipeline(commands, redirection)
        return status


__all__ = ["Shell"]
