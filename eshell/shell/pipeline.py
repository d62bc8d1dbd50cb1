"""Run a chain of external processes connected stdout-to-stdin."""

from __future__ import annotations

import contextlib
import logging
import subprocess
from collections.abc import Sequence

from ..exceptions import InputError, SpawnError, StageFailedError
from ..shell_parser import Redirection
from .redirection import open_target

logger = logging.getLogger(__name__)


def stage_argv(stage: str) -> list[str]:
    argv = stage.split()
    if not argv:
        raise InputError("empty command in pipeline")
    return argv


def execute_pipeline(stages: Sequence[str], redirection: Redirection | None = None) -> None:
    """Spawn one process per stage, wire them together and wait in order.

    Standard error of every stage is inherited. The last stage writes stdout
    and stderr to the redirection target when one is given, otherwise to the
    terminal. A stage that fails to start raises ``SpawnError`` and nothing
    after it is started; the first non-zero exit raises ``StageFailedError``.
    Every process that did start is waited on before this returns or raises.
    """

    if not stages:
        return
    argvs = [stage_argv(stage) for stage in stages]
    started: list[subprocess.Popen[bytes]] = []
    with contextlib.ExitStack() as stack:
        sink = stack.enter_context(open_target(redirection)) if redirection else None
        stack.callback(_reap, started)
        upstream = None
        last = len(stages) - 1
        for index, (stage, argv) in enumerate(zip(stages, argvs)):
            final = index == last
            try:
                proc = subprocess.Popen(
                    argv,
                    stdin=upstream,
                    stdout=sink if final else subprocess.PIPE,
                    stderr=sink if final else None,
                )
            except OSError as exc:
                logger.debug("failed to start %r: %s", stage, exc)
                raise SpawnError(stage, exc) from exc
            finally:
                # The pipe read end now belongs to the child.
                if upstream is not None:
                    upstream.close()
            logger.debug("started pid %d for %r", proc.pid, stage)
            started.append(proc)
            upstream = proc.stdout

        for stage, proc in zip(stages, started):
            returncode = proc.wait()
            logger.debug("pid %d exited with %d", proc.pid, returncode)
            if returncode != 0:
                raise StageFailedError(stage, returncode)


def _reap(started: list[subprocess.Popen[bytes]]) -> None:
    for proc in started:
        if proc.stdout is not None:
            proc.stdout.close()
        proc.wait()


__all__ = ["execute_pipeline", "stage_argv"]
