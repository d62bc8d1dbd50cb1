"""Exception hierarchy for eshell."""

from __future__ import annotations


class ShellError(Exception):
    """Base class for errors surfaced to the interactive user."""


class InputError(ShellError):
    """Malformed command line (empty stage, bad redirection target)."""


class BuiltinError(ShellError):
    """A builtin command could not complete."""


class AliasStoreError(ShellError):
    """The alias store could not be read or written."""


class StartupError(ShellError):
    """No safe interactive state could be established."""


class SpawnError(ShellError):
    """A pipeline stage could not be started."""

    def __init__(self, stage: str, cause: OSError) -> None:
        super().__init__(f"{stage}: {cause.strerror or cause}")
        self.stage = stage
        self.cause = cause


class StageFailedError(ShellError):
    """A pipeline stage exited with a non-zero status."""

    def __init__(self, stage: str, returncode: int) -> None:
        if returncode < 0:
            message = f"{stage}: terminated by signal {-returncode}"
        else:
            message = f"{stage}: exit status {returncode}"
        super().__init__(message)
        self.stage = stage
        self.returncode = returncode


__all__ = [
    "ShellError",
    "InputError",
    "BuiltinError",
    "AliasStoreError",
    "StartupError",
    "SpawnError",
    "StageFailedError",
]
