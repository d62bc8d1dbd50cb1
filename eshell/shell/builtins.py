"""Commands that run inside the shell process instead of being spawned."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from ..exceptions import AliasStoreError, BuiltinError
from .common import CommandResult

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from ..session import SessionContext

logger = logging.getLogger(__name__)


class Builtin(Enum):
    CD = "cd"
    ALIAS = "alias"


@dataclass(slots=True, frozen=True)
class BuiltinCall:
    builtin: Builtin
    argument: str = ""


def resolve_builtin(stage: str) -> BuiltinCall | None:
    """Match the first word of ``stage`` against the builtin names."""

    fields = stage.split()
    if not fields:
        return None
    try:
        builtin = Builtin(fields[0])
    except ValueError:
        return None
    return BuiltinCall(builtin, " ".join(fields[1:]))


def expand_home(path: str, home: os.PathLike[str] | str) -> str:
    if path.startswith("~"):
        return f"{os.fspath(home)}{path[1:]}"
    return path


def change_directory(context: "SessionContext", argument: str) -> CommandResult:
    target = expand_home(argument or "~", context.home)
    try:
        os.chdir(target)
    except OSError as exc:
        raise BuiltinError(f"cd: {target}: {exc.strerror or exc}") from exc
    logger.debug("cwd is now %s", target)
    return CommandResult()


def alias(context: "SessionContext", argument: str) -> CommandResult:
    if not argument:
        lines = [f"{key} -> {value}" for key, value in context.aliases.items()]
        return CommandResult(stdout="".join(f"{line}\n" for line in lines))
    key, sep, value = argument.partition("=")
    key = key.strip()
    if not sep or not key:
        raise BuiltinError(f"alias: expected key=value, got {argument!r}")
    if any(char.isspace() for char in key):
        raise BuiltinError(f"alias: key must not contain whitespace: {key!r}")
    try:
        context.set_alias(key, value.strip())
    except AliasStoreError as exc:
        raise BuiltinError(f"alias: {exc}") from exc
    logger.debug("alias %s -> %s saved", key, value.strip())
    return CommandResult()


_HANDLERS = {
    Builtin.CD: change_directory,
    Builtin.ALIAS: alias,
}


def run_builtin(context: "SessionContext", call: BuiltinCall) -> CommandResult:
    return _HANDLERS[call.builtin](context, call.argument)


__all__ = ["Builtin", "BuiltinCall", "resolve_builtin", "run_builtin", "expand_home"]
