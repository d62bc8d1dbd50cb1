"""Minimal line parser for pipelines and output redirections."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class RedirectOperator(str, Enum):
    TRUNCATE = ">"
    APPEND = ">>"


# Longer token first so ">>" is never read as two ">".
_OPERATORS = (RedirectOperator.APPEND, RedirectOperator.TRUNCATE)


@dataclass(slots=True, frozen=True)
class Redirection:
    operator: RedirectOperator
    target: str

    @property
    def append(self) -> bool:
        return self.operator is RedirectOperator.APPEND


@dataclass(slots=True, frozen=True)
class Resolved:
    """Result of scanning one stage for redirection syntax."""

    command: str
    redirection: Redirection | None = None

    @property
    def found(self) -> bool:
        return self.redirection is not None

    @property
    def target(self) -> str | None:
        return self.redirection.target if self.redirection else None

    @property
    def operator(self) -> RedirectOperator | None:
        return self.redirection.operator if self.redirection else None


def normalize(text: str) -> str:
    """Collapse whitespace runs to one space and trim the ends."""

    return " ".join(text.split())


def tokenize(line: str) -> list[str]:
    """Split ``line`` into normalized pipeline stages.

    Blank input yields no stages. There is no escaping: every ``|`` divides
    stages, so ``a || b`` produces an empty middle stage.
    """

    if not line.strip():
        return []
    return [normalize(part) for part in line.split("|")]


def resolve_redirection(stage: str) -> Resolved:
    for operator in _OPERATORS:
        command, sep, target = stage.partition(operator.value)
        if sep:
            return Resolved(normalize(command), Redirection(operator, normalize(target)))
    return Resolved(stage)


__all__ = [
    "RedirectOperator",
    "Redirection",
    "Resolved",
    "normalize",
    "tokenize",
    "resolve_redirection",
]
