"""Filename completion driven by the Tab key."""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Callable
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

_TOKEN_RE = re.compile(r"\S+")


@dataclass
class TabState:
    """Session-wide count of Tab presses on a non-empty line.

    The count is never reset, so once it passes one every later Tab in the
    session completes immediately.
    """

    presses: int = 0


@dataclass(slots=True)
class Completion:
    line: str
    matches: list[str] = field(default_factory=list)
    primed: bool = False
    committed: bool = False


def _list_cwd() -> list[str]:
    return os.listdir(os.getcwd())


class TabCompleter:
    def __init__(self, state: TabState, *, list_entries: Callable[[], list[str]] = _list_cwd) -> None:
        self.state = state
        self._list_entries = list_entries

    def complete(self, line: str) -> Completion:
        self.state.presses += 1
        if self.state.presses == 1:
            return Completion(line=line, primed=True)

        tokens = list(_TOKEN_RE.finditer(line))
        prefix = tokens[1].group(0) if len(tokens) > 1 else ""
        try:
            entries = self._list_entries()
        except OSError as exc:
            logger.debug("cannot list working directory: %s", exc)
            entries = []
        matches = sorted(name for name in entries if name.startswith(prefix))
        if len(matches) != 1:
            return Completion(line=line, matches=matches)

        match = matches[0]
        if len(tokens) > 1:
            start, end = tokens[1].span()
            completed = f"{line[:start]}{match}{line[end:]}"
        else:
            completed = f"{line.rstrip()} {match}"
        return Completion(line=completed, matches=matches, committed=True)


__all__ = ["Completion", "TabCompleter", "TabState"]
