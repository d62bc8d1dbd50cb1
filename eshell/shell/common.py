"""Shared shell types."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class CommandResult:
    stdout: str = ""
    stderr: str = ""


__all__ = ["CommandResult"]
