"""Shell package: builtins, redirection and the pipeline executor."""

from .common import CommandResult
from .core import Shell

__all__ = ["Shell", "CommandResult"]
