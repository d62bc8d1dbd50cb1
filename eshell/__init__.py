"""eshell package: interactive pipeline shell with a raw-mode line editor."""

from .aliases import AliasStore, resolve_alias
from .completion import Completion, TabCompleter, TabState
from .controller import InteractiveSession
from .exceptions import ShellError
from .session import SessionContext
from .shell import CommandResult, Shell
from .shell_parser import Redirection, RedirectOperator, resolve_redirection, tokenize
from .terminal import LineEditor, RawTerminal

__all__ = [
    "Shell",
    "CommandResult",
    "SessionContext",
    "InteractiveSession",
    "AliasStore",
    "resolve_alias",
    "TabState",
    "TabCompleter",
    "Completion",
    "LineEditor",
    "RawTerminal",
    "Redirection",
    "RedirectOperator",
    "resolve_redirection",
    "tokenize",
    "ShellError",
]
