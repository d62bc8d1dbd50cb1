"""Command-line interface for eshell."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .controller import InteractiveSession
from .exceptions import StartupError
from .logging_config import parse_log_level, setup_logging
from .session import SessionContext
from .shell import Shell

logger = logging.getLogger(__name__)


def _add_common_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--rc",
        type=Path,
        default=None,
        help="Alias store to use instead of ~/.eshrc.",
    )
    parser.add_argument(
        "--log-level",
        type=parse_log_level,
        default=None,
        help="Logging level name or number (default: $ESHELL_LOG_LEVEL or WARNING).",
    )


def _build_shell(args: argparse.Namespace) -> Shell:
    context = SessionContext.start(rc_path=args.rc)
    return Shell(context)


def _run_exec(args: argparse.Namespace) -> int:
    shell = _build_shell(args)
    return shell.exec(args.command)


def _run_shell(args: argparse.Namespace) -> int:
    shell = _build_shell(args)
    return InteractiveSession(shell).run()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="eshell")
    subparsers = parser.add_subparsers(dest="command_name", required=True)

    exec_parser = subparsers.add_parser("exec", help="Run a single command line")
    _add_common_flags(exec_parser)
    exec_parser.add_argument("command", help="Command line to execute")
    exec_parser.set_defaults(func=_run_exec)

    shell_parser = subparsers.add_parser("shell", help="Start an interactive shell")
    _add_common_flags(shell_parser)
    shell_parser.set_defaults(func=_run_shell)

    args = parser.parse_args(argv)
    setup_logging(args.log_level)
    try:
        exit_code = args.func(args)
    except StartupError as exc:
        logger.debug("startup failed", exc_info=True)
        sys.stderr.write(f"eshell: {exc}\n")
        exit_code = 1
    raise SystemExit(exit_code)


__all__ = ["main"]
