"""Prompt rendering."""

from __future__ import annotations

import getpass
import os
import socket

from yachalk import chalk


def format_prompt() -> str:
    """Return ``user@host:~cwd$ `` in bold bright yellow."""

    cwd = os.getcwd()
    return chalk.yellow_bright.bold(f"{getpass.getuser()}@{socket.gethostname()}:~{cwd}$ ")


__all__ = ["format_prompt"]
