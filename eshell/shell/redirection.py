"""Opening redirection targets."""

from __future__ import annotations

import logging
import os
from typing import BinaryIO

from ..exceptions import InputError
from ..shell_parser import Redirection

logger = logging.getLogger(__name__)

FILE_MODE = 0o666


def open_target(redirection: Redirection) -> BinaryIO:
    """Open the target for writing; ``>`` truncates and ``>>`` appends."""

    if not redirection.target:
        raise InputError(f"missing file name after {redirection.operator.value}")
    flags = os.O_WRONLY | os.O_CREAT
    flags |= os.O_APPEND if redirection.append else os.O_TRUNC
    try:
        fd = os.open(redirection.target, flags, FILE_MODE)
    except OSError as exc:
        raise InputError(f"{redirection.target}: {exc.strerror or exc}") from exc
    logger.debug("opened %s for %s", redirection.target, redirection.operator.name.lower())
    return os.fdopen(fd, "wb")


def apply_redirection_only(redirection: Redirection) -> None:
    """Open and close the target: truncate for ``>``, touch for ``>>``.

    Used for stages with no command and for targets overridden by a later
    redirection on the same line.
    """

    open_target(redirection).close()


__all__ = ["FILE_MODE", "open_target", "apply_redirection_only"]
