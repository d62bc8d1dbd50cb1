"""Alias table persistence and exact-match substitution."""

from __future__ import annotations

import contextlib
import json
import logging
import os
import tempfile
from collections.abc import Mapping
from pathlib import Path

from .exceptions import AliasStoreError

logger = logging.getLogger(__name__)

RC_FILENAME = ".eshrc"
DEFAULT_ALIASES: dict[str, str] = {"ll": "ls -la"}


class AliasStore:
    """JSON-backed alias file; every save rewrites the whole table."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    @classmethod
    def for_home(cls, home: Path) -> "AliasStore":
        return cls(Path(home) / RC_FILENAME)

    def exists(self) -> bool:
        return self.path.is_file()

    def ensure(self) -> None:
        """Create the store with the default aliases if it is missing."""

        if not self.exists():
            logger.debug("creating alias store at %s", self.path)
            self.save(DEFAULT_ALIASES)

    def load(self) -> dict[str, str]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as exc:
            raise AliasStoreError(f"cannot read {self.path}: {exc}") from exc
        if not isinstance(data, dict) or not all(
            isinstance(key, str) and isinstance(value, str) for key, value in data.items()
        ):
            raise AliasStoreError(f"{self.path} must contain an object of strings")
        return data

    def save(self, aliases: Mapping[str, str]) -> None:
        directory = self.path.parent
        try:
            fd, tmp_name = tempfile.mkstemp(prefix=f"{self.path.name}.", dir=directory)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    json.dump(dict(aliases), handle)
                    handle.write("\n")
                os.replace(tmp_name, self.path)
            except BaseException:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_name)
                raise
        except OSError as exc:
            raise AliasStoreError(f"cannot write {self.path}: {exc}") from exc


def resolve_alias(stage: str, aliases: Mapping[str, str]) -> str:
    """Replace ``stage`` when the whole stage text is an alias key."""

    return aliases.get(stage, stage)


__all__ = ["AliasStore", "DEFAULT_ALIASES", "RC_FILENAME", "resolve_alias"]
