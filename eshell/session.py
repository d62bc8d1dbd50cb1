"""Per-session state shared by the shell and the terminal controller."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .aliases import AliasStore
from .completion import TabState
from .exceptions import AliasStoreError, StartupError


@dataclass
class SessionContext:
    home: Path
    alias_store: AliasStore
    aliases: dict[str, str] = field(default_factory=dict)
    tab_state: TabState = field(default_factory=TabState)

    @classmethod
    def start(cls, *, home: Path | None = None, rc_path: Path | None = None) -> "SessionContext":
        """Resolve the home directory and load (or create) the alias store."""

        if home is None:
            try:
                home = Path.home()
            except (RuntimeError, KeyError) as exc:
                raise StartupError(f"cannot determine home directory: {exc}") from exc
        store = AliasStore(rc_path) if rc_path is not None else AliasStore.for_home(home)
        try:
            store.ensure()
            aliases = store.load()
        except AliasStoreError as exc:
            raise StartupError(str(exc)) from exc
        return cls(home=Path(home), alias_store=store, aliases=aliases)

    def set_alias(self, key: str, value: str) -> None:
        self.aliases[key] = value
        self.alias_store.save(self.aliases)


__all__ = ["SessionContext"]
