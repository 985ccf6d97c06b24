"""Hook registry keyed by operation name."""

from typing import Any, Callable, Optional, Union

from loguru import logger

from .errors import InvalidArgumentError
from .types import HookEntry, HookKind


def validate_name(name: Any) -> str:
    """Ensure an operation name is a non-empty string."""
    if not isinstance(name, str) or not name:
        raise InvalidArgumentError(f"Hook name must be a non-empty string, got {name!r}")
    return name


class HookRegistry:
    """Ordered hook entries per operation name.

    Each registration is a distinct entry, so the same callable may appear
    several times under the same or different kinds and names. A name whose
    last entry is removed disappears from the registry.
    """

    def __init__(self) -> None:
        self._hooks: dict[str, list[HookEntry]] = {}

    def add(
        self,
        name: str,
        kind: Union[HookKind, str],
        hook: Callable[..., Any],
    ) -> HookEntry:
        """Append a hook to the entries for a name.

        Parameters
        ----------
        name : str
            Operation name to attach the hook to.
        kind : HookKind or str
            One of before/after/error/wrap.
        hook : Callable
            The hook itself.

        Returns
        -------
        HookEntry
            The newly stored entry.
        """
        name = validate_name(name)
        kind = HookKind.parse(kind)
        if not callable(hook):
            raise InvalidArgumentError(f"{kind.value} hook for '{name}' must be callable")

        entry = HookEntry(name=name, kind=kind, hook=hook)
        self._hooks.setdefault(name, []).append(entry)
        logger.debug(f"Registered {entry.label} for '{name}'")
        return entry

    def remove(
        self,
        name: Optional[str] = None,
        hook: Optional[Callable[..., Any]] = None,
    ) -> bool:
        """Remove hooks.

        With no arguments every entry is cleared. With only a name, every
        entry for that name is dropped. With both, the first entry for the
        name whose callable is ``hook`` is dropped.

        Returns
        -------
        bool
            True if at least one entry was removed.
        """
        if name is None and hook is None:
            removed = bool(self._hooks)
            self._hooks.clear()
            logger.debug("Cleared all hooks")
            return removed

        if name is None:
            raise InvalidArgumentError("Removing a single hook requires the name it was registered under")

        name = validate_name(name)

        if hook is None:
            entries = self._hooks.pop(name, None)
            if entries:
                logger.debug(f"Removed {len(entries)} hook(s) for '{name}'")
            return bool(entries)

        entries = self._hooks.get(name)
        if not entries:
            return False

        for i, entry in enumerate(entries):
            if entry.hook is hook:
                del entries[i]
                if not entries:
                    del self._hooks[name]
                logger.debug(f"Removed {entry.label} from '{name}'")
                return True

        return False

    def lookup(self, name: str) -> tuple[HookEntry, ...]:
        """Snapshot of the entries for a name, in registration order."""
        return tuple(self._hooks.get(name, ()))

    def names(self) -> list[str]:
        """Names that currently have at least one entry."""
        return [name for name, entries in self._hooks.items() if entries]

    def list_hooks(self, name: Optional[str] = None) -> dict[str, list[str]]:
        """List registered hooks by name.

        Parameters
        ----------
        name : str, optional
            Restrict the listing to one name.

        Returns
        -------
        dict[str, list[str]]
            Entry labels ("kind:qualname") per name.
        """
        if name is not None:
            return {name: [e.label for e in self._hooks.get(name, [])]}
        return {n: [e.label for e in entries] for n, entries in self._hooks.items()}

    def __contains__(self, name: object) -> bool:
        return bool(self._hooks.get(name)) if isinstance(name, str) else False

    def __len__(self) -> int:
        return sum(len(entries) for entries in self._hooks.values())
