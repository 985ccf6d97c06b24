"""Hook types and dataclasses."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Union

from .errors import InvalidArgumentError


class HookKind(Enum):
    """When and how a hook participates in an invocation."""

    BEFORE = "before"
    AFTER = "after"
    ERROR = "error"
    WRAP = "wrap"

    @classmethod
    def parse(cls, value: Union["HookKind", str]) -> "HookKind":
        """Coerce a kind name or member into a HookKind.

        Parameters
        ----------
        value : HookKind or str
            A member, or its string value (case-insensitive).

        Returns
        -------
        HookKind
            The matching member.

        Raises
        ------
        InvalidArgumentError
            If the value does not name a known kind.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        valid = ", ".join(k.value for k in cls)
        raise InvalidArgumentError(f"Unknown hook kind {value!r} (expected one of: {valid})")


class ErrorPolicy(Enum):
    """What happens when an error hook itself raises."""

    CONTINUE = "continue"  # try the next error hook, re-raise the original failure last
    STOP = "stop"  # re-raise the error hook's exception immediately

    @classmethod
    def parse(cls, value: Union["ErrorPolicy", str]) -> "ErrorPolicy":
        """Coerce a policy name or member into an ErrorPolicy.

        Raises
        ------
        InvalidArgumentError
            If the value does not name a known policy.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        valid = ", ".join(p.value for p in cls)
        raise InvalidArgumentError(f"Unknown error policy {value!r} (expected one of: {valid})")


@dataclass(frozen=True)
class HookEntry:
    """A registered hook."""

    name: str
    kind: HookKind
    hook: Callable[..., Any]

    @property
    def label(self) -> str:
        """Readable identifier for listings and log records."""
        hook_name = getattr(self.hook, "__qualname__", None) or repr(self.hook)
        return f"{self.kind.value}:{hook_name}"
