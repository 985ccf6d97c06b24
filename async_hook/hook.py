"""Public hook API: registration, removal and invocation."""

from typing import Any, Awaitable, Callable, Optional, Sequence, Union

from loguru import logger

from .composer import call_maybe_async, compose_chain, normalize_names, snapshot_names
from .config import HookSettings
from .config import settings as default_settings
from .errors import InvalidArgumentError
from .registry import HookRegistry, validate_name
from .types import ErrorPolicy, HookEntry, HookKind

Names = Union[str, Sequence[str]]

# Distinguishes "no payload given" from an explicit None payload
_MISSING: Any = object()


class HookApi:
    """Registration-only view of a Hook.

    Exposes ``before``, ``after``, ``error``, ``wrap``, ``add_hook`` and
    ``remove`` without the ability to invoke operations, for handing to
    plugins that should only attach behavior.
    """

    def __init__(self, hook: "Hook") -> None:
        self.before = hook.before
        self.after = hook.after
        self.error = hook.error
        self.wrap = hook.wrap
        self.add_hook = hook.add_hook
        self.remove = hook.remove


class Hook:
    """Named hook collection that runs operations through their hooks.

    Calling the instance with a name (or list of names), a base operation
    and an options payload composes every hook registered for those names
    around the operation and runs it::

        hook = Hook()
        hook.before("save", validate)
        hook.after("save", audit)
        result = await hook("save", save_record, {"id": 1})

    Each instance owns its own registry; nothing is shared between
    instances.
    """

    def __init__(
        self,
        settings: Optional[HookSettings] = None,
        error_policy: Optional[Union[ErrorPolicy, str]] = None,
    ) -> None:
        """Initialize an empty hook collection.

        Parameters
        ----------
        settings : HookSettings, optional
            Engine defaults; the module-level settings are used if omitted.
        error_policy : ErrorPolicy or str, optional
            Overrides ``settings.ERROR_POLICY``.
        """
        self.settings = settings or default_settings
        self.error_policy = ErrorPolicy.parse(
            error_policy if error_policy is not None else self.settings.ERROR_POLICY
        )
        self.registry = HookRegistry()
        self.api = HookApi(self)

    def add_hook(
        self,
        kind: Union[HookKind, str],
        name: str,
        fn: Optional[Callable[..., Any]] = None,
    ) -> Any:
        """Register a hook of the given kind under a name.

        Without ``fn``, returns a decorator that registers the decorated
        function and returns it unchanged.
        """
        kind = HookKind.parse(kind)
        name = validate_name(name)

        if fn is None:

            def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
                self.registry.add(name, kind, func)
                return func

            return decorator

        self.registry.add(name, kind, fn)
        return fn

    def before(self, name: str, fn: Optional[Callable[..., Any]] = None) -> Any:
        """Run ``fn(options)`` before the operation."""
        return self.add_hook(HookKind.BEFORE, name, fn)

    def after(self, name: str, fn: Optional[Callable[..., Any]] = None) -> Any:
        """Run ``fn(result, options)`` after the operation succeeds."""
        return self.add_hook(HookKind.AFTER, name, fn)

    def error(self, name: str, fn: Optional[Callable[..., Any]] = None) -> Any:
        """Run ``fn(error, options)`` when the operation or a hook fails.

        A normal return from ``fn`` becomes the invocation's result.
        """
        return self.add_hook(HookKind.ERROR, name, fn)

    def wrap(self, name: str, fn: Optional[Callable[..., Any]] = None) -> Any:
        """Replace the operation with ``fn(method)``."""
        return self.add_hook(HookKind.WRAP, name, fn)

    def remove(
        self,
        name: Optional[str] = None,
        fn: Optional[Callable[..., Any]] = None,
    ) -> bool:
        """Remove one hook, every hook for a name, or every hook.

        Parameters
        ----------
        name : str, optional
            Name to remove hooks from. If omitted together with ``fn``,
            the whole collection is cleared.
        fn : Callable, optional
            Remove only the first entry for ``name`` registered with this
            exact callable.

        Returns
        -------
        bool
            True if anything was removed.
        """
        return self.registry.remove(name, fn)

    def __call__(
        self,
        names: Names,
        method: Callable[[Any], Any],
        options: Any = _MISSING,
    ) -> Awaitable[Any]:
        """Compose the hooks for names around method and run it.

        Arguments are validated immediately; the hook lists are captured
        at this point, so registrations made afterwards do not affect
        this invocation.

        Parameters
        ----------
        names : str or Sequence[str]
            Hook name, or names ordered outermost first.
        method : Callable
            Base operation, called with ``options``.
        options : Any, optional
            Payload passed to the operation and every hook. Defaults to a
            new empty dict.

        Returns
        -------
        Awaitable
            Resolves to the final result.

        Raises
        ------
        InvalidArgumentError
            If method is not callable or names are malformed.
        """
        if not callable(method):
            raise InvalidArgumentError("method for hook must be a function")

        snapshots = snapshot_names(self.registry, names)
        if options is _MISSING:
            options = {}
        return self._execute(snapshots, method, options)

    async def _execute(
        self,
        snapshots: list[tuple[HookEntry, ...]],
        method: Callable[[Any], Any],
        options: Any,
    ) -> Any:
        composed = compose_chain(snapshots, method, self.error_policy)
        return await call_maybe_async(composed, options)

    def bind(self, names: Names, method: Callable[[Any], Any]) -> Callable[..., Awaitable[Any]]:
        """Return a coroutine function that runs method through its hooks.

        The hooks are looked up again on every call, so the bound callable
        always reflects the registry at the time it is called.
        """
        if not callable(method):
            raise InvalidArgumentError("method for hook must be a function")
        names = normalize_names(names)

        async def bound(options: Any = _MISSING) -> Any:
            return await self(list(names), method, options)

        bound.__qualname__ = f"bound[{','.join(names)}]"
        logger.debug(f"Bound {getattr(method, '__qualname__', method)!s} to {list(names)}")
        return bound

    def names(self) -> list[str]:
        """Names that currently have hooks."""
        return self.registry.names()

    def entries(self, name: str) -> tuple[HookEntry, ...]:
        """Registered entries for a name, in registration order."""
        return self.registry.lookup(name)

    def list_hooks(self, name: Optional[str] = None) -> dict[str, list[str]]:
        """Hook labels per name."""
        return self.registry.list_hooks(name)

    def __repr__(self) -> str:
        return f"Hook(names={self.names()!r}, error_policy={self.error_policy.value!r})"
