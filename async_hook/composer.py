"""Composition of hook entries around a base operation.

Composition happens in two layers. ``wrap`` hooks are folded around the
base operation first (first-registered innermost), then ``before``,
``after`` and ``error`` hooks are sequenced around the wrapped base.
Several names are composed by folding right to left so the first-listed
name ends up outermost.
"""

import inspect
from typing import Any, Callable, Sequence

from loguru import logger

from .errors import InvalidArgumentError
from .registry import HookRegistry, validate_name
from .types import ErrorPolicy, HookEntry, HookKind

Operation = Callable[[Any], Any]


async def call_maybe_async(fn: Callable[..., Any], *args: Any) -> Any:
    """Call fn and await the result if it is awaitable."""
    result = fn(*args)
    if inspect.isawaitable(result):
        result = await result
    return result


def _select(entries: Sequence[HookEntry], kind: HookKind) -> tuple[Callable[..., Any], ...]:
    return tuple(entry.hook for entry in entries if entry.kind is kind)


def apply_wraps(entries: Sequence[HookEntry], method: Operation) -> Operation:
    """Apply every wrap hook to method in registration order.

    Parameters
    ----------
    entries : Sequence[HookEntry]
        Entries for one name; non-wrap entries are ignored.
    method : Callable
        The operation to wrap.

    Returns
    -------
    Callable
        ``wN(...w2(w1(method)))``, or method itself when there are no wrap hooks.
    """
    wrapped = method
    for entry in entries:
        if entry.kind is not HookKind.WRAP:
            continue
        wrapped = entry.hook(wrapped)
        if not callable(wrapped):
            raise InvalidArgumentError(
                f"Wrap hook {entry.label} for '{entry.name}' returned {type(wrapped).__name__}, not a callable"
            )
    return wrapped


async def _recover(
    name: str,
    error_hooks: tuple[Callable[..., Any], ...],
    error: Exception,
    options: Any,
    error_policy: ErrorPolicy,
) -> Any:
    """Give error hooks a chance to turn a failure into a result."""
    for hook in error_hooks:
        try:
            result = await call_maybe_async(hook, error, options)
        except Exception as hook_error:
            logger.debug(
                f"Error hook for '{name}' raised {type(hook_error).__name__} "
                f"while handling {type(error).__name__}"
            )
            if error_policy is ErrorPolicy.STOP:
                raise
            continue

        logger.debug(f"Error hook for '{name}' recovered from {type(error).__name__}")
        return result

    raise error


def compose(
    entries: Sequence[HookEntry],
    method: Operation,
    error_policy: ErrorPolicy = ErrorPolicy.CONTINUE,
) -> Operation:
    """Build one callable running the given hooks around method.

    Parameters
    ----------
    entries : Sequence[HookEntry]
        Snapshot of the entries registered under a single name.
    method : Callable
        Base operation taking the options payload.
    error_policy : ErrorPolicy
        How to proceed when an error hook raises.

    Returns
    -------
    Callable
        A coroutine function ``composed(options)``. If entries is empty,
        method is returned unchanged.

    Notes
    -----
    The returned callable:

    1. awaits each ``before`` hook with ``options``;
    2. awaits the wrapped base with ``options``;
    3. awaits each ``after`` hook with ``(result, options)`` and returns the
       base result regardless of what the after hooks return;
    4. on any failure in 1-3, awaits ``error`` hooks with
       ``(error, options)``. The first one that returns normally supplies
       the result. Without error hooks the original exception propagates.
    """
    entries = tuple(entries)
    if not entries:
        return method

    name = entries[0].name
    wrapped = apply_wraps(entries, method)
    before_hooks = _select(entries, HookKind.BEFORE)
    after_hooks = _select(entries, HookKind.AFTER)
    error_hooks = _select(entries, HookKind.ERROR)

    async def composed(options: Any) -> Any:
        try:
            for hook in before_hooks:
                await call_maybe_async(hook, options)

            result = await call_maybe_async(wrapped, options)

            for hook in after_hooks:
                await call_maybe_async(hook, result, options)
        except Exception as error:
            if not error_hooks:
                raise
            return await _recover(name, error_hooks, error, options, error_policy)

        return result

    composed.__qualname__ = f"composed[{name}]"
    wrap_count = sum(1 for entry in entries if entry.kind is HookKind.WRAP)
    logger.debug(
        f"Composed '{name}': {wrap_count} wrap, "
        f"{len(before_hooks)} before, {len(after_hooks)} after, {len(error_hooks)} error"
    )
    return composed


def compose_chain(
    snapshots: Sequence[Sequence[HookEntry]],
    method: Operation,
    error_policy: ErrorPolicy = ErrorPolicy.CONTINUE,
) -> Operation:
    """Fold per-name snapshots right to left around method.

    The last snapshot is composed closest to method and the first one
    outermost, so the first name's before hooks run first and its
    after/error hooks run last.
    """
    composed = method
    for entries in reversed(snapshots):
        composed = compose(entries, composed, error_policy)
    return composed


def normalize_names(names: Any) -> tuple[str, ...]:
    """Turn a name or ordered sequence of names into a tuple of names."""
    if isinstance(names, str):
        return (validate_name(names),)
    if not isinstance(names, (list, tuple)):
        raise InvalidArgumentError(
            f"Expected a hook name or a list of names, got {type(names).__name__}"
        )
    if not names:
        raise InvalidArgumentError("Name list must not be empty")
    return tuple(validate_name(n) for n in names)


def compose_names(
    registry: HookRegistry,
    names: Any,
    method: Operation,
    error_policy: ErrorPolicy = ErrorPolicy.CONTINUE,
) -> Operation:
    """Snapshot the registry for names and compose them around method.

    Parameters
    ----------
    registry : HookRegistry
        Registry to read entries from.
    names : str or Sequence[str]
        Single name, or names ordered outermost first.
    method : Callable
        Base operation.
    error_policy : ErrorPolicy
        How to proceed when an error hook raises.

    Returns
    -------
    Callable
        The composed callable (method itself if no name has entries).
    """
    return compose_chain(snapshot_names(registry, names), method, error_policy)


def snapshot_names(registry: HookRegistry, names: Any) -> list[tuple[HookEntry, ...]]:
    """Capture the current entries for each name, outermost first."""
    return [registry.lookup(name) for name in normalize_names(names)]
