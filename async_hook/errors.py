"""Exceptions raised by the hook engine itself.

Failures raised by hooks or by the base operation are never wrapped in
these types; callers always see the original exception object.
"""


class HookError(Exception):
    """Base class for errors raised by async_hook."""

    pass


class InvalidArgumentError(HookError, ValueError):
    """Raised when a registration, removal or invocation is malformed."""

    pass
