"""Compose before/after/error/wrap hooks around async operations."""

from .composer import apply_wraps, compose, compose_chain, compose_names, snapshot_names
from .config import HookSettings, settings
from .errors import HookError, InvalidArgumentError
from .hook import Hook, HookApi
from .log import configure_logging, disable_logging, enable_logging
from .registry import HookRegistry
from .types import ErrorPolicy, HookEntry, HookKind

__version__ = "1.0.0"

configure_logging(settings)

__all__ = [
    "Hook",
    "HookApi",
    "HookRegistry",
    "HookEntry",
    "HookKind",
    "ErrorPolicy",
    "HookSettings",
    "HookError",
    "InvalidArgumentError",
    "apply_wraps",
    "compose",
    "compose_chain",
    "compose_names",
    "snapshot_names",
    "configure_logging",
    "enable_logging",
    "disable_logging",
    "settings",
]
