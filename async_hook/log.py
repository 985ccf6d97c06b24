"""Loguru switches for the library's own log records.

Records are emitted under the ``async_hook`` logger name and are disabled
on import; applications opt in with ``enable_logging()`` or
``ASYNC_HOOK_ENABLE_LOGGING=true``.
"""

from typing import Optional

from loguru import logger

from .config import HookSettings
from .config import settings as default_settings

LOGGER_NAME = "async_hook"


def enable_logging() -> None:
    """Let async_hook records reach loguru sinks."""
    logger.enable(LOGGER_NAME)


def disable_logging() -> None:
    """Silence async_hook records."""
    logger.disable(LOGGER_NAME)


def configure_logging(settings: Optional[HookSettings] = None) -> None:
    """Apply the ENABLE_LOGGING setting."""
    settings = settings or default_settings
    if settings.ENABLE_LOGGING:
        enable_logging()
    else:
        disable_logging()
