from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .types import ErrorPolicy


class HookSettings(BaseSettings):
    """
    Engine defaults loaded from the environment.

    Priority (highest to lowest):
    1. Keyword arguments
    2. Environment variables (ASYNC_HOOK_*)
    3. .env file
    4. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="ASYNC_HOOK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # How error hooks are chained when one of them raises
    ERROR_POLICY: ErrorPolicy = ErrorPolicy.CONTINUE

    # Library logging is off unless explicitly requested
    ENABLE_LOGGING: bool = False

    @field_validator("ERROR_POLICY", mode="before")
    @classmethod
    def parse_error_policy(cls, v: Any) -> Any:
        """Accept policy names case-insensitively."""
        if isinstance(v, str):
            normalized = v.strip().lower()
            valid = {p.value for p in ErrorPolicy}
            if normalized not in valid:
                raise ValueError(
                    f"ERROR_POLICY must be one of {sorted(valid)}, got {v!r}"
                )
            return normalized
        return v


settings = HookSettings()
