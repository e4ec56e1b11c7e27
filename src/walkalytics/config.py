"""
Application settings.

Values come from environment variables prefixed with ``WALKALYTICS_``::

    WALKALYTICS_API_KEY=abcd1234
    WALKALYTICS_API_URL=https://api.walkalytics.com/v1
    WALKALYTICS_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from functools import lru_cache

from pydantic import BaseModel, Field, field_validator

ENV_PREFIX = "WALKALYTICS_"


class Settings(BaseModel):
    """Runtime configuration for the client and CLI."""

    model_config = {"str_strip_whitespace": True}

    app_name: str = Field(default="walkalytics")
    app_env: str = Field(default="development")
    debug: bool = False
    api_url: str = Field(default="https://api.walkalytics.com/v1")
    api_key: str | None = Field(default=None, description="Subscription key")
    log_level: str = Field(default="INFO")

    @field_validator("api_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()

    @field_validator("api_key")
    @classmethod
    def _empty_key_is_none(cls, value: str | None) -> str | None:
        return value or None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from ``WALKALYTICS_*`` environment variables."""
        environ = os.environ if environ is None else environ
        values = {
            name: environ[ENV_PREFIX + name.upper()]
            for name in cls.model_fields
            if ENV_PREFIX + name.upper() in environ
        }
        return cls(**values)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings (read once from the environment)."""
    return Settings.from_env()


def resolve_key(key: str | None) -> str | None:
    """Return ``key``, or the configured subscription key when it is None."""
    return key if key is not None else get_settings().api_key
