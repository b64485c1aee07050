"""Configuration settings using Pydantic Settings.

Provides typed pipeline configuration with environment variable support.

Usage:
    from lazychain.config import PipelineSettings

    # Load from environment variables (LAZYCHAIN_*)
    settings = PipelineSettings()

    # Or override with explicit values
    settings = PipelineSettings(take_all_limit=10_000)
    lazy(numbers(), settings=settings).take_all()
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PipelineSettings(BaseSettings):  # type: ignore[misc]
    """Configuration for lazy pipelines.

    Attributes:
        take_all_limit: Upper bound on the results materialized by
            `take_all()` and by strict operators. None means unbounded.
            Guards against draining a generator source that never ends.

    Environment Variables:
        LAZYCHAIN_TAKE_ALL_LIMIT
    """

    model_config = SettingsConfigDict(
        env_prefix="LAZYCHAIN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    take_all_limit: int | None = Field(default=None, ge=0)


@lru_cache(maxsize=1)
def get_settings() -> PipelineSettings:
    """Default settings, read from the environment once per process."""
    return PipelineSettings()
