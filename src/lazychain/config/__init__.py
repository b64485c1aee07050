"""Configuration module using Pydantic Settings.

Usage:
    from lazychain.config import PipelineSettings, get_settings

    settings = PipelineSettings(take_all_limit=1000)
"""

from lazychain.config.settings import PipelineSettings, get_settings

__all__ = [
    "PipelineSettings",
    "get_settings",
]
