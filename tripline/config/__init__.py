"""Runtime configuration helpers."""

from tripline.config.settings import TimelineSettings, resolve_pool_strategy, resolve_settings

__all__ = [
    "TimelineSettings",
    "resolve_pool_strategy",
    "resolve_settings",
]
