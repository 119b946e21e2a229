"""Configuration management for runnercache."""

from runnercache.core.config.loader import load_config, load_settings
from runnercache.core.config.models import CACHE_SIZE_LIMIT_BYTES, CacheSettings, LoggingConfig

__all__ = [
    # Loaders
    "load_config",
    "load_settings",
    # Models
    "CacheSettings",
    "LoggingConfig",
    "CACHE_SIZE_LIMIT_BYTES",
]
