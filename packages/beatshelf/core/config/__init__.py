"""Configuration management for beatshelf."""

from beatshelf.core.config.loader import detect_format, load_app_config, load_config
from beatshelf.core.config.models import (
    AppConfig,
    CacheConfig,
    DeviceConfig,
    LoggingConfig,
    PlaylistConfig,
)

__all__ = [
    # Loaders
    "detect_format",
    "load_config",
    "load_app_config",
    # Models
    "AppConfig",
    "CacheConfig",
    "DeviceConfig",
    "LoggingConfig",
    "PlaylistConfig",
]
