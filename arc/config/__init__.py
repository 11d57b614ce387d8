"""Configuration management package.

Provides configuration access with defaults, file loading,
and environment variable overrides.
"""

from arc.config.config_models import (
    Config,
    ChannelConfig,
    DeviceConfig,
    LoggingConfig,
    LogLevel
)
from arc.config.config_manager import ConfigManager

__all__ = [
    'ConfigManager',
    'Config',
    'ChannelConfig',
    'DeviceConfig',
    'LoggingConfig',
    'LogLevel',
]
