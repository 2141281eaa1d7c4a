"""Configuration management module."""

from mcflation.core.config.settings import (
    AppConfig,
    ConfigManager,
    DataConfig,
    LoggingConfig,
    ServerConfig,
    get_default_config,
    load_config_from_env,
)

__all__ = [
    "AppConfig",
    "ConfigManager",
    "DataConfig",
    "LoggingConfig",
    "ServerConfig",
    "get_default_config",
    "load_config_from_env",
]
