# ABOUTME: Configuration package initialization
# ABOUTME: Exports configuration classes and logging utilities for the onion core

from onion.config.settings import OnionSettings, ApplicationConfig, get_settings
from onion.config.logging import (
    LoggerConfig,
    LoggingSettings,
    setup_logging,
    get_logger,
)

__all__ = [
    "OnionSettings",
    "ApplicationConfig",
    "get_settings",
    "LoggerConfig",
    "LoggingSettings",
    "setup_logging",
    "get_logger",
]
