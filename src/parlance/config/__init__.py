"""
Configuration module for parlance.

Exports the main components for convenient imports.
"""

from .loader import load_config
from .schema import (
    DateTimeFormatOptions,
    DefaultFormats,
    I18nConfig,
    LoggingConfig,
    NumberFormatOptions,
)

__all__ = [
    "load_config",
    "I18nConfig",
    "DefaultFormats",
    "DateTimeFormatOptions",
    "NumberFormatOptions",
    "LoggingConfig",
]
