"""
Logging module - Structured logging system.
"""

from .setup import configure_logging

__all__ = ["configure_logging"]
