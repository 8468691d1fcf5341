"""
Tunnelgate Core Module

Runtime configuration and logging of the tool itself.
"""

from .config import AppSettings, LogSettings, get_app_settings
from .logging import get_logger, setup_logging

__all__ = [
    # Settings
    "AppSettings",
    "LogSettings",
    "get_app_settings",
    # Logging
    "setup_logging",
    "get_logger",
]
