"""
ModWatch Utilities Package.

Common utilities shared across the add-on.
Requires Python 3.11+.
"""

from utils.config import Settings, get_settings
from utils.logger import configure_logging, get_logger, LoggerMixin
from utils.text import append_zero, append_zero_if_float, to_proper_case

__all__ = [
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    "LoggerMixin",
    "append_zero",
    "append_zero_if_float",
    "to_proper_case",
]
