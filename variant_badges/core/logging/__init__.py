"""
Logging module for Variant Badges
"""

from .logger import get_logger, setup_logging, StructuredLogger
from .formatters import ConsoleFormatter, JSONFormatter, StructuredFormatter, SimpleFormatter
from .config import LoggingConfig

__all__ = [
    "get_logger",
    "setup_logging",
    "StructuredLogger",
    "ConsoleFormatter",
    "JSONFormatter",
    "StructuredFormatter",
    "SimpleFormatter",
    "LoggingConfig",
]
