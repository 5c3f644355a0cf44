"""
Main logging module for Variant Badges
"""

import logging
from typing import Optional, Dict

from .config import LoggingConfig
from .handlers import FileHandler, ConsoleHandler

# Global logger cache
_loggers: Dict[str, logging.Logger] = {}


class StructuredLogger:
    """Wrapper around standard Python logger that supports structured logging with keyword arguments"""

    def __init__(self, logger: logging.Logger):
        self._logger = logger

    def _format_message(self, message: str, **kwargs) -> str:
        """Format message with structured data as key=value pairs"""
        if not kwargs:
            return message

        structured_parts = []
        for key, value in kwargs.items():
            if value is None:
                continue
            if isinstance(value, (dict, list)):
                structured_parts.append(f"{key}={str(value)}")
            elif isinstance(value, str) and " " in value:
                structured_parts.append(f'{key}="{value}"')
            else:
                structured_parts.append(f"{key}={value}")

        if structured_parts:
            return f"{message} | {' | '.join(structured_parts)}"
        return message

    def debug(self, message: str, **kwargs):
        self._logger.debug(self._format_message(message, **kwargs))

    def info(self, message: str, **kwargs):
        self._logger.info(self._format_message(message, **kwargs))

    def warning(self, message: str, **kwargs):
        self._logger.warning(self._format_message(message, **kwargs))

    def error(self, message: str, **kwargs):
        self._logger.error(self._format_message(message, **kwargs))

    def critical(self, message: str, **kwargs):
        self._logger.critical(self._format_message(message, **kwargs))

    def exception(self, message: str, **kwargs):
        """Log at ERROR with the active exception's traceback"""
        self._logger.exception(self._format_message(message, **kwargs))


def setup_logging(config: Optional[LoggingConfig] = None) -> None:
    """Setup logging configuration for the application"""
    if config is None:
        config = LoggingConfig()

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    level = getattr(logging, config.level.upper(), logging.INFO)
    root_logger.setLevel(level)

    if config.file.enabled:
        if config.file.app_log_enabled:
            root_logger.addHandler(
                FileHandler.create_app_handler(
                    log_dir=config.file.log_dir,
                    max_bytes=config.file.max_file_size,
                    backup_count=config.file.backup_count,
                    level=level,
                )
            )
        if config.file.error_log_enabled:
            root_logger.addHandler(
                FileHandler.create_error_handler(
                    log_dir=config.file.log_dir,
                    max_bytes=config.file.max_file_size,
                    backup_count=config.file.backup_count,
                )
            )

    if config.console.enabled:
        root_logger.addHandler(
            ConsoleHandler.create_handler(
                level=getattr(logging, config.console.level.upper(), logging.INFO),
                formatter_type=config.format,
            )
        )

    for name in config.quiet_loggers:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).info("Logging system initialized")


def get_logger(name: str) -> StructuredLogger:
    """Get a structured logger instance"""
    if name not in _loggers:
        _loggers[name] = logging.getLogger(name)

    return StructuredLogger(_loggers[name])
