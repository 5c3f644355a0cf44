"""
Logging configuration for Variant Badges
"""

from dataclasses import dataclass
from typing import Any, Dict

from pydantic import BaseModel, Field


@dataclass
class FileHandlerConfig:
    """File handler configuration"""

    enabled: bool = False
    log_dir: str = "logs"
    max_file_size: int = 10485760  # 10MB
    backup_count: int = 5
    app_log_enabled: bool = True
    error_log_enabled: bool = True


@dataclass
class ConsoleHandlerConfig:
    """Console handler configuration"""

    enabled: bool = True
    level: str = "INFO"


class LoggingConfig(BaseModel):
    """Complete logging configuration"""

    level: str = "INFO"
    format: str = "console"  # console, json, structured or simple

    file: FileHandlerConfig = Field(default_factory=FileHandlerConfig)
    console: ConsoleHandlerConfig = Field(default_factory=ConsoleHandlerConfig)

    # Third-party loggers quieted to WARNING
    quiet_loggers: tuple = ("httpx", "httpcore", "sqlalchemy.engine", "uvicorn.access")

    @classmethod
    def from_settings(cls, logging_settings) -> "LoggingConfig":
        """Build the config from LoggingSettings"""
        return cls(
            level=logging_settings.LOG_LEVEL,
            format=logging_settings.LOG_FORMAT,
            file=FileHandlerConfig(
                enabled=logging_settings.LOG_FILE_ENABLED,
                log_dir=logging_settings.LOG_DIR,
                max_file_size=logging_settings.LOG_MAX_FILE_SIZE,
                backup_count=logging_settings.LOG_BACKUP_COUNT,
            ),
            console=ConsoleHandlerConfig(level=logging_settings.LOG_LEVEL),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "level": self.level,
            "format": self.format,
            "file": {
                "enabled": self.file.enabled,
                "log_dir": self.file.log_dir,
                "max_file_size": self.file.max_file_size,
                "backup_count": self.file.backup_count,
                "app_log_enabled": self.file.app_log_enabled,
                "error_log_enabled": self.file.error_log_enabled,
            },
            "console": {
                "enabled": self.console.enabled,
                "level": self.console.level,
            },
        }
