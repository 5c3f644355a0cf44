"""
Configuration-related exceptions
"""

from typing import Optional, Dict, Any
from .base import BadgeAppException


class ConfigurationError(BadgeAppException):
    """Raised when the application configuration is invalid"""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(
            message=message,
            error_code="CONFIGURATION_ERROR",
            details=details,
            cause=cause,
        )
