"""
Database-related exceptions
"""

from .base import BadgeAppException
from typing import Optional, Dict, Any


class DatabaseError(BadgeAppException):
    """Base exception for database errors"""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
        error_code: str = "DATABASE_ERROR",
    ):
        super().__init__(
            message=message, error_code=error_code, details=details, cause=cause
        )

    def to_response(self) -> Dict[str, Any]:
        # Storage internals are not exposed to callers
        return {"error": self.message}


class DatabaseConnectionError(DatabaseError):
    """Raised when database connection fails"""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(
            message=message,
            details=details,
            cause=cause,
            error_code="DATABASE_CONNECTION_ERROR",
        )
