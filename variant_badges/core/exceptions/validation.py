"""
Validation-related exceptions
"""

from typing import Any, Optional
from .base import BadgeAppException


class ValidationError(BadgeAppException):
    """Raised when request data fails validation"""

    status_code = 400

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        **kwargs
    ):
        details = {}
        if field is not None:
            details["field"] = field
        if value is not None:
            details["value"] = value
        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            details=details,
            **kwargs
        )
