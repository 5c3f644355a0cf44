"""
Base exception class for Variant Badges
"""

from typing import Optional, Dict, Any


class BadgeAppException(Exception):
    """Base exception for all Variant Badges errors"""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/API responses"""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
            "cause": str(self.cause) if self.cause else None,
            "exception_type": self.__class__.__name__,
        }

    def to_response(self) -> Dict[str, Any]:
        """Body returned to API callers"""
        body: Dict[str, Any] = {"error": self.message}
        if self.details:
            body["details"] = self.details
        return body


class NotFoundError(BadgeAppException):
    """Raised when a requested resource does not exist"""

    status_code = 404

    def __init__(self, message: str, resource: Optional[str] = None, **kwargs):
        super().__init__(
            message,
            error_code="NOT_FOUND",
            details={"resource": resource} if resource else None,
            **kwargs,
        )

    def to_response(self) -> Dict[str, Any]:
        return {"error": self.message}


class AuthenticationError(BadgeAppException):
    """Raised when a merchant request cannot be authenticated"""

    status_code = 401

    def __init__(self, message: str, needs_auth: bool = False, **kwargs):
        super().__init__(message, error_code="AUTHENTICATION_ERROR", **kwargs)
        self.needs_auth = needs_auth

    def to_response(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.message}
        if self.needs_auth:
            body["needsAuth"] = True
        if self.details:
            body.update(self.details)
        return body
