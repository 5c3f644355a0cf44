"""
Custom exceptions for the Variant Badges service
"""

from .base import BadgeAppException, NotFoundError, AuthenticationError
from .config import ConfigurationError
from .database import DatabaseError, DatabaseConnectionError
from .validation import ValidationError
from .billing import PlanLimitExceededError
from .shopify import ShopifyAPIError, ShopifyAuthError

__all__ = [
    "BadgeAppException",
    "NotFoundError",
    "AuthenticationError",
    "ConfigurationError",
    "DatabaseError",
    "DatabaseConnectionError",
    "ValidationError",
    "PlanLimitExceededError",
    "ShopifyAPIError",
    "ShopifyAuthError",
]
