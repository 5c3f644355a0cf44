"""
Plan and billing exceptions
"""

from typing import Any, Dict
from .base import BadgeAppException


class PlanLimitExceededError(BadgeAppException):
    """Raised when a badge write would grow past the free plan's product cap"""

    status_code = 403

    def __init__(self, current_products: int, max_products: int):
        super().__init__(
            message="Product limit reached",
            error_code="PLAN_LIMIT_EXCEEDED",
            details={
                "current_products": current_products,
                "max_products": max_products,
            },
        )
        self.current_products = current_products
        self.max_products = max_products

    def to_response(self) -> Dict[str, Any]:
        return {
            "error": self.message,
            "currentProducts": self.current_products,
            "maxProducts": self.max_products,
            "needsUpgrade": True,
        }
