"""
Shopify Admin API exceptions
"""

from typing import Any, Dict, Optional
from .base import BadgeAppException


class ShopifyAPIError(BadgeAppException):
    """Raised when a call to the Shopify Admin API fails"""

    status_code = 500

    def __init__(
        self,
        message: str,
        shop_domain: Optional[str] = None,
        status: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        merged = {"shop_domain": shop_domain, "status": status}
        if details:
            merged.update(details)
        super().__init__(
            message=message,
            error_code="SHOPIFY_API_ERROR",
            details=merged,
            cause=cause,
        )
        self.shop_domain = shop_domain
        self.status = status


class ShopifyAuthError(ShopifyAPIError):
    """Raised when Shopify rejects the stored access token"""

    status_code = 401

    def __init__(self, shop_domain: Optional[str] = None, **kwargs):
        super().__init__(
            "Shop not authenticated", shop_domain=shop_domain, status=401, **kwargs
        )
        self.error_code = "SHOPIFY_AUTH_ERROR"

    def to_response(self) -> Dict[str, Any]:
        return {
            "error": self.message,
            "needsAuth": True,
            "hint": "Access token expired or revoked",
        }
