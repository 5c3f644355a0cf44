"""
Shopify API clients
"""

from .base_client import BaseShopifyAPIClient
from .product_client import ProductAPIClient
from .billing_client import BillingAPIClient
from .theme_client import ThemeAPIClient
from .oauth_client import OAuthAPIClient

__all__ = [
    "BaseShopifyAPIClient",
    "ProductAPIClient",
    "BillingAPIClient",
    "ThemeAPIClient",
    "OAuthAPIClient",
]
