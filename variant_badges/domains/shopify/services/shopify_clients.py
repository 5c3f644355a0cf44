"""
Bundle of Shopify API clients sharing one HTTP connection pool
"""

from dataclasses import dataclass
from typing import Optional

import httpx
from fastapi import Request

from variant_badges.core.config.settings import ShopifySettings
from .api import ProductAPIClient, BillingAPIClient, ThemeAPIClient, OAuthAPIClient


@dataclass
class ShopifyClients:
    products: ProductAPIClient
    billing: BillingAPIClient
    themes: ThemeAPIClient
    oauth: OAuthAPIClient
    http_client: Optional[httpx.AsyncClient] = None

    @classmethod
    def create(cls, shopify_settings: ShopifySettings) -> "ShopifyClients":
        http_client = httpx.AsyncClient(
            timeout=httpx.Timeout(shopify_settings.SHOPIFY_HTTP_TIMEOUT, connect=10.0),
            headers={"User-Agent": "VariantBadges/1.0"},
        )
        return cls(
            products=ProductAPIClient(shopify_settings, http_client),
            billing=BillingAPIClient(shopify_settings, http_client),
            themes=ThemeAPIClient(shopify_settings, http_client),
            oauth=OAuthAPIClient(shopify_settings, http_client),
            http_client=http_client,
        )

    async def close(self) -> None:
        if self.http_client is not None:
            await self.http_client.aclose()
            self.http_client = None


def get_shopify_clients(request: Request) -> ShopifyClients:
    """FastAPI dependency returning the application's Shopify clients"""
    clients: Optional[ShopifyClients] = getattr(request.app.state, "shopify", None)
    if clients is None:
        raise RuntimeError("Shopify clients have not been initialized")
    return clients
