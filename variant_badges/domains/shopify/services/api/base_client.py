"""
Base Shopify API client with common functionality
"""

from typing import Dict, Any, Optional

import httpx

from variant_badges.core.config.settings import ShopifySettings
from variant_badges.core.exceptions import ShopifyAPIError, ShopifyAuthError
from variant_badges.core.logging import get_logger

logger = get_logger(__name__)


class BaseShopifyAPIClient:
    """Base Shopify API client with common functionality"""

    def __init__(
        self,
        shopify_settings: ShopifySettings,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.settings = shopify_settings
        self.base_url = "https://{shop}"
        self.api_version = shopify_settings.SHOPIFY_API_VERSION
        self.endpoint = "/admin/api/{version}/graphql.json"
        self.timeout = httpx.Timeout(shopify_settings.SHOPIFY_HTTP_TIMEOUT, connect=10.0)

        # Shared client when handed one; otherwise created lazily and owned here
        self.http_client = http_client
        self._owns_client = http_client is None

    async def connect(self):
        """Initialize HTTP client"""
        if self.http_client is None:
            self.http_client = httpx.AsyncClient(
                timeout=self.timeout,
                headers={
                    "Content-Type": "application/json",
                    "User-Agent": "VariantBadges/1.0",
                },
            )
            self._owns_client = True

    async def close(self):
        """Close HTTP client"""
        if self.http_client and self._owns_client:
            await self.http_client.aclose()
            self.http_client = None

    def _get_shop_url(self, shop_domain: str) -> str:
        """Get full shop URL"""
        shop_name = shop_domain.replace("https://", "").replace("http://", "").strip("/")
        if not shop_name.endswith(".myshopify.com"):
            shop_name = f"{shop_name}.myshopify.com"
        return self.base_url.format(shop=shop_name)

    def _get_rest_endpoint(self, shop_domain: str, path: str) -> str:
        """REST Admin API URL for a path such as 'shop.json'"""
        return (
            f"{self._get_shop_url(shop_domain)}/admin/api/{self.api_version}/"
            f"{path.lstrip('/')}"
        )

    def _get_graphql_endpoint(self, shop_domain: str) -> str:
        """Get GraphQL endpoint URL"""
        return self._get_shop_url(shop_domain) + self.endpoint.format(
            version=self.api_version
        )

    def _get_headers(self, access_token: str) -> Dict[str, str]:
        """Get request headers with access token"""
        return {
            "Content-Type": "application/json",
            "X-Shopify-Access-Token": access_token,
        }

    async def request(
        self,
        method: str,
        url: str,
        shop_domain: str,
        access_token: Optional[str] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        """
        Send one request to Shopify. No retries.

        Raises:
            ShopifyAuthError: Shopify answered 401
            ShopifyAPIError: transport failure or any other non-2xx status
        """
        await self.connect()
        headers = self._get_headers(access_token) if access_token else {}

        try:
            response = await self.http_client.request(
                method, url, json=json, headers=headers
            )
        except httpx.HTTPError as e:
            logger.error(
                "Shopify request failed",
                shop_domain=shop_domain,
                method=method,
                url=url,
                error=str(e),
            )
            raise ShopifyAPIError(
                "Failed to reach Shopify", shop_domain=shop_domain, cause=e
            ) from e

        if response.status_code == 401:
            logger.warning("Shopify returned 401 - access token invalid", shop_domain=shop_domain)
            raise ShopifyAuthError(shop_domain=shop_domain)

        if response.is_error:
            logger.error(
                f"HTTP error {response.status_code}: {response.text[:200]}",
                shop_domain=shop_domain,
                method=method,
            )
            raise ShopifyAPIError(
                f"Shopify returned {response.status_code}",
                shop_domain=shop_domain,
                status=response.status_code,
                details={"body": response.text[:200]},
            )

        return response

    async def execute_query(
        self,
        query: str,
        variables: Dict[str, Any],
        shop_domain: str,
        access_token: str,
    ) -> Dict[str, Any]:
        """Execute GraphQL query and return its data payload"""
        response = await self.request(
            "POST",
            self._get_graphql_endpoint(shop_domain),
            shop_domain,
            access_token,
            json={"query": query, "variables": variables},
        )
        data = response.json()

        # Handle GraphQL errors
        if data.get("errors"):
            error_messages = [
                error.get("message", "Unknown error") for error in data["errors"]
            ]
            raise ShopifyAPIError(
                "GraphQL query errors",
                shop_domain=shop_domain,
                details={"errors": error_messages},
            )

        return data.get("data") or {}
