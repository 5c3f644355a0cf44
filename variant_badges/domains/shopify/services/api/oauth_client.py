"""
Shopify OAuth authorization code flow
"""

from typing import Any, Dict
from urllib.parse import urlencode

from .base_client import BaseShopifyAPIClient


class OAuthAPIClient(BaseShopifyAPIClient):
    def authorize_url(self, shop_domain: str, state: str) -> str:
        query = urlencode(
            {
                "client_id": self.settings.SHOPIFY_API_KEY,
                "scope": self.settings.SHOPIFY_SCOPES,
                "redirect_uri": f"{self.settings.SHOPIFY_APP_URL}/auth/callback",
                "state": state,
            }
        )
        return f"{self._get_shop_url(shop_domain)}/admin/oauth/authorize?{query}"

    async def exchange_code(self, shop_domain: str, code: str) -> Dict[str, Any]:
        """Trade the authorization code for an offline access token"""
        response = await self.request(
            "POST",
            f"{self._get_shop_url(shop_domain)}/admin/oauth/access_token",
            shop_domain,
            json={
                "client_id": self.settings.SHOPIFY_API_KEY,
                "client_secret": self.settings.SHOPIFY_API_SECRET,
                "code": code,
            },
        )
        return response.json()
