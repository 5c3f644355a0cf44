"""
Shopify REST client for themes and theme assets
"""

from typing import Any, Dict, Optional

from variant_badges.core.exceptions import ShopifyAPIError
from .base_client import BaseShopifyAPIClient


class ThemeAPIClient(BaseShopifyAPIClient):
    async def get_main_theme(
        self, shop_domain: str, access_token: str
    ) -> Optional[Dict[str, Any]]:
        """The published theme (role 'main'), or None"""
        response = await self.request(
            "GET",
            self._get_rest_endpoint(shop_domain, "themes.json"),
            shop_domain,
            access_token,
        )
        for theme in response.json().get("themes") or []:
            if theme.get("role") == "main":
                return theme
        return None

    async def get_asset_value(
        self, shop_domain: str, access_token: str, theme_id: Any, key: str
    ) -> Optional[str]:
        """Text content of a theme asset; None when the theme has no such asset"""
        url = self._get_rest_endpoint(
            shop_domain, f"themes/{theme_id}/assets.json?asset[key]={key}"
        )
        try:
            response = await self.request("GET", url, shop_domain, access_token)
        except ShopifyAPIError as e:
            if e.status == 404:
                return None
            raise
        return (response.json().get("asset") or {}).get("value")
