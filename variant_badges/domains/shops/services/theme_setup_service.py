"""
Theme setup check

Looks for the app block in the published theme so the admin can tell the
merchant whether badges will actually render.
"""

from typing import Any, Dict, List

from variant_badges.core.config.settings import ShopifySettings
from variant_badges.core.database.models import Shop
from variant_badges.core.logging import get_logger
from variant_badges.domains.shopify.services.api import ThemeAPIClient
from variant_badges.shared.constants import THEME_BLOCK_ASSET_KEYS, THEME_BLOCK_MARKERS

logger = get_logger(__name__)


def asset_has_app_block(content: str) -> bool:
    return any(marker in content for marker in THEME_BLOCK_MARKERS)


class ThemeSetupService:
    def __init__(self, theme_client: ThemeAPIClient, shopify_settings: ShopifySettings):
        self.theme_client = theme_client
        self.shopify_settings = shopify_settings

    async def setup_status(self, shop: Shop) -> Dict[str, Any]:
        theme = await self.theme_client.get_main_theme(shop.shop_domain, shop.access_token)
        if theme is None:
            return {
                "isSetup": False,
                "themeId": None,
                "themeName": None,
                "foundIn": [],
                "message": "No published theme found",
            }

        found_in: List[str] = []
        for key in THEME_BLOCK_ASSET_KEYS:
            content = await self.theme_client.get_asset_value(
                shop.shop_domain, shop.access_token, theme["id"], key
            )
            if content and asset_has_app_block(content):
                found_in.append(key)

        logger.info(
            "Theme setup checked",
            shop=shop.shop_domain,
            theme_id=theme["id"],
            found_in=",".join(found_in) or "-",
        )
        return {
            "isSetup": bool(found_in),
            "themeId": theme["id"],
            "themeName": theme.get("name"),
            "foundIn": found_in,
        }

    def editor_link(self, shop: Shop) -> Dict[str, str]:
        """Theme editor deep link opening the product template with the app block"""
        store = shop.shop_domain.replace(".myshopify.com", "")
        url = (
            f"https://admin.shopify.com/store/{store}/themes/current/editor"
            f"?template=product&addAppBlockId={self.shopify_settings.SHOPIFY_API_KEY}"
            f"/variant-badges-display&target=mainSection"
        )
        return {"editorUrl": url}
