"""
Shopify REST client for shop info and recurring application charges
"""

from typing import Any, Dict

from variant_badges.core.logging import get_logger
from .base_client import BaseShopifyAPIClient

logger = get_logger(__name__)


class BillingAPIClient(BaseShopifyAPIClient):
    """Recurring application charges"""

    async def get_shop_info(self, shop_domain: str, access_token: str) -> Dict[str, Any]:
        response = await self.request(
            "GET",
            self._get_rest_endpoint(shop_domain, "shop.json"),
            shop_domain,
            access_token,
        )
        return response.json().get("shop") or {}

    async def create_recurring_charge(
        self,
        shop_domain: str,
        access_token: str,
        name: str,
        price: float,
        return_url: str,
        trial_days: int = 0,
        test: bool = False,
    ) -> Dict[str, Any]:
        payload = {
            "recurring_application_charge": {
                "name": name,
                "price": price,
                "return_url": return_url,
                "trial_days": trial_days,
                "test": test,
            }
        }
        response = await self.request(
            "POST",
            self._get_rest_endpoint(shop_domain, "recurring_application_charges.json"),
            shop_domain,
            access_token,
            json=payload,
        )
        return response.json().get("recurring_application_charge") or {}

    async def get_recurring_charge(
        self, shop_domain: str, access_token: str, charge_id: str
    ) -> Dict[str, Any]:
        response = await self.request(
            "GET",
            self._get_rest_endpoint(
                shop_domain, f"recurring_application_charges/{charge_id}.json"
            ),
            shop_domain,
            access_token,
        )
        return response.json().get("recurring_application_charge") or {}

    async def activate_recurring_charge(
        self, shop_domain: str, access_token: str, charge_id: str
    ) -> Dict[str, Any]:
        response = await self.request(
            "POST",
            self._get_rest_endpoint(
                shop_domain, f"recurring_application_charges/{charge_id}/activate.json"
            ),
            shop_domain,
            access_token,
            json={"recurring_application_charge": {"id": charge_id}},
        )
        return response.json().get("recurring_application_charge") or {}

    async def delete_recurring_charge(
        self, shop_domain: str, access_token: str, charge_id: str
    ) -> None:
        await self.request(
            "DELETE",
            self._get_rest_endpoint(
                shop_domain, f"recurring_application_charges/{charge_id}.json"
            ),
            shop_domain,
            access_token,
        )
        logger.info("Recurring charge deleted", shop_domain=shop_domain, charge_id=charge_id)
