"""
Billing service

Shopify recurring application charges for the Pro plan. The local
subscription row mirrors the charge lifecycle:

    free/active --create_charge--> free/pending --activate--> pro/active
    pro/active --cancel--> pro/cancelled (grace until billing_on) --lapse--> free/active
"""

from typing import Any, Dict, Optional
from urllib.parse import urlencode

from variant_badges.core.config.settings import PlanSettings, ShopifySettings
from variant_badges.core.database.models import Shop, Subscription
from variant_badges.core.database.models.enums import (
    ChargeStatus,
    PlanName,
    SubscriptionStatus,
)
from variant_badges.core.exceptions import ShopifyAPIError, ValidationError
from variant_badges.core.logging import get_logger
from variant_badges.domains.shopify.services.api import BillingAPIClient
from variant_badges.repository import (
    BadgeAssignmentRepository,
    ShopRepository,
    SubscriptionRepository,
    FREE_ACTIVE_VALUES,
)
from variant_badges.shared.constants import DEVELOPMENT_SHOP_PLANS
from variant_badges.shared.helpers import ensure_utc, now_utc, parse_iso_timestamp
from .plan_resolver import PlanResolver

logger = get_logger(__name__)


def _isoformat(value) -> Optional[str]:
    value = ensure_utc(value)
    return value.isoformat() if value else None


def serialize_subscription(subscription: Subscription) -> Dict[str, Any]:
    return {
        "shop": subscription.shop,
        "plan_name": subscription.plan_name,
        "status": subscription.status,
        "charge_id": subscription.charge_id,
        "billing_on": _isoformat(subscription.billing_on),
        "cancelled_at": _isoformat(subscription.cancelled_at),
    }


class BillingService:
    def __init__(
        self,
        billing_client: BillingAPIClient,
        shops: ShopRepository,
        subscriptions: SubscriptionRepository,
        badges: BadgeAssignmentRepository,
        resolver: PlanResolver,
        plan_settings: PlanSettings,
        shopify_settings: ShopifySettings,
    ):
        self.billing_client = billing_client
        self.shops = shops
        self.subscriptions = subscriptions
        self.badges = badges
        self.resolver = resolver
        self.plan_settings = plan_settings
        self.shopify_settings = shopify_settings

    def admin_app_url(self, shop_domain: str, **params: str) -> str:
        url = f"https://{shop_domain}/admin/apps/{self.shopify_settings.SHOPIFY_API_KEY}"
        if params:
            url = f"{url}?{urlencode(params)}"
        return url

    async def status(self, shop: Shop) -> Dict[str, Any]:
        """Subscription row plus usage, after applying any lapsed cancellation"""
        decision = await self.resolver.resolve(shop.shop_domain)
        subscription = await self.subscriptions.get_or_create(shop.shop_domain)
        current_products = await self.badges.count_distinct_products(shop.shop_domain)

        return {
            **serialize_subscription(subscription),
            "effectivePlan": decision.plan,
            "unlimited": decision.unlimited,
            "currentProducts": current_products,
            "maxProducts": None
            if decision.unlimited
            else self.plan_settings.FREE_PLAN_MAX_PRODUCTS,
        }

    async def create_charge(self, shop: Shop, plan: str) -> Dict[str, Any]:
        if plan != PlanName.PRO.value:
            raise ValidationError("Invalid plan", field="plan", value=plan)

        shop_info = await self.billing_client.get_shop_info(
            shop.shop_domain, shop.access_token
        )
        shopify_plan = shop_info.get("plan_name")
        test_mode = shopify_plan in DEVELOPMENT_SHOP_PLANS

        return_url = (
            f"{self.shopify_settings.SHOPIFY_APP_URL}/api/billing/activate?"
            f"{urlencode({'shop': shop.shop_domain})}"
        )
        charge = await self.billing_client.create_recurring_charge(
            shop.shop_domain,
            shop.access_token,
            name=self.plan_settings.PRO_PLAN_NAME,
            price=self.plan_settings.PRO_PLAN_PRICE,
            return_url=return_url,
            trial_days=self.plan_settings.PRO_PLAN_TRIAL_DAYS,
            test=test_mode,
        )
        if not charge.get("id"):
            raise ShopifyAPIError(
                "Failed to create charge", shop_domain=shop.shop_domain
            )

        charge_id = str(charge["id"])
        await self.subscriptions.save(
            shop.shop_domain,
            {
                "plan_name": PlanName.FREE.value,
                "status": SubscriptionStatus.PENDING.value,
                "charge_id": charge_id,
            },
        )
        logger.info(
            "Created billing charge",
            shop=shop.shop_domain,
            charge_id=charge_id,
            shopify_plan=shopify_plan,
            test=test_mode,
        )
        return {"confirmationUrl": charge.get("confirmation_url"), "chargeId": charge["id"]}

    async def activate(self, shop_domain: Optional[str], charge_id: Optional[str]) -> str:
        """
        Handle the merchant's return from the charge approval page.

        Returns the admin URL to redirect to.
        """
        if not shop_domain or not charge_id:
            return self.admin_app_url(shop_domain or "")

        shop = await self.shops.get_by_domain(shop_domain)
        if shop is None:
            logger.error("No session found for shop", shop=shop_domain)
            return self.admin_app_url(shop_domain)

        try:
            charge = await self.billing_client.get_recurring_charge(
                shop_domain, shop.access_token, charge_id
            )
            charge_status = charge.get("status")

            if charge_status == ChargeStatus.ACCEPTED.value:
                charge = await self.billing_client.activate_recurring_charge(
                    shop_domain, shop.access_token, charge_id
                )
                charge_status = charge.get("status") or ChargeStatus.ACTIVE.value

            if charge_status == ChargeStatus.ACTIVE.value:
                await self.subscriptions.save(
                    shop_domain,
                    {
                        "plan_name": PlanName.PRO.value,
                        "status": SubscriptionStatus.ACTIVE.value,
                        "charge_id": str(charge_id),
                        "billing_on": parse_iso_timestamp(charge.get("billing_on")),
                        "cancelled_at": None,
                    },
                )
                logger.info("Activated Pro plan", shop=shop_domain, charge_id=charge_id)
                return self.admin_app_url(shop_domain, upgraded="true")

            if charge_status == ChargeStatus.DECLINED.value:
                logger.info("Charge declined", shop=shop_domain, charge_id=charge_id)
                await self.subscriptions.save(
                    shop_domain,
                    {
                        "plan_name": PlanName.FREE.value,
                        "status": SubscriptionStatus.ACTIVE.value,
                        "charge_id": None,
                    },
                )
        except ShopifyAPIError as e:
            logger.error(
                "Error activating charge",
                shop=shop_domain,
                charge_id=charge_id,
                error=str(e),
            )
            return self.admin_app_url(shop_domain, error="activation_failed")

        return self.admin_app_url(shop_domain)

    async def cancel(self, shop: Shop) -> Dict[str, Any]:
        shop_domain = shop.shop_domain
        # A lapsed cancellation is downgraded before it is read
        await self.resolver.resolve(shop_domain)
        subscription = await self.subscriptions.get_or_create(shop_domain)

        if subscription.status == SubscriptionStatus.PENDING.value:
            if subscription.charge_id:
                try:
                    await self.billing_client.delete_recurring_charge(
                        shop_domain, shop.access_token, subscription.charge_id
                    )
                except ShopifyAPIError as e:
                    logger.warning(
                        "Could not delete pending charge (may not exist)",
                        shop=shop_domain,
                        charge_id=subscription.charge_id,
                        error=str(e),
                    )
            await self.subscriptions.save(shop_domain, dict(FREE_ACTIVE_VALUES))
            logger.info("Cancelled pending upgrade", shop=shop_domain)
            return {
                "success": True,
                "message": "Pending upgrade cancelled - returned to Free plan",
                "plan": PlanName.FREE.value,
                "status": SubscriptionStatus.ACTIVE.value,
            }

        if subscription.plan_name != PlanName.PRO.value:
            return {
                "success": True,
                "message": "Already on the Free plan",
                "plan": PlanName.FREE.value,
                "status": subscription.status,
            }

        expires_on = subscription.billing_on
        if subscription.status == SubscriptionStatus.ACTIVE.value:
            if subscription.charge_id:
                charge = await self.billing_client.get_recurring_charge(
                    shop_domain, shop.access_token, subscription.charge_id
                )
                expires_on = parse_iso_timestamp(charge.get("billing_on"))
                await self.billing_client.delete_recurring_charge(
                    shop_domain, shop.access_token, subscription.charge_id
                )

            # Pro stays in force until billing_on
            subscription = await self.subscriptions.save(
                shop_domain,
                {
                    "plan_name": PlanName.PRO.value,
                    "status": SubscriptionStatus.CANCELLED.value,
                    "charge_id": subscription.charge_id,
                    "billing_on": expires_on,
                    "cancelled_at": now_utc(),
                },
            )
            logger.info(
                "Cancelled Pro subscription",
                shop=shop_domain,
                expires_on=_isoformat(expires_on),
            )

        current_products = await self.badges.count_distinct_products(shop_domain)
        free_limit = self.plan_settings.FREE_PLAN_MAX_PRODUCTS
        products_to_lose = max(0, current_products - free_limit)

        return {
            "success": True,
            "plan": PlanName.PRO.value,
            "status": SubscriptionStatus.CANCELLED.value,
            "expiresOn": _isoformat(expires_on),
            "warning": {
                "currentProducts": current_products,
                "freeLimit": free_limit,
                "productsToLose": products_to_lose,
            },
        }
