"""
Shop install, reinstall and removal
"""

from dataclasses import dataclass
from typing import Optional

from variant_badges.core.database import Database
from variant_badges.core.database.models import Shop
from variant_badges.core.database.models.enums import SubscriptionStatus
from variant_badges.core.logging import get_logger
from variant_badges.repository import (
    BadgeAnalyticsRepository,
    BadgeAssignmentRepository,
    SettingsRepository,
    ShopRepository,
    SubscriptionRepository,
    FREE_ACTIVE_VALUES,
)

logger = get_logger(__name__)

# A reinstall over any of these starts the shop again on free
RESET_ON_INSTALL = (
    SubscriptionStatus.UNINSTALLED.value,
    SubscriptionStatus.CANCELLED.value,
    SubscriptionStatus.PENDING.value,
)


@dataclass(frozen=True)
class ShopRemovalResult:
    shop_deleted: bool
    settings_deleted: int
    badges_deleted: int
    events_deleted: int
    subscription_marked: bool


class ShopLifecycleService:
    def __init__(
        self,
        database: Database,
        shops: ShopRepository,
        settings_repository: SettingsRepository,
        badges: BadgeAssignmentRepository,
        subscriptions: SubscriptionRepository,
        analytics: BadgeAnalyticsRepository,
    ):
        self.database = database
        self.shops = shops
        self.settings_repository = settings_repository
        self.badges = badges
        self.subscriptions = subscriptions
        self.analytics = analytics

    async def complete_install(
        self, shop_domain: str, access_token: str, scope: Optional[str] = None
    ) -> Shop:
        """
        Store the shop's token and settle its subscription row.

        First install creates {free, active}; a reinstall over an uninstalled,
        cancelled or pending row resets it; an active row is left alone.
        """
        async with self.database.transaction_context() as session:
            shop = await self.shops.upsert(shop_domain, access_token, scope, session=session)
            subscription = await self.subscriptions.get(shop_domain, session=session)

            if subscription is None:
                await self.subscriptions.save(
                    shop_domain, dict(FREE_ACTIVE_VALUES), session=session
                )
                logger.info("Shop installed", shop=shop_domain)
            elif subscription.status in RESET_ON_INSTALL:
                previous_status = subscription.status
                await self.subscriptions.save(
                    shop_domain, dict(FREE_ACTIVE_VALUES), session=session
                )
                logger.info(
                    "Shop reinstalled, subscription reset to free",
                    shop=shop_domain,
                    previous_status=previous_status,
                )
            else:
                logger.info(
                    "Shop re-authenticated",
                    shop=shop_domain,
                    plan=subscription.plan_name,
                )
        return shop

    async def uninstall(self, shop_domain: str) -> ShopRemovalResult:
        """Delete all shop data and mark the subscription uninstalled."""
        async with self.database.transaction_context() as session:
            shop_deleted = await self.shops.delete_by_domain(shop_domain, session=session)
            settings_deleted = await self.settings_repository.delete_for_shop(
                shop_domain, session=session
            )
            badges_deleted = await self.badges.delete_for_shop(shop_domain, session=session)
            events_deleted = await self.analytics.delete_for_shop(
                shop_domain, session=session
            )
            marked = await self.subscriptions.mark_uninstalled(shop_domain, session=session)

        result = ShopRemovalResult(
            shop_deleted=shop_deleted > 0,
            settings_deleted=settings_deleted,
            badges_deleted=badges_deleted,
            events_deleted=events_deleted,
            subscription_marked=marked > 0,
        )
        logger.info(
            "Shop data removed",
            shop=shop_domain,
            badges_deleted=badges_deleted,
            events_deleted=events_deleted,
            subscription_marked=result.subscription_marked,
        )
        return result
