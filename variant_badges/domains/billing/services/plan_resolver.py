"""
Effective plan resolution

The stored subscription row is never trusted as-is: every read re-derives
the plan from (plan_name, status, billing_on) and the current time. A
cancelled pro plan past its billing date is downgraded on the spot.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Protocol

from variant_badges.core.database import Database
from variant_badges.core.database.models.enums import PlanName, SubscriptionStatus
from variant_badges.core.logging import get_logger
from variant_badges.repository import SubscriptionRepository
from variant_badges.shared.helpers import ensure_utc, now_utc
from .badge_cleanup import BadgeCleanupService, CleanupResult

logger = get_logger(__name__)


class SubscriptionState(Protocol):
    plan_name: str
    status: str
    billing_on: Optional[datetime]


@dataclass(frozen=True)
class PlanDecision:
    plan: str
    unlimited: bool
    grace_expires_on: Optional[datetime] = None
    pending_upgrade: bool = False
    # Cancelled pro past its billing date; the caller must downgrade
    downgrade_required: bool = False


FREE_DECISION = PlanDecision(plan=PlanName.FREE.value, unlimited=False)


def evaluate_plan(
    subscription: Optional[SubscriptionState], now: Optional[datetime] = None
) -> PlanDecision:
    """Pure plan decision for a subscription row at `now`."""
    if subscription is None:
        return FREE_DECISION

    now = ensure_utc(now or now_utc())
    plan_name = subscription.plan_name
    status = subscription.status

    if status == SubscriptionStatus.PENDING.value:
        # Upgrade not approved yet
        return PlanDecision(
            plan=PlanName.FREE.value, unlimited=False, pending_upgrade=True
        )

    if plan_name == PlanName.PRO.value and status == SubscriptionStatus.ACTIVE.value:
        return PlanDecision(plan=PlanName.PRO.value, unlimited=True)

    if plan_name == PlanName.PRO.value and status == SubscriptionStatus.CANCELLED.value:
        billing_on = ensure_utc(subscription.billing_on)
        # No billing date means no grace period; the row is treated as lapsed
        if billing_on is not None and now <= billing_on:
            return PlanDecision(
                plan=PlanName.PRO.value, unlimited=True, grace_expires_on=billing_on
            )
        return PlanDecision(
            plan=PlanName.FREE.value, unlimited=False, downgrade_required=True
        )

    return FREE_DECISION


class PlanResolver:
    def __init__(
        self,
        database: Database,
        subscriptions: SubscriptionRepository,
        cleanup: BadgeCleanupService,
    ):
        self.database = database
        self.subscriptions = subscriptions
        self.cleanup = cleanup

    async def resolve(self, shop: str, now: Optional[datetime] = None) -> PlanDecision:
        """
        Effective plan for a shop, applying a lapsed cancellation first.

        A missing row is created as {free, active}.
        """
        subscription = await self.subscriptions.get_or_create(shop)
        decision = evaluate_plan(subscription, now)

        if decision.downgrade_required:
            await self.apply_lapse(shop)
            return FREE_DECISION

        return decision

    async def apply_lapse(self, shop: str) -> Optional[CleanupResult]:
        """
        Downgrade a lapsed pro subscription and trim badges, atomically.

        Returns None when another caller already applied the transition.
        """
        async with self.database.transaction_context() as session:
            transitioned = await self.subscriptions.downgrade_lapsed(shop, session)
            if not transitioned:
                return None
            result = await self.cleanup.cleanup(shop, session=session)

        logger.info(
            "Pro plan expired, downgraded to free",
            shop=shop,
            cleaned=result.cleaned,
            removed_products=result.removed_products,
        )
        return result
