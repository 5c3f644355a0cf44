"""
Subscription Repository

Repository for the single per-shop Subscription row.
"""

from typing import Any, Dict, Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from variant_badges.core.database.models import Subscription
from variant_badges.core.database.models.enums import PlanName, SubscriptionStatus
from variant_badges.shared.helpers import now_utc
from .base import BaseRepository, dialect_insert

# Values written whenever a shop falls back to the free plan
FREE_ACTIVE_VALUES: Dict[str, Any] = {
    "plan_name": PlanName.FREE.value,
    "status": SubscriptionStatus.ACTIVE.value,
    "charge_id": None,
    "billing_on": None,
    "cancelled_at": None,
}


class SubscriptionRepository(BaseRepository):
    """Repository for Subscription operations."""

    async def get(
        self, shop: str, session: Optional[AsyncSession] = None
    ) -> Optional[Subscription]:
        async with self._session(session) as s:
            result = await s.execute(
                select(Subscription).where(Subscription.shop == shop)
            )
            return result.scalar_one_or_none()

    async def get_or_create(
        self, shop: str, session: Optional[AsyncSession] = None
    ) -> Subscription:
        """Return the shop's row, creating {free, active} when missing."""
        async with self._session(session) as s:
            statement = dialect_insert(s, Subscription.__table__).values(
                shop=shop, **FREE_ACTIVE_VALUES
            )
            await s.execute(statement.on_conflict_do_nothing(index_elements=["shop"]))
            result = await s.execute(
                select(Subscription).where(Subscription.shop == shop)
            )
            return result.scalar_one()

    async def save(
        self,
        shop: str,
        values: Dict[str, Any],
        session: Optional[AsyncSession] = None,
    ) -> Subscription:
        """Upsert the shop's row with the given column values."""
        async with self._session(session) as s:
            statement = dialect_insert(s, Subscription.__table__).values(
                shop=shop, **values
            )
            statement = statement.on_conflict_do_update(
                index_elements=["shop"],
                set_={**values, "updated_at": now_utc()},
            )
            await s.execute(statement)
            result = await s.execute(
                select(Subscription).where(Subscription.shop == shop)
            )
            subscription = result.scalar_one()
            await s.refresh(subscription)
            return subscription

    async def downgrade_lapsed(self, shop: str, session: AsyncSession) -> bool:
        """
        Move a cancelled pro row to {free, active}.

        Only a row still in {pro, cancelled} is touched, so of two concurrent
        callers exactly one sees True.
        """
        result = await session.execute(
            update(Subscription)
            .where(
                Subscription.shop == shop,
                Subscription.plan_name == PlanName.PRO.value,
                Subscription.status == SubscriptionStatus.CANCELLED.value,
            )
            .values(**FREE_ACTIVE_VALUES, updated_at=now_utc())
        )
        return result.rowcount == 1

    async def mark_uninstalled(
        self, shop: str, session: Optional[AsyncSession] = None
    ) -> int:
        async with self._session(session) as s:
            result = await s.execute(
                update(Subscription)
                .where(Subscription.shop == shop)
                .values(
                    status=SubscriptionStatus.UNINSTALLED.value,
                    updated_at=now_utc(),
                )
            )
            return result.rowcount or 0
