"""
Badge Analytics Repository

Append-only storage of storefront badge events.
"""

from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import select, delete, func
from sqlalchemy.ext.asyncio import AsyncSession

from variant_badges.core.database.models import BadgeAnalyticsEvent
from .base import BaseRepository


class BadgeAnalyticsRepository(BaseRepository):
    """Repository for BadgeAnalyticsEvent operations."""

    async def add(self, values: Dict[str, Any]) -> BadgeAnalyticsEvent:
        async with self._session() as s:
            event = BadgeAnalyticsEvent(**values)
            s.add(event)
            await s.flush()
            return event

    async def counts_by_type(self, shop: str) -> List[Tuple[str, Optional[str], int]]:
        """(event_type, badge_type, count) for every combination seen."""
        async with self._session() as s:
            result = await s.execute(
                select(
                    BadgeAnalyticsEvent.event_type,
                    BadgeAnalyticsEvent.badge_type,
                    func.count(BadgeAnalyticsEvent.id),
                )
                .where(BadgeAnalyticsEvent.shop == shop)
                .group_by(BadgeAnalyticsEvent.event_type, BadgeAnalyticsEvent.badge_type)
                .order_by(BadgeAnalyticsEvent.event_type, BadgeAnalyticsEvent.badge_type)
            )
            return [(row[0], row[1], int(row[2])) for row in result.all()]

    async def recent(self, shop: str, limit: int = 10) -> List[BadgeAnalyticsEvent]:
        async with self._session() as s:
            result = await s.execute(
                select(BadgeAnalyticsEvent)
                .where(BadgeAnalyticsEvent.shop == shop)
                .order_by(BadgeAnalyticsEvent.created_at.desc())
                .limit(limit)
            )
            return list(result.scalars().all())

    async def delete_for_shop(
        self, shop: str, session: Optional[AsyncSession] = None
    ) -> int:
        async with self._session(session) as s:
            result = await s.execute(
                delete(BadgeAnalyticsEvent).where(BadgeAnalyticsEvent.shop == shop)
            )
            return result.rowcount or 0
