"""
Badge Assignment Repository

Repository for BadgeAssignment table operations. Writes are upserts keyed
on (shop, variant_id), so repeating a write is harmless.
"""

from typing import Dict, List, Optional, Sequence

from sqlalchemy import select, delete, func
from sqlalchemy.ext.asyncio import AsyncSession

from variant_badges.core.database.models import BadgeAssignment
from variant_badges.shared.helpers import now_utc
from .base import BaseRepository, dialect_insert


class BadgeAssignmentRepository(BaseRepository):
    """Repository for BadgeAssignment operations."""

    async def upsert_many(
        self,
        shop: str,
        rows: Sequence[Dict[str, Optional[str]]],
        session: Optional[AsyncSession] = None,
    ) -> int:
        """
        Upsert one assignment per row.

        Each row carries variant_id, product_id, option_value, option_type and
        badge_type. Returns the number of rows written.
        """
        if not rows:
            return 0
        async with self._session(session) as s:
            for row in rows:
                statement = dialect_insert(s, BadgeAssignment.__table__).values(
                    shop=shop, **row
                )
                statement = statement.on_conflict_do_update(
                    index_elements=["shop", "variant_id"],
                    set_={
                        "product_id": statement.excluded.product_id,
                        "option_value": statement.excluded.option_value,
                        "option_type": statement.excluded.option_type,
                        "badge_type": statement.excluded.badge_type,
                        "updated_at": now_utc(),
                    },
                )
                await s.execute(statement)
            return len(rows)

    async def delete_variants(
        self,
        shop: str,
        variant_ids: Sequence[str],
        session: Optional[AsyncSession] = None,
    ) -> int:
        if not variant_ids:
            return 0
        async with self._session(session) as s:
            result = await s.execute(
                delete(BadgeAssignment).where(
                    BadgeAssignment.shop == shop,
                    BadgeAssignment.variant_id.in_(list(variant_ids)),
                )
            )
            return result.rowcount or 0

    async def list_for_shop(self, shop: str) -> List[BadgeAssignment]:
        async with self._session() as s:
            result = await s.execute(
                select(BadgeAssignment)
                .where(BadgeAssignment.shop == shop)
                .order_by(BadgeAssignment.product_id, BadgeAssignment.variant_id)
            )
            return list(result.scalars().all())

    async def badges_by_variant(
        self, shop: str, product_id: Optional[str] = None
    ) -> Dict[str, str]:
        """Map variant_id -> badge_type, optionally for one product."""
        async with self._session() as s:
            statement = select(
                BadgeAssignment.variant_id, BadgeAssignment.badge_type
            ).where(BadgeAssignment.shop == shop)
            if product_id is not None:
                statement = statement.where(BadgeAssignment.product_id == product_id)
            result = await s.execute(statement)
            return {variant_id: badge_type for variant_id, badge_type in result.all()}

    async def count_distinct_products(
        self, shop: str, session: Optional[AsyncSession] = None
    ) -> int:
        async with self._session(session) as s:
            result = await s.execute(
                select(func.count(func.distinct(BadgeAssignment.product_id))).where(
                    BadgeAssignment.shop == shop
                )
            )
            return int(result.scalar_one() or 0)

    async def product_has_badges(self, shop: str, product_id: str) -> bool:
        async with self._session() as s:
            result = await s.execute(
                select(BadgeAssignment.id)
                .where(
                    BadgeAssignment.shop == shop,
                    BadgeAssignment.product_id == product_id,
                )
                .limit(1)
            )
            return result.first() is not None

    async def distinct_product_ids(
        self, shop: str, session: Optional[AsyncSession] = None
    ) -> List[str]:
        async with self._session(session) as s:
            result = await s.execute(
                select(BadgeAssignment.product_id)
                .where(BadgeAssignment.shop == shop)
                .distinct()
            )
            return [row[0] for row in result.all()]

    async def delete_for_products(
        self,
        shop: str,
        product_ids: Sequence[str],
        session: Optional[AsyncSession] = None,
    ) -> int:
        if not product_ids:
            return 0
        async with self._session(session) as s:
            result = await s.execute(
                delete(BadgeAssignment).where(
                    BadgeAssignment.shop == shop,
                    BadgeAssignment.product_id.in_(list(product_ids)),
                )
            )
            return result.rowcount or 0

    async def delete_for_shop(
        self, shop: str, session: Optional[AsyncSession] = None
    ) -> int:
        async with self._session(session) as s:
            result = await s.execute(
                delete(BadgeAssignment).where(BadgeAssignment.shop == shop)
            )
            return result.rowcount or 0
