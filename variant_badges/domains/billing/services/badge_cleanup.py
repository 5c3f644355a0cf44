"""
Badge cleanup on forced downgrade

When a shop drops to the free plan with more badged products than the free
cap allows, the lowest product ids keep their badges and every other
product loses all of them. There is no undo.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from variant_badges.core.logging import get_logger
from variant_badges.repository import BadgeAssignmentRepository

logger = get_logger(__name__)


@dataclass(frozen=True)
class CleanupResult:
    cleaned: bool
    kept_products: int
    removed_products: int = 0
    removed_product_ids: List[str] = field(default_factory=list)
    removed_assignments: int = 0


def _product_sort_key(product_ids: Sequence[str]):
    if all(pid.isdigit() for pid in product_ids):
        return lambda pid: (int(pid), pid)
    return None


def select_retained_products(
    product_ids: Sequence[str], limit: int
) -> Tuple[List[str], List[str]]:
    """
    Split product ids into (kept, removed).

    Ids are ordered ascending, numerically when every id is numeric and
    lexically otherwise; the first `limit` are kept.
    """
    unique_ids = list(set(product_ids))
    ordered = sorted(unique_ids, key=_product_sort_key(unique_ids))
    return ordered[:limit], ordered[limit:]


class BadgeCleanupService:
    def __init__(self, badges: BadgeAssignmentRepository, free_plan_max_products: int):
        self.badges = badges
        self.free_plan_max_products = free_plan_max_products

    async def cleanup(
        self, shop: str, session: Optional[AsyncSession] = None
    ) -> CleanupResult:
        """Trim the shop's badged products down to the free cap."""
        product_ids = await self.badges.distinct_product_ids(shop, session=session)

        if len(product_ids) <= self.free_plan_max_products:
            return CleanupResult(cleaned=False, kept_products=len(product_ids))

        kept, removed = select_retained_products(
            product_ids, self.free_plan_max_products
        )
        deleted = await self.badges.delete_for_products(shop, removed, session=session)

        logger.warning(
            "Removed badges from products over the free limit",
            shop=shop,
            kept_products=len(kept),
            removed_products=len(removed),
            removed_assignments=deleted,
        )
        return CleanupResult(
            cleaned=True,
            kept_products=len(kept),
            removed_products=len(removed),
            removed_product_ids=removed,
            removed_assignments=deleted,
        )
