"""
Badge limit gate

Decides whether a badge write may proceed. Only writes that would add a new
product to the shop's badged set are ever refused.
"""

from dataclasses import dataclass
from typing import Optional

from variant_badges.core.logging import get_logger
from variant_badges.repository import BadgeAssignmentRepository
from .plan_resolver import PlanResolver

logger = get_logger(__name__)


@dataclass(frozen=True)
class LimitDecision:
    allowed: bool
    current_count: int
    max_count: Optional[int]
    plan: str


class PlanLimitGate:
    def __init__(
        self,
        resolver: PlanResolver,
        badges: BadgeAssignmentRepository,
        free_plan_max_products: int,
    ):
        self.resolver = resolver
        self.badges = badges
        self.free_plan_max_products = free_plan_max_products

    async def can_assign(self, shop: str, target_product_id: str) -> LimitDecision:
        # Plan checks fail open; an outage here must not block merchants
        try:
            decision = await self.resolver.resolve(shop)
            current_count = await self.badges.count_distinct_products(shop)

            if decision.unlimited:
                return LimitDecision(True, current_count, None, decision.plan)

            max_count = self.free_plan_max_products
            if await self.badges.product_has_badges(shop, target_product_id):
                return LimitDecision(True, current_count, max_count, decision.plan)

            return LimitDecision(
                allowed=current_count < max_count,
                current_count=current_count,
                max_count=max_count,
                plan=decision.plan,
            )
        except Exception as e:
            logger.error(
                "Plan limit check failed, allowing write",
                shop=shop,
                product_id=target_product_id,
                error=str(e),
            )
            return LimitDecision(True, 0, None, "unknown")
