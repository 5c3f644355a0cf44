from typing import Iterable

from variant_badges.repository import BadgeAssignmentRepository


async def seed_badges(
    badges: BadgeAssignmentRepository,
    shop: str,
    product_ids: Iterable[str],
    badge_type: str = "HOT",
    variants_per_product: int = 2,
) -> None:
    """Badge a few variants on each product, bypassing the plan gate"""
    for product_id in product_ids:
        await badges.upsert_many(
            shop,
            [
                {
                    "variant_id": f"{product_id}-{n}",
                    "product_id": product_id,
                    "option_value": "Red",
                    "option_type": "Color",
                    "badge_type": badge_type,
                }
                for n in range(variants_per_product)
            ],
        )
