"""
Badge assignment service

A merchant picks (product, option value, badge type); every variant of the
product carrying that option value gets the badge. A single write fails
closed and storage errors propagate; a bulk write reports them per item.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError

from variant_badges.core.database.models import BadgeAssignment, Shop
from variant_badges.core.exceptions import (
    BadgeAppException,
    NotFoundError,
    PlanLimitExceededError,
    ValidationError,
)
from variant_badges.core.logging import get_logger
from variant_badges.domains.billing.services import PlanLimitGate
from variant_badges.domains.shopify.services.api import ProductAPIClient
from variant_badges.models.badge_models import BadgeAssignmentRequest
from variant_badges.repository import BadgeAssignmentRepository
from .settings_service import SettingsService
from .variant_grouping import build_badge_rows, find_option_group, paginate

logger = get_logger(__name__)


@dataclass(frozen=True)
class AssignmentResult:
    variants_updated: int
    variant_ids: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": True,
            "variantsUpdated": self.variants_updated,
            "variantIds": list(self.variant_ids),
        }


class BadgeService:
    def __init__(
        self,
        badges: BadgeAssignmentRepository,
        settings_service: SettingsService,
        gate: PlanLimitGate,
        product_client: ProductAPIClient,
        badge_types: Sequence[str],
    ):
        self.badges = badges
        self.settings_service = settings_service
        self.gate = gate
        self.product_client = product_client
        self.badge_types = list(badge_types)

    def _validate(self, product_id: str, option_value: str, badge_type: Optional[str]):
        if not product_id or not str(product_id).strip():
            raise ValidationError("Missing required field: productId", field="productId")
        if not option_value or not option_value.strip():
            raise ValidationError(
                "Missing required field: optionValue", field="optionValue"
            )
        if badge_type is not None and badge_type not in self.badge_types:
            raise ValidationError(
                "Invalid badge type", field="badgeType", value=badge_type
            )

    async def assign(
        self,
        shop: Shop,
        product_id: str,
        option_value: str,
        badge_type: Optional[str],
    ) -> AssignmentResult:
        """
        Badge every variant of a product carrying `option_value`.

        A null badge_type clears those variants instead.

        Raises:
            ValidationError: bad input or no option selected in settings
            NotFoundError: product missing or no variant has the value
            PlanLimitExceededError: a new product would pass the free cap
        """
        self._validate(product_id, option_value, badge_type)
        shop_domain = shop.shop_domain

        shop_settings = await self.settings_service.get(shop_domain)
        selected_option = shop_settings.selected_option
        if not selected_option:
            raise ValidationError(
                "No option selected in settings", field="selectedOption"
            )

        product = await self.product_client.get_product(
            shop_domain, shop.access_token, product_id
        )
        if product is None:
            raise NotFoundError("Product not found", resource="product")

        group = find_option_group(product, selected_option, option_value)
        if group is None or not group.variant_ids:
            raise NotFoundError(
                f"No variants found with {selected_option} = {option_value}",
                resource="variant",
            )

        if badge_type is None:
            removed = await self.badges.delete_variants(shop_domain, group.variant_ids)
            logger.info(
                "Badges cleared",
                shop=shop_domain,
                product_id=product.id,
                option_value=option_value,
                variants=removed,
            )
            return AssignmentResult(len(group.variant_ids), group.variant_ids)

        decision = await self.gate.can_assign(shop_domain, product.id)
        if not decision.allowed:
            logger.info(
                "Badge write refused by plan limit",
                shop=shop_domain,
                product_id=product.id,
                current_products=decision.current_count,
                max_products=decision.max_count,
            )
            raise PlanLimitExceededError(decision.current_count, decision.max_count)

        await self.badges.upsert_many(
            shop_domain,
            [
                {
                    "variant_id": variant_id,
                    "product_id": product.id,
                    "option_value": option_value,
                    "option_type": selected_option,
                    "badge_type": badge_type,
                }
                for variant_id in group.variant_ids
            ],
        )
        logger.info(
            "Badges assigned",
            shop=shop_domain,
            product_id=product.id,
            option_value=option_value,
            badge_type=badge_type,
            variants=len(group.variant_ids),
        )
        return AssignmentResult(len(group.variant_ids), group.variant_ids)

    async def assign_bulk(
        self, shop: Shop, items: Sequence[BadgeAssignmentRequest]
    ) -> List[Dict[str, Any]]:
        """Run each assignment on its own; one failure does not stop the rest."""
        results = []
        for item in items:
            entry: Dict[str, Any] = {
                "productId": item.product_id,
                "optionValue": item.option_value,
            }
            try:
                result = await self.assign(
                    shop, item.product_id, item.option_value, item.badge_type
                )
                entry.update(success=True, variantsUpdated=result.variants_updated)
            except BadgeAppException as e:
                logger.warning(
                    "Bulk badge item failed",
                    shop=shop.shop_domain,
                    product_id=item.product_id,
                    option_value=item.option_value,
                    error=e.message,
                )
                entry.update(success=False, error=e.message)
            except SQLAlchemyError as e:
                logger.error(
                    "Bulk badge item could not be saved",
                    shop=shop.shop_domain,
                    product_id=item.product_id,
                    option_value=item.option_value,
                    error=str(e),
                )
                entry.update(success=False, error="Failed to save badge")
            results.append(entry)
        return results

    async def remove_variant(self, shop: Shop, variant_id: str) -> int:
        return await self.badges.delete_variants(shop.shop_domain, [variant_id])

    async def list_assignments(self, shop: Shop) -> List[BadgeAssignment]:
        return await self.badges.list_for_shop(shop.shop_domain)

    async def list_rows(self, shop: Shop, page: int = 1, limit: int = 20) -> Dict[str, Any]:
        """Paginated (product, option value) rows with their effective badge"""
        shop_settings = await self.settings_service.get(shop.shop_domain)
        selected_option = shop_settings.selected_option
        if not selected_option:
            return {
                "rows": [],
                "selectedOption": None,
                "page": page,
                "limit": limit,
                "total": 0,
                "totalPages": 0,
            }

        products = await self.product_client.get_products(
            shop.shop_domain, shop.access_token
        )
        badges_by_variant = await self.badges.badges_by_variant(shop.shop_domain)
        rows = build_badge_rows(products, selected_option, badges_by_variant)
        page_rows, total, total_pages = paginate(rows, page, limit)

        return {
            "rows": [row.to_dict() for row in page_rows],
            "selectedOption": selected_option,
            "page": page,
            "limit": limit,
            "total": total,
            "totalPages": total_pages,
        }
