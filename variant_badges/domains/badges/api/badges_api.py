"""
Merchant badge endpoints
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, Query

from variant_badges.api.dependencies import ServiceContainer, get_services
from variant_badges.core.database.models import Shop
from variant_badges.core.logging import get_logger
from variant_badges.middleware import get_current_shop
from variant_badges.models.badge_models import (
    BadgeAssignmentRequest,
    BulkBadgeAssignmentRequest,
)

router = APIRouter(prefix="/api/badges", tags=["badges"])
logger = get_logger(__name__)


def _serialize_assignment(assignment) -> Dict[str, Any]:
    return {
        "variantId": assignment.variant_id,
        "productId": assignment.product_id,
        "optionValue": assignment.option_value,
        "optionType": assignment.option_type,
        "badgeType": assignment.badge_type,
    }


@router.get("")
async def list_badges(
    shop: Shop = Depends(get_current_shop),
    services: ServiceContainer = Depends(get_services),
):
    assignments = await services.badge_service.list_assignments(shop)
    return {"badges": [_serialize_assignment(a) for a in assignments]}


@router.get("/rows")
async def list_badge_rows(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    shop: Shop = Depends(get_current_shop),
    services: ServiceContainer = Depends(get_services),
):
    """One row per product and option value, with its effective badge"""
    return await services.badge_service.list_rows(shop, page=page, limit=limit)


@router.post("")
async def assign_badge(
    body: BadgeAssignmentRequest,
    shop: Shop = Depends(get_current_shop),
    services: ServiceContainer = Depends(get_services),
):
    result = await services.badge_service.assign(
        shop, body.product_id, body.option_value, body.badge_type
    )
    return result.to_dict()


@router.post("/bulk")
async def assign_badges_bulk(
    body: BulkBadgeAssignmentRequest,
    shop: Shop = Depends(get_current_shop),
    services: ServiceContainer = Depends(get_services),
):
    results = await services.badge_service.assign_bulk(shop, body.assignments)
    return {
        "success": all(item["success"] for item in results),
        "results": results,
    }


@router.delete("/{variant_id}")
async def delete_badge(
    variant_id: str,
    shop: Shop = Depends(get_current_shop),
    services: ServiceContainer = Depends(get_services),
):
    deleted = await services.badge_service.remove_variant(shop, variant_id)
    return {"success": True, "deleted": deleted}
