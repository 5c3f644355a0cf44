"""
Badge analytics endpoints
"""

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from variant_badges.api.dependencies import ServiceContainer, get_services
from variant_badges.core.database.models import Shop
from variant_badges.core.logging import get_logger
from variant_badges.middleware import get_current_shop

router = APIRouter(prefix="/api/analytics", tags=["analytics"])
logger = get_logger(__name__)


@router.post("/track")
async def track_event(
    request: Request,
    services: ServiceContainer = Depends(get_services),
):
    """Storefront event ingestion; always answers success"""
    try:
        payload = await request.json()
    except ValueError:
        logger.warning("Analytics body is not JSON")
        payload = None

    if payload is not None:
        await services.analytics.track(payload)

    return JSONResponse(
        content={"success": True},
        headers={
            "Access-Control-Allow-Origin": "*",
            "Access-Control-Allow-Methods": "POST, OPTIONS",
            "Access-Control-Allow-Headers": "Content-Type",
        },
    )


@router.get("/summary")
async def analytics_summary(
    recent: int = Query(10, ge=1, le=100),
    shop: Shop = Depends(get_current_shop),
    services: ServiceContainer = Depends(get_services),
):
    return await services.analytics.summary(shop.shop_domain, recent_limit=recent)
