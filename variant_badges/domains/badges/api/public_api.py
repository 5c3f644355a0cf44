"""
Storefront read API

Unauthenticated and cacheable. The storefront script maps the displayed
option values to these variant badges itself.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from variant_badges.api.dependencies import ServiceContainer, get_services
from variant_badges.core.exceptions import ValidationError
from variant_badges.core.logging import get_logger

router = APIRouter(prefix="/api/public", tags=["storefront"])
logger = get_logger(__name__)


def _public_response(services: ServiceContainer, content: Dict[str, Any]) -> JSONResponse:
    return JSONResponse(
        content=content,
        headers={
            "Access-Control-Allow-Origin": "*",
            "Access-Control-Allow-Methods": "GET",
            "Cache-Control": f"public, max-age={services.settings.PUBLIC_CACHE_MAX_AGE}",
        },
    )


@router.get("/badges/product/{product_id}")
async def product_badges(
    product_id: str,
    shop: Optional[str] = None,
    services: ServiceContainer = Depends(get_services),
):
    if not shop:
        raise ValidationError("Missing shop or productId parameter", field="shop")

    shop_settings = await services.settings_service.get(shop)
    selected_option = shop_settings.selected_option

    if not selected_option or not shop_settings.badge_display_enabled:
        return _public_response(
            services, {"badges": {}, "selectedOption": selected_option}
        )

    badges = await services.badges_repository.badges_by_variant(shop, product_id)
    logger.debug(
        "Product badges served",
        shop=shop,
        product_id=product_id,
        option=selected_option,
        badges=len(badges),
    )
    return _public_response(
        services, {"badges": badges, "selectedOption": selected_option}
    )


@router.get("/badges")
async def shop_badges(
    shop: Optional[str] = None,
    services: ServiceContainer = Depends(get_services),
):
    if not shop:
        raise ValidationError("Missing shop parameter", field="shop")

    shop_settings = await services.settings_service.get(shop)
    if not shop_settings.badge_display_enabled:
        return _public_response(services, {"badges": {}})

    badges = await services.badges_repository.badges_by_variant(shop)
    return _public_response(services, {"badges": badges})
