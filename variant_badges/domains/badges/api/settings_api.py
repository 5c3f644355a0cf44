"""
Merchant settings endpoints
"""

from fastapi import APIRouter, Depends

from variant_badges.api.dependencies import ServiceContainer, get_services
from variant_badges.core.database.models import Shop
from variant_badges.middleware import get_current_shop
from variant_badges.models.settings_models import SettingsPatch

router = APIRouter(prefix="/api", tags=["settings"])


@router.get("/settings")
async def get_settings(
    shop: Shop = Depends(get_current_shop),
    services: ServiceContainer = Depends(get_services),
):
    shop_settings = await services.settings_service.get(shop.shop_domain)
    return {
        "settings": shop_settings.to_dict(),
        "message": "Settings retrieved successfully",
    }


@router.post("/settings")
async def save_settings(
    patch: SettingsPatch,
    shop: Shop = Depends(get_current_shop),
    services: ServiceContainer = Depends(get_services),
):
    result = await services.settings_service.update(shop.shop_domain, patch)
    return {
        "success": True,
        "message": "Settings saved successfully",
        "settings": result.settings.to_dict(),
        "optionChanged": result.option_changed,
        "badgesCleared": result.badges_removed,
    }
