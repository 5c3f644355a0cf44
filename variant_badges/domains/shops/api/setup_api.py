from fastapi import APIRouter, Depends

from variant_badges.api.dependencies import ServiceContainer, get_services
from variant_badges.core.database.models import Shop
from variant_badges.middleware import get_current_shop

router = APIRouter(prefix="/api/setup", tags=["setup"])


@router.get("/status")
async def setup_status(
    shop: Shop = Depends(get_current_shop),
    services: ServiceContainer = Depends(get_services),
):
    return await services.setup.setup_status(shop)


@router.get("/editor-link")
async def editor_link(
    shop: Shop = Depends(get_current_shop),
    services: ServiceContainer = Depends(get_services),
):
    return services.setup.editor_link(shop)
