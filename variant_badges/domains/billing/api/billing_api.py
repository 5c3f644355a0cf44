"""
Billing API

Pro plan upgrade, activation callback, status and cancellation.
"""

from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import RedirectResponse

from variant_badges.api.dependencies import ServiceContainer, get_services
from variant_badges.core.database.models import Shop
from variant_badges.middleware import get_current_shop
from variant_badges.models.billing_models import CreateChargeRequest

router = APIRouter(prefix="/api/billing", tags=["billing"])


@router.get("/status")
async def billing_status(
    shop: Shop = Depends(get_current_shop),
    services: ServiceContainer = Depends(get_services),
):
    return await services.billing_service.status(shop)


@router.post("/create-charge")
async def create_charge(
    body: CreateChargeRequest,
    shop: Shop = Depends(get_current_shop),
    services: ServiceContainer = Depends(get_services),
):
    return await services.billing_service.create_charge(shop, body.plan)


@router.get("/activate")
async def activate_charge(
    shop: Optional[str] = None,
    charge_id: Optional[str] = None,
    services: ServiceContainer = Depends(get_services),
):
    """Shopify redirects here after the merchant approves or declines"""
    url = await services.billing_service.activate(shop, charge_id)
    return RedirectResponse(url, status_code=302)


@router.post("/cancel")
async def cancel_subscription(
    shop: Shop = Depends(get_current_shop),
    services: ServiceContainer = Depends(get_services),
):
    return await services.billing_service.cancel(shop)
