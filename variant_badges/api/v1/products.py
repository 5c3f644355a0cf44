"""
Product catalogue endpoints for the admin UI
"""

from fastapi import APIRouter, Depends

from variant_badges.api.dependencies import ServiceContainer, get_services
from variant_badges.core.database.models import Shop
from variant_badges.core.exceptions import NotFoundError
from variant_badges.middleware import get_current_shop

router = APIRouter(prefix="/api/products", tags=["products"])


@router.get("")
async def list_products(
    shop: Shop = Depends(get_current_shop),
    services: ServiceContainer = Depends(get_services),
):
    products = await services.shopify.products.get_products(
        shop.shop_domain, shop.access_token
    )
    return {
        "products": [product.to_dict() for product in products],
        "count": len(products),
    }


@router.get("/{product_id}")
async def get_product(
    product_id: str,
    shop: Shop = Depends(get_current_shop),
    services: ServiceContainer = Depends(get_services),
):
    product = await services.shopify.products.get_product(
        shop.shop_domain, shop.access_token, product_id
    )
    if product is None:
        raise NotFoundError("Product not found", resource="product")
    return {"product": product.to_dict()}
