"""
Shopify webhook endpoints

Every webhook body is HMAC verified before it is looked at. Uninstall and
shop redaction remove all shop data; customer webhooks are acknowledged
since nothing is stored per customer.
"""

import json
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Header, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from variant_badges.api.dependencies import ServiceContainer, get_services
from variant_badges.core.exceptions import AuthenticationError, ValidationError
from variant_badges.core.logging import get_logger

router = APIRouter(prefix="/webhooks", tags=["webhooks"])
logger = get_logger(__name__)


async def verified_payload(
    request: Request,
    services: ServiceContainer,
    hmac_header: Optional[str],
    shop_domain: Optional[str],
) -> Dict[str, Any]:
    body = await request.body()
    if not services.verifier.verify_webhook_signature(body, hmac_header, shop_domain):
        raise AuthenticationError("Invalid HMAC")
    if not shop_domain:
        raise ValidationError("Missing shop domain header", field="X-Shopify-Shop-Domain")
    try:
        return json.loads(body or b"{}")
    except ValueError:
        return {}


@router.post("/app/uninstalled")
async def app_uninstalled(
    request: Request,
    x_shopify_hmac_sha256: Optional[str] = Header(None),
    x_shopify_shop_domain: Optional[str] = Header(None),
    services: ServiceContainer = Depends(get_services),
):
    await verified_payload(
        request, services, x_shopify_hmac_sha256, x_shopify_shop_domain
    )
    logger.info("App uninstalled webhook received", shop=x_shopify_shop_domain)
    await services.lifecycle.uninstall(x_shopify_shop_domain)
    return PlainTextResponse("OK")


@router.post("/shop/redact")
async def shop_redact(
    request: Request,
    x_shopify_hmac_sha256: Optional[str] = Header(None),
    x_shopify_shop_domain: Optional[str] = Header(None),
    services: ServiceContainer = Depends(get_services),
):
    await verified_payload(
        request, services, x_shopify_hmac_sha256, x_shopify_shop_domain
    )
    logger.info("GDPR shop redact", shop=x_shopify_shop_domain)
    await services.lifecycle.uninstall(x_shopify_shop_domain)
    return PlainTextResponse("OK")


@router.post("/customers/redact")
async def customers_redact(
    request: Request,
    x_shopify_hmac_sha256: Optional[str] = Header(None),
    x_shopify_shop_domain: Optional[str] = Header(None),
    services: ServiceContainer = Depends(get_services),
):
    payload = await verified_payload(
        request, services, x_shopify_hmac_sha256, x_shopify_shop_domain
    )
    logger.info(
        "GDPR customer redact, nothing stored",
        shop=x_shopify_shop_domain,
        customer_id=(payload.get("customer") or {}).get("id"),
    )
    return PlainTextResponse("OK")


@router.post("/customers/data_request")
async def customers_data_request(
    request: Request,
    x_shopify_hmac_sha256: Optional[str] = Header(None),
    x_shopify_shop_domain: Optional[str] = Header(None),
    services: ServiceContainer = Depends(get_services),
):
    payload = await verified_payload(
        request, services, x_shopify_hmac_sha256, x_shopify_shop_domain
    )
    logger.info(
        "GDPR customer data request",
        shop=x_shopify_shop_domain,
        customer_id=(payload.get("customer") or {}).get("id"),
    )
    return JSONResponse({"message": "No customer data stored", "data": {}})
