"""
Shopify OAuth install flow
"""

import re
import secrets
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse

from variant_badges.api.dependencies import ServiceContainer, get_services
from variant_badges.core.exceptions import (
    AuthenticationError,
    ShopifyAPIError,
    ValidationError,
)
from variant_badges.core.logging import get_logger

router = APIRouter(tags=["auth"])
logger = get_logger(__name__)

STATE_COOKIE = "shopify_oauth_state"
SHOP_DOMAIN_PATTERN = re.compile(r"^[a-zA-Z0-9][a-zA-Z0-9\-]*\.myshopify\.com$")


def validate_shop_domain(shop: Optional[str]) -> str:
    if not shop or not SHOP_DOMAIN_PATTERN.match(shop):
        raise ValidationError("Invalid shop parameter", field="shop", value=shop)
    return shop


@router.get("/auth")
async def begin_auth(
    shop: Optional[str] = None,
    services: ServiceContainer = Depends(get_services),
):
    shop = validate_shop_domain(shop)
    state = secrets.token_urlsafe(16)
    response = RedirectResponse(
        services.shopify.oauth.authorize_url(shop, state), status_code=302
    )
    response.set_cookie(
        STATE_COOKIE, state, httponly=True, secure=True, samesite="none", max_age=600
    )
    return response


@router.get("/auth/callback")
async def auth_callback(
    request: Request,
    services: ServiceContainer = Depends(get_services),
):
    params = dict(request.query_params)
    shop = validate_shop_domain(params.get("shop"))

    if not services.verifier.verify_query_signature(params):
        logger.warning("OAuth callback failed HMAC", shop=shop)
        raise AuthenticationError("Invalid HMAC")

    expected_state = request.cookies.get(STATE_COOKIE)
    if not expected_state or params.get("state") != expected_state:
        raise AuthenticationError("OAuth state mismatch")

    code = params.get("code")
    if not code:
        raise ValidationError("Missing code parameter", field="code")

    token = await services.shopify.oauth.exchange_code(shop, code)
    access_token = token.get("access_token")
    if not access_token:
        raise ShopifyAPIError("Token exchange returned no access token", shop_domain=shop)
    await services.lifecycle.complete_install(shop, access_token, token.get("scope"))

    response = RedirectResponse(
        f"https://{shop}/admin/apps/{services.settings.shopify.SHOPIFY_API_KEY}",
        status_code=302,
    )
    response.delete_cookie(STATE_COOKIE)
    return response
