"""
App Bridge session token authentication for merchant admin requests

The embedded admin sends `Authorization: Bearer <jwt>`. The token is signed
with the app's API secret (HS256), its audience is the API key and `dest`
names the shop. The shop must have completed OAuth so an access token is
on file.
"""

from typing import Any, Dict, Optional

import jwt
from fastapi import Depends, Header, Request

from variant_badges.core.config.settings import ShopifySettings
from variant_badges.core.database import Database, get_database
from variant_badges.core.database.models import Shop
from variant_badges.core.exceptions import AuthenticationError
from variant_badges.core.logging import get_logger
from variant_badges.repository import ShopRepository

logger = get_logger(__name__)

ALGORITHM = "HS256"


def decode_session_token(token: str, shopify_settings: ShopifySettings) -> Dict[str, Any]:
    try:
        return jwt.decode(
            token,
            shopify_settings.SHOPIFY_API_SECRET,
            algorithms=[ALGORITHM],
            audience=shopify_settings.SHOPIFY_API_KEY,
            leeway=10,
        )
    except jwt.ExpiredSignatureError as e:
        raise AuthenticationError("Session token expired", cause=e) from e
    except jwt.InvalidTokenError as e:
        logger.warning("Token decode error", error=str(e))
        raise AuthenticationError("Invalid session token", cause=e) from e


def shop_from_payload(payload: Dict[str, Any]) -> str:
    dest = payload.get("dest") or ""
    return dest.replace("https://", "").replace("http://", "").replace("/admin", "").strip("/")


async def get_current_shop(
    request: Request,
    authorization: Optional[str] = Header(None),
    database: Database = Depends(get_database),
) -> Shop:
    """FastAPI dependency resolving the authenticated shop"""
    if not authorization or not authorization.startswith("Bearer "):
        raise AuthenticationError("Missing authorization header")

    payload = decode_session_token(
        authorization[len("Bearer ") :], request.app.state.settings.shopify
    )
    shop_domain = shop_from_payload(payload)

    shop = await ShopRepository(database).get_active_by_domain(shop_domain)
    if shop is None:
        logger.info("Shop not authenticated in database", shop=shop_domain)
        raise AuthenticationError(
            "Shop not authenticated",
            needs_auth=True,
            details={
                "shop": shop_domain,
                "hint": "Please complete the OAuth installation flow",
            },
        )
    return shop
