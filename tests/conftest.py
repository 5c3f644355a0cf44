import time

import httpx
import jwt
import pytest

from variant_badges.api.dependencies import build_services
from variant_badges.core.config.settings import (
    DatabaseSettings,
    PlanSettings,
    Settings,
    ShopifySettings,
)
from variant_badges.core.database import Database
from variant_badges.main import create_app

from .fakes import make_clients, make_product

API_KEY = "test-api-key"
API_SECRET = "test-api-secret"
SHOP = "demo-store.myshopify.com"
ACCESS_TOKEN = "shpat_test_token"


@pytest.fixture
def app_settings(tmp_path):
    return Settings(
        database=DatabaseSettings(DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path}/test.db"),
        shopify=ShopifySettings(
            SHOPIFY_API_KEY=API_KEY,
            SHOPIFY_API_SECRET=API_SECRET,
            SHOPIFY_APP_URL="https://badges.example.com",
        ),
        plans=PlanSettings(FREE_PLAN_MAX_PRODUCTS=5, BADGE_TYPES="HOT,NEW,SALE"),
        PUBLIC_CACHE_MAX_AGE=10,
    )


@pytest.fixture
async def database(app_settings):
    db = Database.from_settings(app_settings.database)
    await db.create_tables()
    yield db
    await db.close()


@pytest.fixture
def tee():
    return make_product("1001", "Classic Tee")


@pytest.fixture
def shopify_clients(tee):
    return make_clients([tee])


@pytest.fixture
def services(app_settings, database, shopify_clients):
    return build_services(app_settings, database, shopify_clients)


@pytest.fixture
async def shop(services):
    """An installed shop on the free plan"""
    return await services.lifecycle.complete_install(SHOP, ACCESS_TOKEN, "read_products")


@pytest.fixture
async def shop_with_option(services, shop):
    """Installed shop with Color selected"""
    from variant_badges.models.settings_models import SettingsPatch

    await services.settings_service.update(SHOP, SettingsPatch(selected_option="Color"))
    return shop


@pytest.fixture
def app(app_settings, database, shopify_clients):
    return create_app(
        settings=app_settings, database=database, shopify_clients=shopify_clients
    )


@pytest.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


def session_token(shop_domain: str = SHOP, secret: str = API_SECRET, ttl: int = 60) -> str:
    """App Bridge style session token"""
    now = int(time.time())
    return jwt.encode(
        {
            "iss": f"https://{shop_domain}/admin",
            "dest": f"https://{shop_domain}",
            "aud": API_KEY,
            "sub": "42",
            "exp": now + ttl,
            "nbf": now - 5,
            "iat": now - 5,
            "jti": "test-jti",
        },
        secret,
        algorithm="HS256",
    )


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {session_token()}"}
