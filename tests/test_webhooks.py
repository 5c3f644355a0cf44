"""
Webhook and OAuth signature checks, uninstall and install flows
"""

import base64
import hashlib
import hmac
import json

import pytest

from variant_badges.webhooks import ShopifyWebhookVerifier

from .conftest import API_KEY, API_SECRET, SHOP
from .helpers import seed_badges


def sign_body(body: bytes, secret: str = API_SECRET) -> str:
    digest = hmac.new(secret.encode("utf-8"), body, hashlib.sha256).digest()
    return base64.b64encode(digest).decode("utf-8")


def webhook_headers(body: bytes, shop_domain: str = SHOP, secret: str = API_SECRET):
    return {
        "Content-Type": "application/json",
        "X-Shopify-Hmac-Sha256": sign_body(body, secret),
        "X-Shopify-Shop-Domain": shop_domain,
    }


class TestShopifyWebhookVerifier:
    def setup_method(self):
        self.verifier = ShopifyWebhookVerifier(API_SECRET)

    def test_valid_body_signature(self):
        body = b'{"id": 1}'

        assert self.verifier.verify_webhook_signature(body, sign_body(body)) is True

    def test_tampered_body_fails(self):
        signature = sign_body(b'{"id": 1}')

        assert self.verifier.verify_webhook_signature(b'{"id": 2}', signature) is False

    def test_missing_signature_fails(self):
        assert self.verifier.verify_webhook_signature(b"{}", None) is False

    def test_missing_secret_fails(self):
        body = b"{}"

        assert ShopifyWebhookVerifier("").verify_webhook_signature(body, sign_body(body)) is False

    def test_query_signature_ignores_hmac_and_sorts_keys(self):
        params = {"timestamp": "1700000000", "shop": SHOP, "code": "abc"}
        message = f"code=abc&shop={SHOP}&timestamp=1700000000"
        expected = hmac.new(
            API_SECRET.encode("utf-8"), message.encode("utf-8"), hashlib.sha256
        ).hexdigest()

        assert self.verifier.calculate_query_signature({**params, "hmac": "x"}) == expected
        assert self.verifier.verify_query_signature({**params, "hmac": expected}) is True
        assert self.verifier.verify_query_signature({**params, "hmac": "0" * 64}) is False


class TestWebhookRoutes:
    @pytest.mark.asyncio
    async def test_uninstall_removes_shop_data(self, client, services, shop_with_option):
        await seed_badges(services.badges_repository, SHOP, ["1", "2"])
        await services.analytics.track({"shop": SHOP, "eventType": "view"})
        body = json.dumps({"id": 1, "domain": SHOP}).encode("utf-8")

        response = await client.post(
            "/webhooks/app/uninstalled", content=body, headers=webhook_headers(body)
        )

        assert response.status_code == 200
        assert response.text == "OK"
        assert await services.shops.get_by_domain(SHOP) is None
        assert await services.badges_repository.count_distinct_products(SHOP) == 0
        assert (await services.settings_service.get(SHOP)).selected_option is None
        summary = await services.analytics.summary(SHOP)
        assert summary["totalEvents"] == 0
        subscription = await services.billing_service.subscriptions.get(SHOP)
        assert subscription.status == "uninstalled"

    @pytest.mark.asyncio
    async def test_bad_signature_is_rejected(self, client, services, shop):
        body = b'{"id": 1}'
        headers = webhook_headers(body, secret="wrong-secret")

        response = await client.post("/webhooks/app/uninstalled", content=body, headers=headers)

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid HMAC"}
        assert await services.shops.get_by_domain(SHOP) is not None

    @pytest.mark.asyncio
    async def test_missing_shop_header(self, client):
        body = b"{}"
        headers = {"X-Shopify-Hmac-Sha256": sign_body(body)}

        response = await client.post("/webhooks/shop/redact", content=body, headers=headers)

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_customer_webhooks_are_acknowledged(self, client):
        body = json.dumps({"customer": {"id": 7}}).encode("utf-8")

        redact = await client.post(
            "/webhooks/customers/redact", content=body, headers=webhook_headers(body)
        )
        data_request = await client.post(
            "/webhooks/customers/data_request", content=body, headers=webhook_headers(body)
        )

        assert redact.text == "OK"
        assert data_request.json() == {"message": "No customer data stored", "data": {}}


class TestOAuth:
    def signed_params(self, services, **params):
        params = {"shop": SHOP, "timestamp": "1700000000", **params}
        params["hmac"] = services.verifier.calculate_query_signature(params)
        return params

    @pytest.mark.asyncio
    async def test_begin_auth_sets_state_cookie(self, client):
        response = await client.get("/auth", params={"shop": SHOP})

        assert response.status_code == 302
        assert response.headers["location"].startswith(
            f"https://{SHOP}/admin/oauth/authorize?state="
        )
        assert "shopify_oauth_state=" in response.headers["set-cookie"]

    @pytest.mark.asyncio
    async def test_begin_auth_rejects_foreign_domain(self, client):
        response = await client.get("/auth", params={"shop": "evil.example.com"})

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_callback_installs_shop(self, client, services, shopify_clients):
        params = self.signed_params(services, code="auth-code", state="abc123")

        response = await client.get(
            "/auth/callback", params=params, headers={"Cookie": "shopify_oauth_state=abc123"}
        )

        assert response.status_code == 302
        assert response.headers["location"] == f"https://{SHOP}/admin/apps/{API_KEY}"
        assert shopify_clients.oauth.exchanged == [(SHOP, "auth-code")]
        shop = await services.shops.get_by_domain(SHOP)
        assert shop.access_token == "shpat_new_token"
        subscription = await services.billing_service.subscriptions.get(SHOP)
        assert (subscription.plan_name, subscription.status) == ("free", "active")

    @pytest.mark.asyncio
    async def test_reinstall_resets_uninstalled_subscription(self, client, services, shop):
        await services.billing_service.subscriptions.save(
            SHOP, {"plan_name": "pro", "status": "active", "charge_id": "1"}
        )
        await services.lifecycle.uninstall(SHOP)
        params = self.signed_params(services, code="auth-code", state="abc123")

        await client.get(
            "/auth/callback", params=params, headers={"Cookie": "shopify_oauth_state=abc123"}
        )

        subscription = await services.billing_service.subscriptions.get(SHOP)
        assert (subscription.plan_name, subscription.status) == ("free", "active")
        assert subscription.charge_id is None

    @pytest.mark.asyncio
    async def test_reauth_keeps_active_pro(self, services, shop):
        await services.billing_service.subscriptions.save(
            SHOP, {"plan_name": "pro", "status": "active", "charge_id": "1"}
        )

        await services.lifecycle.complete_install(SHOP, "shpat_rotated", "read_products")

        subscription = await services.billing_service.subscriptions.get(SHOP)
        assert (subscription.plan_name, subscription.status) == ("pro", "active")

    @pytest.mark.asyncio
    async def test_callback_rejects_bad_hmac(self, client, services, shopify_clients):
        params = self.signed_params(services, code="auth-code", state="abc123")
        params["hmac"] = "0" * 64

        response = await client.get(
            "/auth/callback", params=params, headers={"Cookie": "shopify_oauth_state=abc123"}
        )

        assert response.status_code == 401
        assert shopify_clients.oauth.exchanged == []

    @pytest.mark.asyncio
    async def test_callback_rejects_state_mismatch(self, client, services):
        params = self.signed_params(services, code="auth-code", state="abc123")

        response = await client.get(
            "/auth/callback", params=params, headers={"Cookie": "shopify_oauth_state=other"}
        )

        assert response.status_code == 401
        assert response.json()["error"] == "OAuth state mismatch"
