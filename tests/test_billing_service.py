"""
Pro plan charge lifecycle
"""

from datetime import datetime, timedelta, timezone

import pytest

from variant_badges.core.exceptions import ValidationError
from variant_badges.shared.helpers import now_utc

from .conftest import API_KEY, SHOP
from .helpers import seed_badges

ADMIN_URL = f"https://{SHOP}/admin/apps/{API_KEY}"


@pytest.fixture
def billing(services):
    return services.billing_service


@pytest.fixture
def charges(shopify_clients):
    return shopify_clients.billing


class TestCreateCharge:
    @pytest.mark.asyncio
    async def test_creates_pending_charge(self, billing, charges, shop):
        result = await billing.create_charge(shop, "pro")

        assert result["chargeId"] == 5001
        assert result["confirmationUrl"].endswith("/charges/5001/confirm")
        created = charges.created[0]
        assert created["price"] == 4.99
        assert created["test"] is False
        assert created["return_url"] == (
            "https://badges.example.com/api/billing/activate?shop=demo-store.myshopify.com"
        )

        row = await billing.subscriptions.get(SHOP)
        assert (row.plan_name, row.status, row.charge_id) == ("free", "pending", "5001")

    @pytest.mark.asyncio
    async def test_development_store_gets_test_charge(self, billing, charges, shop):
        charges.shop_plan = "partner_test"

        await billing.create_charge(shop, "pro")

        assert charges.created[0]["test"] is True

    @pytest.mark.asyncio
    async def test_unknown_plan_is_rejected(self, billing, shop):
        with pytest.raises(ValidationError):
            await billing.create_charge(shop, "enterprise")

    @pytest.mark.asyncio
    async def test_pending_shop_is_still_free(self, billing, services, shop):
        await billing.create_charge(shop, "pro")

        decision = await services.resolver.resolve(SHOP)

        assert decision.plan == "free"
        assert decision.pending_upgrade is True


class TestActivate:
    @pytest.mark.asyncio
    async def test_accepted_charge_activates_pro(self, billing, charges, shop):
        await billing.create_charge(shop, "pro")
        charges.charges["5001"].update(status="accepted", billing_on="2030-02-01")

        url = await billing.activate(SHOP, "5001")

        assert url == f"{ADMIN_URL}?upgraded=true"
        row = await billing.subscriptions.get(SHOP)
        assert (row.plan_name, row.status, row.charge_id) == ("pro", "active", "5001")

    @pytest.mark.asyncio
    async def test_declined_charge_returns_to_free(self, billing, charges, shop):
        await billing.create_charge(shop, "pro")
        charges.charges["5001"]["status"] = "declined"

        url = await billing.activate(SHOP, "5001")

        assert url == ADMIN_URL
        row = await billing.subscriptions.get(SHOP)
        assert (row.plan_name, row.status, row.charge_id) == ("free", "active", None)

    @pytest.mark.asyncio
    async def test_unknown_charge_redirects_with_error(self, billing, shop):
        url = await billing.activate(SHOP, "999")

        assert url == f"{ADMIN_URL}?error=activation_failed"

    @pytest.mark.asyncio
    async def test_unknown_shop_redirects_plainly(self, billing):
        url = await billing.activate("missing.myshopify.com", "5001")

        assert url == f"https://missing.myshopify.com/admin/apps/{API_KEY}"


class TestCancel:
    @pytest.mark.asyncio
    async def test_cancel_pro_keeps_pro_until_billing_date(
        self, billing, charges, services, shop
    ):
        await billing.create_charge(shop, "pro")
        charges.charges["5001"].update(status="active", billing_on="2099-02-01T00:00:00Z")
        await billing.activate(SHOP, "5001")
        await seed_badges(services.badges_repository, SHOP, [str(n) for n in range(1, 9)])

        result = await billing.cancel(shop)

        assert result["plan"] == "pro"
        assert result["status"] == "cancelled"
        assert result["expiresOn"] == "2099-02-01T00:00:00+00:00"
        assert result["warning"] == {
            "currentProducts": 8,
            "freeLimit": 5,
            "productsToLose": 3,
        }
        assert charges.deleted == ["5001"]

        decision = await services.resolver.resolve(SHOP)
        assert decision.unlimited is True
        assert decision.grace_expires_on == datetime(2099, 2, 1, tzinfo=timezone.utc)

    @pytest.mark.asyncio
    async def test_cancel_pending_upgrade(self, billing, charges, shop):
        await billing.create_charge(shop, "pro")

        result = await billing.cancel(shop)

        assert result["message"] == "Pending upgrade cancelled - returned to Free plan"
        assert charges.deleted == ["5001"]
        row = await billing.subscriptions.get(SHOP)
        assert (row.plan_name, row.status, row.charge_id) == ("free", "active", None)

    @pytest.mark.asyncio
    async def test_cancel_pending_tolerates_missing_charge(self, billing, charges, shop):
        await billing.create_charge(shop, "pro")
        charges.fail_delete = True

        result = await billing.cancel(shop)

        assert result["success"] is True
        assert (await billing.subscriptions.get(SHOP)).status == "active"

    @pytest.mark.asyncio
    async def test_cancel_on_free_is_a_no_op(self, billing, shop):
        result = await billing.cancel(shop)

        assert result["message"] == "Already on the Free plan"

    @pytest.mark.asyncio
    async def test_cancel_after_grace_has_ended(self, billing, charges, services, shop):
        await billing.subscriptions.save(
            SHOP,
            {
                "plan_name": "pro",
                "status": "cancelled",
                "charge_id": "5001",
                "billing_on": now_utc() - timedelta(days=2),
            },
        )
        await seed_badges(services.badges_repository, SHOP, [str(n) for n in range(1, 9)])

        result = await billing.cancel(shop)

        assert result["message"] == "Already on the Free plan"
        assert result["plan"] == "free"
        assert charges.deleted == []
        row = await billing.subscriptions.get(SHOP)
        assert (row.plan_name, row.status) == ("free", "active")
        assert await services.badges_repository.count_distinct_products(SHOP) == 5


class TestStatus:
    @pytest.mark.asyncio
    async def test_status_for_free_shop(self, billing, services, shop):
        await seed_badges(services.badges_repository, SHOP, ["1", "2"])

        status = await billing.status(shop)

        assert status["plan_name"] == "free"
        assert status["status"] == "active"
        assert status["effectivePlan"] == "free"
        assert status["currentProducts"] == 2
        assert status["maxProducts"] == 5

    @pytest.mark.asyncio
    async def test_status_creates_missing_row(self, billing, services):
        shop = await services.shops.upsert(SHOP, "shpat_x")

        status = await billing.status(shop)

        assert status["plan_name"] == "free"
        assert status["unlimited"] is False
