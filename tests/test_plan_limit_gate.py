"""
Free plan product cap
"""

from datetime import timedelta

import pytest

from variant_badges.shared.helpers import now_utc

from .conftest import SHOP
from .helpers import seed_badges


class TestPlanLimitGate:
    @pytest.mark.asyncio
    async def test_free_shop_under_cap_is_allowed(self, services, shop):
        await seed_badges(services.badges_repository, SHOP, ["1", "2"])

        decision = await services.gate.can_assign(SHOP, "3")

        assert decision.allowed is True
        assert decision.current_count == 2
        assert decision.max_count == 5
        assert decision.plan == "free"

    @pytest.mark.asyncio
    async def test_new_product_past_cap_is_refused(self, services, shop):
        await seed_badges(services.badges_repository, SHOP, ["1", "2", "3", "4", "5"])

        decision = await services.gate.can_assign(SHOP, "6")

        assert decision.allowed is False
        assert decision.current_count == 5
        assert decision.max_count == 5

    @pytest.mark.asyncio
    async def test_already_badged_product_is_always_allowed(self, services, shop):
        await seed_badges(services.badges_repository, SHOP, ["1", "2", "3", "4", "5"])

        decision = await services.gate.can_assign(SHOP, "3")

        assert decision.allowed is True
        assert decision.current_count == 5

    @pytest.mark.asyncio
    async def test_pro_shop_is_unlimited(self, services, shop):
        await services.billing_service.subscriptions.save(
            SHOP, {"plan_name": "pro", "status": "active", "charge_id": "9"}
        )
        await seed_badges(services.badges_repository, SHOP, [str(n) for n in range(1, 9)])

        decision = await services.gate.can_assign(SHOP, "99")

        assert decision.allowed is True
        assert decision.max_count is None
        assert decision.plan == "pro"

    @pytest.mark.asyncio
    async def test_cancelled_pro_in_grace_is_unlimited(self, services, shop):
        await services.billing_service.subscriptions.save(
            SHOP,
            {
                "plan_name": "pro",
                "status": "cancelled",
                "billing_on": now_utc() + timedelta(days=3),
            },
        )
        await seed_badges(services.badges_repository, SHOP, [str(n) for n in range(1, 9)])

        decision = await services.gate.can_assign(SHOP, "99")

        assert decision.allowed is True
        assert await services.badges_repository.count_distinct_products(SHOP) == 8

    @pytest.mark.asyncio
    async def test_lapsed_pro_is_cleaned_before_counting(self, services, shop):
        await services.billing_service.subscriptions.save(
            SHOP,
            {
                "plan_name": "pro",
                "status": "cancelled",
                "billing_on": now_utc() - timedelta(days=1),
            },
        )
        await seed_badges(services.badges_repository, SHOP, [str(n) for n in range(1, 9)])

        decision = await services.gate.can_assign(SHOP, "99")

        assert decision.allowed is False
        assert decision.current_count == 5
        assert decision.plan == "free"

    @pytest.mark.asyncio
    async def test_plan_lookup_failure_fails_open(self, services, shop, monkeypatch):
        async def broken_resolve(shop_domain, now=None):
            raise RuntimeError("database unavailable")

        monkeypatch.setattr(services.resolver, "resolve", broken_resolve)

        decision = await services.gate.can_assign(SHOP, "6")

        assert decision.allowed is True
        assert decision.plan == "unknown"
        assert decision.max_count is None
