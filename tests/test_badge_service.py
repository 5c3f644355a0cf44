"""
Badge assignment by option value
"""

import pytest
from sqlalchemy.exc import OperationalError

from variant_badges.core.exceptions import (
    NotFoundError,
    PlanLimitExceededError,
    ValidationError,
)
from variant_badges.models.badge_models import BadgeAssignmentRequest

from .conftest import SHOP
from .fakes import make_product
from .helpers import seed_badges


class TestAssign:
    @pytest.mark.asyncio
    async def test_assign_badges_every_matching_variant(self, services, shop_with_option):
        result = await services.badge_service.assign(shop_with_option, "1001", "Red", "HOT")

        assert result.variants_updated == 2
        assert result.variant_ids == ["10010", "10011"]
        badges = await services.badges_repository.badges_by_variant(SHOP)
        assert badges == {"10010": "HOT", "10011": "HOT"}

    @pytest.mark.asyncio
    async def test_assign_is_idempotent(self, services, shop_with_option):
        await services.badge_service.assign(shop_with_option, "1001", "Red", "HOT")
        await services.badge_service.assign(shop_with_option, "1001", "Red", "HOT")

        rows = await services.badge_service.list_assignments(shop_with_option)
        assert len(rows) == 2
        assert {row.option_type for row in rows} == {"Color"}

    @pytest.mark.asyncio
    async def test_reassign_overwrites_badge_type(self, services, shop_with_option):
        await services.badge_service.assign(shop_with_option, "1001", "Red", "HOT")
        await services.badge_service.assign(shop_with_option, "1001", "Red", "NEW")

        badges = await services.badges_repository.badges_by_variant(SHOP)
        assert badges == {"10010": "NEW", "10011": "NEW"}

    @pytest.mark.asyncio
    async def test_null_badge_type_clears_the_group(self, services, shop_with_option):
        await services.badge_service.assign(shop_with_option, "1001", "Red", "HOT")
        await services.badge_service.assign(shop_with_option, "1001", "Blue", "SALE")

        result = await services.badge_service.assign(shop_with_option, "1001", "Red", None)

        assert result.variants_updated == 2
        badges = await services.badges_repository.badges_by_variant(SHOP)
        assert badges == {"10012": "SALE", "10013": "SALE"}

    @pytest.mark.asyncio
    async def test_unknown_badge_type_is_rejected(self, services, shop_with_option):
        with pytest.raises(ValidationError):
            await services.badge_service.assign(shop_with_option, "1001", "Red", "FREE")

    @pytest.mark.asyncio
    async def test_missing_option_value_is_rejected(self, services, shop_with_option):
        with pytest.raises(ValidationError):
            await services.badge_service.assign(shop_with_option, "1001", "  ", "HOT")

    @pytest.mark.asyncio
    async def test_requires_selected_option(self, services, shop):
        with pytest.raises(ValidationError) as exc_info:
            await services.badge_service.assign(shop, "1001", "Red", "HOT")

        assert exc_info.value.message == "No option selected in settings"

    @pytest.mark.asyncio
    async def test_missing_product(self, services, shop_with_option):
        with pytest.raises(NotFoundError) as exc_info:
            await services.badge_service.assign(shop_with_option, "404", "Red", "HOT")

        assert exc_info.value.message == "Product not found"

    @pytest.mark.asyncio
    async def test_unknown_option_value(self, services, shop_with_option):
        with pytest.raises(NotFoundError) as exc_info:
            await services.badge_service.assign(shop_with_option, "1001", "Purple", "HOT")

        assert exc_info.value.message == "No variants found with Color = Purple"

    @pytest.mark.asyncio
    async def test_free_cap_refuses_sixth_product(
        self, services, shop_with_option
    ):
        await seed_badges(services.badges_repository, SHOP, ["1", "2", "3", "4", "5"])

        with pytest.raises(PlanLimitExceededError) as exc_info:
            await services.badge_service.assign(shop_with_option, "1001", "Red", "HOT")

        assert exc_info.value.to_response() == {
            "error": "Product limit reached",
            "currentProducts": 5,
            "maxProducts": 5,
            "needsUpgrade": True,
        }
        assert not await services.badges_repository.product_has_badges(SHOP, "1001")

    @pytest.mark.asyncio
    async def test_clearing_is_never_gated(self, services, shop_with_option):
        await services.badge_service.assign(shop_with_option, "1001", "Red", "HOT")
        await seed_badges(services.badges_repository, SHOP, ["1", "2", "3", "4", "5"])

        result = await services.badge_service.assign(shop_with_option, "1001", "Red", None)

        assert result.variants_updated == 2


class TestAssignBulk:
    @pytest.mark.asyncio
    async def test_one_failure_does_not_stop_the_rest(self, services, shop_with_option):
        items = [
            BadgeAssignmentRequest(product_id="1001", option_value="Red", badge_type="hot"),
            BadgeAssignmentRequest(product_id="404", option_value="Red", badge_type="NEW"),
            BadgeAssignmentRequest(product_id="1001", option_value="Blue", badge_type="SALE"),
        ]

        results = await services.badge_service.assign_bulk(shop_with_option, items)

        assert results == [
            {"productId": "1001", "optionValue": "Red", "success": True, "variantsUpdated": 2},
            {"productId": "404", "optionValue": "Red", "success": False, "error": "Product not found"},
            {"productId": "1001", "optionValue": "Blue", "success": True, "variantsUpdated": 2},
        ]

    @pytest.mark.asyncio
    async def test_storage_error_is_reported_per_item(
        self, services, shop_with_option, monkeypatch
    ):
        repository = services.badges_repository
        original_upsert = repository.upsert_many
        calls = []

        async def flaky_upsert(shop, rows, session=None):
            calls.append(rows)
            if len(calls) == 1:
                raise OperationalError("INSERT", {}, Exception("database is locked"))
            return await original_upsert(shop, rows, session=session)

        monkeypatch.setattr(repository, "upsert_many", flaky_upsert)
        items = [
            BadgeAssignmentRequest(product_id="1001", option_value="Red", badge_type="HOT"),
            BadgeAssignmentRequest(product_id="1001", option_value="Blue", badge_type="NEW"),
        ]

        results = await services.badge_service.assign_bulk(shop_with_option, items)

        assert results == [
            {
                "productId": "1001",
                "optionValue": "Red",
                "success": False,
                "error": "Failed to save badge",
            },
            {"productId": "1001", "optionValue": "Blue", "success": True, "variantsUpdated": 2},
        ]
        badges = await repository.badges_by_variant(SHOP)
        assert badges == {"10012": "NEW", "10013": "NEW"}


class TestListRows:
    @pytest.mark.asyncio
    async def test_rows_reflect_stored_badges(self, services, shopify_clients, shop_with_option):
        shopify_clients.products.add(make_product("2002", "Arctic Hoodie", colors=("Grey",)))
        await services.badge_service.assign(shop_with_option, "1001", "Red", "HOT")

        page = await services.badge_service.list_rows(shop_with_option, page=1, limit=2)

        assert page["selectedOption"] == "Color"
        assert page["total"] == 3
        assert page["totalPages"] == 2
        assert [(r["productTitle"], r["optionValue"]) for r in page["rows"]] == [
            ("Arctic Hoodie", "Grey"),
            ("Classic Tee", "Blue"),
        ]

        last = await services.badge_service.list_rows(shop_with_option, page=2, limit=2)
        assert last["rows"][0]["optionValue"] == "Red"
        assert last["rows"][0]["badgeType"] == "HOT"

    @pytest.mark.asyncio
    async def test_no_selected_option_gives_empty_page(self, services, shop):
        page = await services.badge_service.list_rows(shop)

        assert page["rows"] == []
        assert page["selectedOption"] is None
