"""
Downgrade cleanup keeps the lowest product ids
"""

import pytest

from variant_badges.domains.billing.services import select_retained_products

from .conftest import SHOP
from .helpers import seed_badges


class TestSelectRetainedProducts:
    def test_numeric_ids_sort_numerically(self):
        kept, removed = select_retained_products(["3", "1", "8", "2", "7", "4", "6", "5"], 5)

        assert kept == ["1", "2", "3", "4", "5"]
        assert removed == ["6", "7", "8"]

    def test_numeric_sort_is_not_lexical(self):
        kept, removed = select_retained_products(["10", "9", "100", "2"], 2)

        assert kept == ["2", "9"]
        assert removed == ["10", "100"]

    def test_mixed_ids_sort_lexically(self):
        kept, removed = select_retained_products(["b", "10", "a", "9"], 2)

        assert kept == ["10", "9"]
        assert removed == ["a", "b"]

    def test_under_limit_keeps_everything(self):
        assert select_retained_products(["2", "1"], 5) == (["1", "2"], [])


class TestBadgeCleanupService:
    @pytest.mark.asyncio
    async def test_cleanup_is_deterministic_and_idempotent(self, services):
        await seed_badges(
            services.badges_repository, SHOP, ["3", "1", "8", "2", "7", "4", "6", "5"]
        )

        result = await services.cleanup.cleanup(SHOP)

        assert result.cleaned is True
        assert result.kept_products == 5
        assert result.removed_products == 3
        assert result.removed_product_ids == ["6", "7", "8"]
        assert result.removed_assignments == 6
        remaining = await services.badges_repository.distinct_product_ids(SHOP)
        assert sorted(remaining, key=int) == ["1", "2", "3", "4", "5"]

        again = await services.cleanup.cleanup(SHOP)
        assert again.cleaned is False
        assert again.kept_products == 5

    @pytest.mark.asyncio
    async def test_cleanup_only_touches_one_shop(self, services):
        other = "other-store.myshopify.com"
        await seed_badges(services.badges_repository, SHOP, [str(n) for n in range(1, 8)])
        await seed_badges(services.badges_repository, other, [str(n) for n in range(1, 8)])

        await services.cleanup.cleanup(SHOP)

        assert await services.badges_repository.count_distinct_products(SHOP) == 5
        assert await services.badges_repository.count_distinct_products(other) == 7
