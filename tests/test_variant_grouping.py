"""
Option -> variant grouping and the storefront inverse lookup
"""

from variant_badges.domains.badges.services import (
    GroupBadge,
    GroupBadgeKind,
    build_badge_rows,
    build_option_value_index,
    find_badge_for_option_value,
    group_variants_by_option,
    paginate,
    resolve_group_badge,
)
from variant_badges.domains.shopify.models import (
    Product,
    ProductOption,
    ProductVariant,
    SelectedOption,
)

from .fakes import make_product


class TestGroupVariantsByOption:
    def test_groups_follow_declared_value_order(self):
        product = make_product("1001", "Tee", colors=("Red", "Blue", "Green"))

        groups = group_variants_by_option(product, "Color")

        assert [g.option_value for g in groups] == ["Red", "Blue", "Green"]
        assert groups[0].variant_ids == ["10010", "10011"]
        assert groups[1].variant_ids == ["10012", "10013"]

    def test_undeclared_values_come_last_in_first_seen_order(self):
        product = Product(
            id="7",
            title="Mug",
            options=[ProductOption(name="Color", values=["White"])],
            variants=[
                ProductVariant(id="1", selected_options=[SelectedOption("Color", "Black")]),
                ProductVariant(id="2", selected_options=[SelectedOption("Color", "White")]),
                ProductVariant(id="3", selected_options=[SelectedOption("Color", "Teal")]),
                ProductVariant(id="4", selected_options=[SelectedOption("Color", "Black")]),
            ],
        )

        groups = group_variants_by_option(product, "Color")

        assert [(g.option_value, g.variant_ids) for g in groups] == [
            ("White", ["2"]),
            ("Black", ["1", "4"]),
            ("Teal", ["3"]),
        ]

    def test_option_name_match_is_exact(self):
        product = make_product("1001", "Tee")

        assert group_variants_by_option(product, "color") == []
        assert group_variants_by_option(product, "Material") == []

    def test_groups_by_second_option(self):
        product = make_product("1001", "Tee", colors=("Red", "Blue"), sizes=("S", "M"))

        groups = group_variants_by_option(product, "Size")

        assert [(g.option_value, g.variant_ids) for g in groups] == [
            ("S", ["10010", "10012"]),
            ("M", ["10011", "10013"]),
        ]


class TestResolveGroupBadge:
    def test_single_badge_when_all_agree(self):
        badges = {"1": "HOT", "2": "HOT"}

        badge = resolve_group_badge(["1", "2"], badges)

        assert badge == GroupBadge.single("HOT")
        assert badge.display == "HOT"

    def test_mixed_badges_display_as_none(self):
        badges = {"3": "HOT", "4": "NEW"}

        badge = resolve_group_badge(["3", "4"], badges)

        assert badge.kind is GroupBadgeKind.MIXED
        assert badge.display == "none"

    def test_no_badges(self):
        badge = resolve_group_badge(["1", "2"], {})

        assert badge.kind is GroupBadgeKind.NONE
        assert badge.display is None

    def test_partially_badged_group_counts_as_single(self):
        assert resolve_group_badge(["1", "2"], {"2": "SALE"}) == GroupBadge.single("SALE")

    def test_red_and_blue_groups(self):
        product = make_product("1001", "Tee", colors=("Red", "Blue"), sizes=("S", "M"))
        badges = {"10010": "HOT", "10011": "HOT", "10012": "HOT", "10013": "NEW"}

        red, blue = group_variants_by_option(product, "Color")

        assert resolve_group_badge(red.variant_ids, badges).display == "HOT"
        assert resolve_group_badge(blue.variant_ids, badges).kind is GroupBadgeKind.MIXED


class TestStorefrontLookup:
    def test_index_and_lookup(self):
        product = make_product("1001", "Tee", colors=("Red", "Blue"), sizes=("S", "M"))
        index = build_option_value_index(product.variants, "Color")

        assert index == {"Red": ["10010", "10011"], "Blue": ["10012", "10013"]}
        assert find_badge_for_option_value("Blue", index, {"10013": "NEW"}) == "NEW"
        assert find_badge_for_option_value("Red", index, {"10013": "NEW"}) is None
        assert find_badge_for_option_value("Green", index, {"10013": "NEW"}) is None

    def test_lookup_returns_first_badged_variant(self):
        index = {"Red": ["1", "2", "3"]}

        assert find_badge_for_option_value("Red", index, {"2": "SALE", "3": "HOT"}) == "SALE"


class TestBadgeRows:
    def test_rows_sorted_by_title_then_value(self):
        products = [
            make_product("2", "zebra Socks", colors=("Red",), sizes=("S",)),
            make_product("1", "Apple Hat", colors=("Red", "Blue"), sizes=("S",)),
        ]
        badges = {"10": "HOT"}

        rows = build_badge_rows(products, "Color", badges)

        assert [(r.product_title, r.option_value) for r in rows] == [
            ("Apple Hat", "Blue"),
            ("Apple Hat", "Red"),
            ("zebra Socks", "Red"),
        ]
        assert rows[1].to_dict()["badgeType"] == "HOT"
        assert rows[0].to_dict()["badgeType"] is None

    def test_paginate(self):
        items = list(range(7))

        assert paginate(items, 1, 3) == ([0, 1, 2], 7, 3)
        assert paginate(items, 3, 3) == ([6], 7, 3)
        assert paginate(items, 4, 3) == ([], 7, 3)
