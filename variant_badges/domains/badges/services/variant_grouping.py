"""
Option -> variant grouping

Badges are assigned per value of the shop's selected option (e.g. every
"Red" variant of a product) but stored per variant. These helpers map
between the two views in both directions.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from variant_badges.domains.shopify.models import Product, ProductVariant
from variant_badges.shared.constants import MIXED_BADGE_LABEL


@dataclass(frozen=True)
class OptionGroup:
    option_value: str
    variant_ids: List[str] = field(default_factory=list)


class GroupBadgeKind(str, Enum):
    SINGLE = "single"
    MIXED = "mixed"
    NONE = "none"


@dataclass(frozen=True)
class GroupBadge:
    """Effective badge of an option group"""

    kind: GroupBadgeKind
    badge_type: Optional[str] = None

    @classmethod
    def single(cls, badge_type: str) -> "GroupBadge":
        return cls(GroupBadgeKind.SINGLE, badge_type)

    @classmethod
    def mixed(cls) -> "GroupBadge":
        return cls(GroupBadgeKind.MIXED)

    @classmethod
    def none(cls) -> "GroupBadge":
        return cls(GroupBadgeKind.NONE)

    @property
    def display(self) -> Optional[str]:
        """Label shown to merchants; a mixed group reads as "none"."""
        if self.kind is GroupBadgeKind.SINGLE:
            return self.badge_type
        if self.kind is GroupBadgeKind.MIXED:
            return MIXED_BADGE_LABEL
        return None


def group_variants_by_option(product: Product, option_name: str) -> List[OptionGroup]:
    """
    One group per distinct value of `option_name` across the product's variants.

    Groups follow the product's declared value order; values only seen on
    variants come after, in first-seen order. Variants lacking the option
    are skipped. Option names match exactly.
    """
    variant_ids_by_value: Dict[str, List[str]] = {}
    for variant in product.variants:
        value = variant.option_value(option_name)
        if value is None:
            continue
        variant_ids_by_value.setdefault(value, []).append(variant.id)

    option = product.option(option_name)
    declared = list(option.values) if option else []
    ordered_values = [v for v in declared if v in variant_ids_by_value]
    ordered_values += [v for v in variant_ids_by_value if v not in declared]

    return [OptionGroup(value, variant_ids_by_value[value]) for value in ordered_values]


def find_option_group(
    product: Product, option_name: str, option_value: str
) -> Optional[OptionGroup]:
    for group in group_variants_by_option(product, option_name):
        if group.option_value == option_value:
            return group
    return None


def resolve_group_badge(
    variant_ids: Iterable[str], badges_by_variant: Mapping[str, str]
) -> GroupBadge:
    distinct = {badges_by_variant[v] for v in variant_ids if v in badges_by_variant}
    if not distinct:
        return GroupBadge.none()
    if len(distinct) == 1:
        return GroupBadge.single(distinct.pop())
    return GroupBadge.mixed()


def build_option_value_index(
    variants: Iterable[ProductVariant], option_name: str
) -> Dict[str, List[str]]:
    """option value -> variant ids, the lookup a storefront performs"""
    index: Dict[str, List[str]] = {}
    for variant in variants:
        value = variant.option_value(option_name)
        if value is not None:
            index.setdefault(value, []).append(variant.id)
    return index


def find_badge_for_option_value(
    option_value: str,
    index: Mapping[str, Sequence[str]],
    badges_by_variant: Mapping[str, str],
) -> Optional[str]:
    """Badge of the first variant carrying `option_value` that has one."""
    for variant_id in index.get(option_value, ()):
        badge_type = badges_by_variant.get(variant_id)
        if badge_type:
            return badge_type
    return None


@dataclass(frozen=True)
class BadgeRow:
    product_id: str
    product_title: str
    option_value: str
    variant_ids: List[str]
    badge: GroupBadge

    def to_dict(self) -> Dict[str, object]:
        return {
            "productId": self.product_id,
            "productTitle": self.product_title,
            "optionValue": self.option_value,
            "variantIds": list(self.variant_ids),
            "variantCount": len(self.variant_ids),
            "badgeType": self.badge.display,
            "mixed": self.badge.kind is GroupBadgeKind.MIXED,
        }


def build_badge_rows(
    products: Iterable[Product],
    option_name: str,
    badges_by_variant: Mapping[str, str],
) -> List[BadgeRow]:
    """Admin listing rows, sorted by product title (case-insensitive) then value."""
    rows = [
        BadgeRow(
            product_id=product.id,
            product_title=product.title,
            option_value=group.option_value,
            variant_ids=group.variant_ids,
            badge=resolve_group_badge(group.variant_ids, badges_by_variant),
        )
        for product in products
        for group in group_variants_by_option(product, option_name)
    ]
    rows.sort(key=lambda row: (row.product_title.casefold(), row.option_value))
    return rows


def paginate(items: Sequence, page: int, limit: int) -> Tuple[list, int, int]:
    """(page items, total items, total pages); pages start at 1"""
    total = len(items)
    total_pages = (total + limit - 1) // limit if limit > 0 else 0
    start = (page - 1) * limit
    return list(items[start : start + limit]), total, total_pages
