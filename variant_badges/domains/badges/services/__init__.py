"""
Badge domain services
"""

from .variant_grouping import (
    OptionGroup,
    GroupBadge,
    GroupBadgeKind,
    BadgeRow,
    group_variants_by_option,
    find_option_group,
    resolve_group_badge,
    build_option_value_index,
    find_badge_for_option_value,
    build_badge_rows,
    paginate,
)
from .settings_service import SettingsService, ShopSettings, SettingsUpdateResult
from .badge_service import BadgeService, AssignmentResult

__all__ = [
    "OptionGroup",
    "GroupBadge",
    "GroupBadgeKind",
    "BadgeRow",
    "group_variants_by_option",
    "find_option_group",
    "resolve_group_badge",
    "build_option_value_index",
    "find_badge_for_option_value",
    "build_badge_rows",
    "paginate",
    "SettingsService",
    "ShopSettings",
    "SettingsUpdateResult",
    "BadgeService",
    "AssignmentResult",
]
