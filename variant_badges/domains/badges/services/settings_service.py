"""
Per-shop settings

Changing the selected option invalidates every stored badge, since badges
are keyed to values of the old option.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from variant_badges.core.database import Database
from variant_badges.core.logging import get_logger
from variant_badges.models.settings_models import SettingsPatch
from variant_badges.repository import BadgeAssignmentRepository, SettingsRepository

logger = get_logger(__name__)


@dataclass(frozen=True)
class ShopSettings:
    selected_option: Optional[str] = None
    badge_display_enabled: bool = True
    auto_sale_enabled: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "selectedOption": self.selected_option,
            "badgeDisplayEnabled": self.badge_display_enabled,
            "autoSaleEnabled": self.auto_sale_enabled,
        }


@dataclass(frozen=True)
class SettingsUpdateResult:
    settings: ShopSettings
    option_changed: bool
    badges_removed: int


def _from_row(row) -> ShopSettings:
    if row is None:
        return ShopSettings()
    return ShopSettings(
        selected_option=row.selected_option,
        badge_display_enabled=row.badge_display_enabled,
        auto_sale_enabled=row.auto_sale_enabled,
    )


class SettingsService:
    def __init__(
        self,
        database: Database,
        settings_repository: SettingsRepository,
        badges: BadgeAssignmentRepository,
    ):
        self.database = database
        self.settings_repository = settings_repository
        self.badges = badges

    async def get(self, shop: str) -> ShopSettings:
        """Stored settings, or the defaults when the shop has none"""
        return _from_row(await self.settings_repository.get(shop))

    async def update(self, shop: str, patch: SettingsPatch) -> SettingsUpdateResult:
        changes = patch.changes()

        async with self.database.transaction_context() as session:
            current = _from_row(await self.settings_repository.get(shop, session=session))
            option_changed = (
                "selected_option" in changes
                and changes["selected_option"] != current.selected_option
            )

            if not changes:
                return SettingsUpdateResult(current, False, 0)

            row = await self.settings_repository.save(shop, changes, session=session)
            badges_removed = 0
            if option_changed:
                badges_removed = await self.badges.delete_for_shop(shop, session=session)

        if option_changed:
            logger.info(
                "Selected option changed, badges cleared",
                shop=shop,
                previous_option=current.selected_option,
                selected_option=changes["selected_option"],
                badges_removed=badges_removed,
            )
        return SettingsUpdateResult(_from_row(row), option_changed, badges_removed)
