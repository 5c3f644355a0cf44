"""
App Settings Repository

One settings row per shop.
"""

from typing import Any, Dict, Optional

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from variant_badges.core.database.models import AppSettings
from variant_badges.shared.helpers import now_utc
from .base import BaseRepository, dialect_insert


class SettingsRepository(BaseRepository):
    """Repository for AppSettings operations."""

    async def get(
        self, shop: str, session: Optional[AsyncSession] = None
    ) -> Optional[AppSettings]:
        async with self._session(session) as s:
            result = await s.execute(select(AppSettings).where(AppSettings.shop == shop))
            return result.scalar_one_or_none()

    async def save(
        self,
        shop: str,
        values: Dict[str, Any],
        session: Optional[AsyncSession] = None,
    ) -> AppSettings:
        """Upsert the shop's settings with the given column values."""
        async with self._session(session) as s:
            statement = dialect_insert(s, AppSettings.__table__).values(
                shop=shop, **values
            )
            statement = statement.on_conflict_do_update(
                index_elements=["shop"],
                set_={**values, "updated_at": now_utc()},
            )
            await s.execute(statement)
            result = await s.execute(select(AppSettings).where(AppSettings.shop == shop))
            settings_row = result.scalar_one()
            # A row loaded earlier in this session would still hold stale values
            await s.refresh(settings_row)
            return settings_row

    async def delete_for_shop(
        self, shop: str, session: Optional[AsyncSession] = None
    ) -> int:
        async with self._session(session) as s:
            result = await s.execute(delete(AppSettings).where(AppSettings.shop == shop))
            return result.rowcount or 0
