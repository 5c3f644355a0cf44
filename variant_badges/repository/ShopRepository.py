from typing import Optional

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from variant_badges.core.database.models import Shop
from variant_badges.shared.helpers import now_utc
from .base import BaseRepository, dialect_insert


class ShopRepository(BaseRepository):
    async def get_by_domain(
        self, shop_domain: str, session: Optional[AsyncSession] = None
    ) -> Optional[Shop]:
        """
        Fetches a single shop by its domain.

        Args:
            shop_domain: The myshopify domain of the shop to retrieve.

        Returns:
            A SQLAlchemy 'Shop' model instance if found, otherwise None.
        """
        async with self._session(session) as s:
            statement = select(Shop).where(Shop.shop_domain == shop_domain)
            result = await s.execute(statement)
            return result.scalar_one_or_none()

    async def get_active_by_domain(self, shop_domain: str) -> Optional[Shop]:
        async with self._session() as s:
            statement = select(Shop).where(
                (Shop.shop_domain == shop_domain) & (Shop.is_active == True)
            )
            result = await s.execute(statement)
            return result.scalar_one_or_none()

    async def upsert(
        self,
        shop_domain: str,
        access_token: str,
        scope: Optional[str] = None,
        session: Optional[AsyncSession] = None,
    ) -> Shop:
        """
        Create the shop or replace its access token on reinstall.
        """
        async with self._session(session) as s:
            statement = dialect_insert(s, Shop.__table__).values(
                shop_domain=shop_domain,
                access_token=access_token,
                scope=scope,
                is_active=True,
            )
            statement = statement.on_conflict_do_update(
                index_elements=["shop_domain"],
                set_={
                    "access_token": statement.excluded.access_token,
                    "scope": statement.excluded.scope,
                    "is_active": True,
                    "updated_at": now_utc(),
                },
            )
            await s.execute(statement)
            result = await s.execute(select(Shop).where(Shop.shop_domain == shop_domain))
            return result.scalar_one()

    async def delete_by_domain(
        self, shop_domain: str, session: Optional[AsyncSession] = None
    ) -> int:
        async with self._session(session) as s:
            result = await s.execute(delete(Shop).where(Shop.shop_domain == shop_domain))
            return result.rowcount or 0
