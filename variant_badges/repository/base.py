"""
Shared plumbing for repositories

Repositories receive the application's Database. Every method accepts an
optional session so several repositories can take part in one transaction;
without one, the repository opens and commits its own.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from variant_badges.core.database import Database
from variant_badges.core.exceptions import DatabaseError


class BaseRepository:
    def __init__(self, database: Database):
        self.database = database

    @asynccontextmanager
    async def _session(
        self, session: Optional[AsyncSession] = None
    ) -> AsyncGenerator[AsyncSession, None]:
        if session is not None:
            yield session
            return
        async with self.database.transaction_context() as own_session:
            yield own_session


def dialect_insert(session: AsyncSession, table):
    """
    Return an INSERT construct supporting ON CONFLICT for the session's dialect.
    """
    dialect_name = session.bind.dialect.name
    if dialect_name == "postgresql":
        from sqlalchemy.dialects.postgresql import insert
    elif dialect_name == "sqlite":
        from sqlalchemy.dialects.sqlite import insert
    else:
        raise DatabaseError(
            f"Upserts are not supported on {dialect_name}",
            details={"dialect": dialect_name},
        )
    return insert(table)
