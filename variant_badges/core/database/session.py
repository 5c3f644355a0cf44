"""
SQLAlchemy async session management for Variant Badges

The Database object owns the engine and session factory. One instance is
built at startup, stored on the application state and handed to the
repositories; nothing reaches for a module-level connection pool.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from variant_badges.core.config.settings import DatabaseSettings
from variant_badges.core.exceptions import DatabaseConnectionError
from variant_badges.core.logging import get_logger
from .engine import create_engine
from .models.base import Base

logger = get_logger(__name__)


class Database:
    """Engine plus session factory, scoped to the process lifetime"""

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self.session_factory = async_sessionmaker(
            bind=engine,
            class_=AsyncSession,
            expire_on_commit=False,  # Keep objects accessible after commit
            autoflush=True,
        )

    @classmethod
    def from_settings(cls, database_settings: DatabaseSettings) -> "Database":
        return cls(
            create_engine(
                database_settings.DATABASE_URL,
                echo=database_settings.SQLALCHEMY_ECHO,
                echo_pool=database_settings.SQLALCHEMY_ECHO_POOL,
                query_timeout=database_settings.DATABASE_QUERY_TIMEOUT,
            )
        )

    @asynccontextmanager
    async def transaction_context(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Context manager for database transactions with automatic rollback on error.

        Usage:
            async with database.transaction_context() as session:
                # committed on exit, rolled back on exception
                await session.execute(statement)
        """
        session = self.session_factory()
        try:
            yield session
            await session.commit()
        except Exception as e:
            logger.error(
                "Database transaction error",
                error_type=type(e).__name__,
                error=str(e),
            )
            await session.rollback()
            raise
        finally:
            await session.close()

    async def create_tables(self) -> None:
        """Create all tables from the ORM metadata"""
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except (OperationalError, InterfaceError, OSError) as e:
            raise DatabaseConnectionError(
                "Could not connect to the database",
                details={"url": self.engine.url.render_as_string(hide_password=True)},
                cause=e,
            ) from e

    async def check_health(self) -> bool:
        """Check if the database answers a trivial query"""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning(f"Database health check failed: {e}")
            return False

    async def close(self) -> None:
        """Dispose the engine and its connections"""
        await self.engine.dispose()
        logger.info("Database engine disposed")


def get_database(request: Request) -> Database:
    """FastAPI dependency returning the application's Database"""
    database: Optional[Database] = getattr(request.app.state, "database", None)
    if database is None:
        raise RuntimeError("Database has not been initialized")
    return database
