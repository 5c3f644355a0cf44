"""
SQLAlchemy async engine configuration for Variant Badges
"""

from sqlalchemy import event
from sqlalchemy.engine.url import make_url
from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine
from sqlalchemy.pool import NullPool

from variant_badges.core.logging import get_logger

logger = get_logger(__name__)


def get_database_url(database_url: str) -> str:
    """Get the database URL with proper async driver"""
    if database_url.startswith("postgres://"):
        database_url = database_url.replace("postgres://", "postgresql+asyncpg://", 1)
    elif database_url.startswith("postgresql://"):
        database_url = database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
    elif database_url.startswith("sqlite://"):
        database_url = database_url.replace("sqlite://", "sqlite+aiosqlite://", 1)

    return database_url


def create_engine(
    database_url: str,
    echo: bool = False,
    echo_pool: bool = False,
    query_timeout: int = 30,
) -> AsyncEngine:
    """Create SQLAlchemy async engine for the configured database"""

    database_url = get_database_url(database_url)
    is_sqlite = database_url.startswith("sqlite")

    engine_kwargs = {
        "url": database_url,
        "echo": echo,
        "echo_pool": echo_pool,
    }
    if is_sqlite:
        engine_kwargs["poolclass"] = NullPool
    else:
        engine_kwargs["pool_pre_ping"] = True
        engine_kwargs["connect_args"] = {
            "command_timeout": query_timeout,
            "server_settings": {"application_name": "variant-badges"},
        }

    engine = create_async_engine(**engine_kwargs)

    if is_sqlite:

        @event.listens_for(engine.sync_engine, "connect")
        def set_sqlite_pragma(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA journal_mode=WAL")
            cursor.execute("PRAGMA synchronous=NORMAL")
            cursor.close()

    logger.info(
        "Database engine created",
        url=make_url(database_url).render_as_string(hide_password=True),
    )
    return engine
