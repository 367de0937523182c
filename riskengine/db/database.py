"""Async SQLAlchemy engine and session factory for the SQL collaborators."""

import structlog
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from riskengine.config import Settings, settings

logger = structlog.get_logger()


def build_engine(config: Settings) -> AsyncEngine:
    return create_async_engine(
        config.database_url,
        echo=config.debug,
        pool_pre_ping=True,
        pool_size=config.db_pool_size,
        max_overflow=config.db_max_overflow,
    )


engine = build_engine(settings)

# expire_on_commit=False so rows stay readable after the repository's session closes
async_session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def init_db() -> None:
    """Create the engine's tables if missing. Schema changes go through migrations."""
    from riskengine.db.models import Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("database_initialized", tables=sorted(Base.metadata.tables))


async def check_db() -> bool:
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except Exception:
        logger.warning("database_check_failed", exc_info=True)
        return False


async def dispose_db() -> None:
    """Close pooled connections before the event loop shuts down."""
    await engine.dispose()
