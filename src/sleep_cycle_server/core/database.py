"""Database initialization and session management."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from sleep_cycle_server.core.config import settings
from sleep_cycle_server.models import Base

logger = logging.getLogger(__name__)


def create_engine() -> AsyncEngine:
    """Create the database engine.

    SQLite runs on a single shared connection so that in-memory databases
    survive across sessions. Other backends get a connection pool.

    Returns:
        Async SQLAlchemy engine
    """
    if settings.is_sqlite():
        return create_async_engine(
            settings.database_url,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    return create_async_engine(
        settings.database_url,
        echo=False,
        pool_size=10,
        max_overflow=20,
        pool_recycle=300,  # Recycle connections every 5 minutes
    )


# Global engine and session maker
engine = create_engine()
async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def init_database() -> None:
    """Create any missing tables.

    The schema is a single table, so it is created directly from the
    model metadata rather than through migrations.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info(f"Database initialized: {engine.url.render_as_string(hide_password=True)}")


@asynccontextmanager
async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session.

    Usage:
        async with get_session() as session:
            repository = SQLAlchemyProfileRepository(session)
    """
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def close_database() -> None:
    """Close database connection pool."""
    await engine.dispose()
