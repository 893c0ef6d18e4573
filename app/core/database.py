"""Async SQLAlchemy 2.0 database handle and session dependency."""

from collections.abc import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from app.core.config import Settings, get_settings
from app.core.logging import get_logger

logger = get_logger(__name__)


class Base(DeclarativeBase):
    """SQLAlchemy declarative base for all models."""

    pass


class Database:
    """Owns the async engine and session factory for one application instance.

    Built in the application lifespan and disposed on shutdown; request
    handlers receive sessions through ``get_db``.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        """Create the engine and session maker.

        Args:
            settings: Settings to read the DSN from (defaults to cached settings).
        """
        settings = settings or get_settings()
        self.engine: AsyncEngine = create_async_engine(
            settings.database_url,
            echo=settings.debug,
            pool_pre_ping=True,
        )
        self.session_maker: async_sessionmaker[AsyncSession] = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def create_all(self) -> None:
        """Create all tables known to ``Base.metadata`` (idempotent)."""
        # Model modules must be imported so their tables are registered.
        import app.features.data_platform.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("database.tables_created")

    async def dispose(self) -> None:
        """Close all pooled connections."""
        await self.engine.dispose()
        logger.info("database.disposed")


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Dependency for getting async database sessions.

    Args:
        request: Current request; the handle lives on ``app.state.database``.

    Yields:
        AsyncSession: Database session that auto-commits on success.
    """
    database: Database = request.app.state.database
    async with database.session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
