"""
Database engine and session management.

Provides async SQLAlchemy engine and session factory for FastAPI, plus the
first-use schema bootstrap.
"""

import logging
from collections.abc import AsyncGenerator

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from cardsift.config import settings
from cardsift.models.card import OperationResult
from cardsift.models.db import Base, CardDB

logger = logging.getLogger(__name__)

# Create async engine
engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
    pool_pre_ping=True,
)

# Session factory
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency that provides a database session.

    Usage in FastAPI:
        @app.get("/items")
        async def get_items(session: AsyncSession = Depends(get_session)):
            ...
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except SQLAlchemyError:
            await session.rollback()
            raise


def get_engine() -> AsyncEngine:
    """Dependency that provides the process-wide engine."""
    return engine


async def _probe_cards_table(db_engine: AsyncEngine) -> None:
    async with db_engine.connect() as conn:
        await conn.execute(select(CardDB.id).limit(1))


async def initialize_database(db_engine: AsyncEngine) -> OperationResult:
    """
    Make sure the cards table exists.

    Probes with a trivial read. If that fails the schema is created and the
    probe repeated.
    """
    try:
        await _probe_cards_table(db_engine)
        return OperationResult(success=True, message="Database already initialized")
    except SQLAlchemyError:
        logger.info("Database not initialized, creating schema...")

    try:
        async with db_engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        await _probe_cards_table(db_engine)
    except SQLAlchemyError as e:
        logger.error("Failed to initialize database: %s", e)
        return OperationResult(success=False, message=f"Failed to initialize database: {e}")

    logger.info("Database schema created")
    return OperationResult(success=True, message="Database initialized successfully")


async def init_db() -> None:
    """
    Initialize database tables.

    Should be called once at application startup.
    """
    result = await initialize_database(engine)
    if not result.success:
        raise RuntimeError(result.message)


async def drop_db() -> None:
    """
    Drop all database tables.

    WARNING: Destroys all data. Use only for testing.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
