"""
Database engine, session factory and document store lifecycle.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from app.core.config import Settings, get_settings
from app.core.logging import get_logger
from app.db.collections import StoreConfig, build_store_config
from app.db.sql_store import SQLAlchemyDocumentStore

logger = get_logger(__name__)

# Global engine and session factory (initialized on startup)
_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def get_engine() -> AsyncEngine:
    """
    Get the database engine instance.

    Raises:
        RuntimeError: If engine is not initialized
    """
    if _engine is None:
        raise RuntimeError("Database engine not initialized. Call init_db() first.")
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """
    Get the session factory instance.

    Raises:
        RuntimeError: If session factory is not initialized
    """
    if _session_factory is None:
        raise RuntimeError("Session factory not initialized. Call init_db() first.")
    return _session_factory


def create_engine_from_settings(settings: Settings) -> AsyncEngine:
    """Create the async engine, with pooling options only where the dialect pools."""
    database = settings.database

    if database.is_sqlite:
        return create_async_engine(database.async_url, echo=settings.debug)

    return create_async_engine(
        database.async_url,
        pool_size=database.pool_size,
        max_overflow=database.max_overflow,
        pool_timeout=database.pool_timeout,
        pool_recycle=database.pool_recycle,
        echo=settings.debug,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def init_db(
    settings: Optional[Settings] = None,
    store_config: Optional[StoreConfig] = None,
) -> SQLAlchemyDocumentStore:
    """Initialize engine, session factory and the document store."""
    global _engine, _session_factory

    settings = settings or get_settings()

    logger.info(
        "Initializing database connection",
        url=settings.database.async_url.split("@")[-1]
    )

    _engine = create_engine_from_settings(settings)
    _session_factory = create_session_factory(_engine)
    store = SQLAlchemyDocumentStore(
        _session_factory,
        store_config or build_store_config(),
    )

    logger.info(
        "Database connection initialized",
        collections=store.config.slugs
    )
    return store


async def close_db() -> None:
    """Close database connections."""
    global _engine, _session_factory

    if _engine is not None:
        logger.info("Closing database connection")
        await _engine.dispose()
        _engine = None
        _session_factory = None


@asynccontextmanager
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Get a database session as an async context manager.

    Example:
        async with get_db_session() as session:
            result = await session.execute(query)
    """
    session_factory = get_session_factory()
    session = session_factory()

    try:
        yield session
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    finally:
        await session.close()
