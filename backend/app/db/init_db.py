"""
Database initialization and startup utilities.
"""

from sqlalchemy import text

from app.core.logging import get_logger
from app.db.postgres import get_db_session, get_engine
from app.models.domain import Base

logger = get_logger(__name__)


async def create_tables() -> None:
    """Create all tables registered on the declarative base."""
    engine = get_engine()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Database tables created", tables=sorted(Base.metadata.tables))


async def check_connection() -> bool:
    """Return True if the database answers a trivial query."""
    try:
        async with get_db_session() as session:
            await session.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.warning("Database check failed", error=str(e))
        return False


async def init_database() -> None:
    """
    Initialize the database schema.

    Production schemas are managed by Alembic; this is for local runs and tests.
    """
    logger.info("Initializing database schema")

    await create_tables()

    logger.info("Database initialization complete")
