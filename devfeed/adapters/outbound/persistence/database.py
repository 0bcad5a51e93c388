# devfeed/adapters/outbound/persistence/database.py (async version)

import logging
from typing import AsyncGenerator
from contextlib import asynccontextmanager
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool

from devfeed.adapters.configuration.config import settings
from devfeed.adapters.outbound.persistence.models.base_model import Base

# Configure logger
logger = logging.getLogger(__name__)

database_url = str(settings.DATABASE_URL)
logger.info(f"Connecting to database: {database_url.split('@')[-1]}")


def _engine_options(url: str) -> dict:
    """Pool settings for a server database, a single shared connection for SQLite."""
    if url.startswith("sqlite"):
        return {
            "connect_args": {"check_same_thread": False},
            "poolclass": StaticPool,
        }
    return {
        "pool_size": 20,
        "max_overflow": 10,
        "pool_timeout": 30,
        "pool_recycle": 1800,
        "pool_pre_ping": True,
    }


try:
    # Create async engine
    engine = create_async_engine(database_url, echo=False, **_engine_options(database_url))

    # Create async session factory
    AsyncSessionLocal = async_sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
        expire_on_commit=False,
    )

    logger.info("Async database connection configured successfully")

except SQLAlchemyError as e:
    logger.error(f"Error connecting to database: {str(e)}")
    raise


async def create_tables() -> None:
    """Create every table registered on Base that does not exist yet."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables checked")


@asynccontextmanager
async def get_db_context() -> AsyncGenerator[AsyncSession, None]:
    """
    Provides an async context for database operations,
    ensuring the session is closed at the end.

    Example:
        ```python
        async with get_db_context() as db:
            user = await user_repository.get_by_email(db, "a@b.c")
        ```
    """
    session = AsyncSessionLocal()
    try:
        yield session
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    finally:
        await session.close()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency injection for use with FastAPI."""
    async with get_db_context() as session:
        yield session
