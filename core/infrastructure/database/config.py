"""
Database configuration.

Manages database connection settings and engine creation.
"""
from typing import Optional
from pydantic_settings import BaseSettings
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
import logging


logger = logging.getLogger(__name__)


class DatabaseSettings(BaseSettings):
    """
    Database configuration settings.

    Loaded from DB_* environment variables or .env file.
    """

    # Database URL (asyncpg for PostgreSQL, aiosqlite for local runs)
    database_url: str = "sqlite+aiosqlite:///./fulfillment.db"

    # Connection pool settings (ignored for sqlite)
    pool_size: int = 10
    max_overflow: int = 20
    pool_timeout: int = 30
    pool_recycle: int = 3600  # 1 hour

    # Echo SQL (for debugging)
    echo_sql: bool = False

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "DB_",
        "extra": "ignore",
    }


# =============================================================================
# ENGINE CREATION
# =============================================================================

def create_engine(settings: Optional[DatabaseSettings] = None) -> AsyncEngine:
    """
    Create async SQLAlchemy engine.

    Args:
        settings: Database settings (read from environment when omitted)

    Returns:
        Configured async engine
    """
    settings = settings or DatabaseSettings()
    url = make_url(settings.database_url)
    logger.info(f"Creating database engine: {url.render_as_string(hide_password=True)}")

    if url.get_backend_name() == "sqlite":
        return create_async_engine(url, echo=settings.echo_sql)

    return create_async_engine(
        url,
        echo=settings.echo_sql,
        pool_size=settings.pool_size,
        max_overflow=settings.max_overflow,
        pool_timeout=settings.pool_timeout,
        pool_recycle=settings.pool_recycle,
        pool_pre_ping=True,  # Test connections before using
    )


# Global engine instance
engine: Optional[AsyncEngine] = None


def get_engine() -> AsyncEngine:
    """
    Get or create global engine instance.

    Returns:
        Global async engine
    """
    global engine

    if engine is None:
        engine = create_engine()

    return engine


# =============================================================================
# SESSION FACTORY
# =============================================================================

def create_session_factory(bind: Optional[AsyncEngine] = None) -> async_sessionmaker:
    """
    Build the session factory handed to units of work.

    Args:
        bind: Engine to bind (global engine when omitted)
    """
    return async_sessionmaker(
        bind=bind or get_engine(),
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


# =============================================================================
# DATABASE INITIALIZATION
# =============================================================================

async def init_database(bind: Optional[AsyncEngine] = None) -> None:
    """
    Initialize database.

    Creates all tables if they don't exist.
    """
    from core.data.models import Base

    logger.info("Initializing database...")

    async with (bind or get_engine()).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Database initialized successfully")


async def close_database() -> None:
    """Close database connections."""
    global engine

    if engine:
        logger.info("Closing database connections...")
        await engine.dispose()
        engine = None
        logger.info("Database connections closed")
