"""
Async Database Engine for FastAPI

This module provides async database connectivity using SQLAlchemy 2.0+
for SQLite (aiosqlite) and PostgreSQL (asyncpg).
"""

import logging
from typing import Optional
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

from config import get_settings

logger = logging.getLogger(__name__)

# Global database engine
async_engine: Optional[AsyncEngine] = None

# Base class for SQLAlchemy models
Base = declarative_base()


async def init_db() -> None:
    """
    Initialize async database connections.
    Sets up the global engine.
    """
    global async_engine

    settings = get_settings()

    if settings.DATABASE_URL.startswith("sqlite"):
        async_engine = create_async_engine(
            settings.DATABASE_URL,
            echo=settings.DB_ECHO,
            poolclass=StaticPool,
            connect_args={
                "check_same_thread": False,
                "timeout": 30,
            },
        )
    else:
        async_engine = create_async_engine(
            settings.DATABASE_URL,
            echo=settings.DB_ECHO,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_pre_ping=True,
            pool_recycle=3600,  # Recycle connections after 1 hour
        )

    logger.info(f"✅ Database engine initialized: {settings.DATABASE_URL.split('://')[0]}")


async def close_db() -> None:
    """Close database connections and cleanup."""
    global async_engine

    if async_engine:
        await async_engine.dispose()
        logger.info("✅ Async database connections closed")

    async_engine = None


def get_engine() -> AsyncEngine:
    """Get the global async engine instance."""
    if not async_engine:
        raise RuntimeError("Database not initialized. Call init_db() first.")
    return async_engine


async def create_tables(engine: Optional[AsyncEngine] = None) -> None:
    """Create database tables from SQLAlchemy models."""
    # Registers the models on Base.metadata
    from . import models  # noqa: F401

    engine = engine or get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("✅ Database tables created/updated")


async def health_check() -> bool:
    """
    Check database connectivity for health checks.

    Returns:
        bool: True if database is accessible, False otherwise
    """
    if not async_engine:
        return False

    try:
        async with async_engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return False
