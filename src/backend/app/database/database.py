"""
Database configuration for the card catalog.

PostgreSQL (asyncpg) holds the read-only catalog tables queried by universal
search. The engine is owned by CatalogDatabaseManager; search code receives an
injected CatalogStore and never touches this module's globals.
"""

import logging
import os
from typing import Optional

from dotenv import load_dotenv
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import DeclarativeBase

logger = logging.getLogger(__name__)

# Manager settings are read at import time
load_dotenv()


class Base(DeclarativeBase):
    """SQLAlchemy declarative base for catalog models."""
    pass


class CatalogDatabaseManager:
    """
    PostgreSQL manager for the catalog connection pool.

    Features:
    - DATABASE_URL or POSTGRES_* component configuration
    - Async connection pooling (size/overflow/pre-ping)
    - Connectivity check on startup
    """

    def __init__(self):
        """Initialize manager with .env configuration."""
        self.database_url = os.getenv("DATABASE_URL")
        self.postgres_host = os.getenv("POSTGRES_HOST", "localhost")
        self.postgres_port = int(os.getenv("POSTGRES_PORT", "5432"))
        self.postgres_db = os.getenv("POSTGRES_DB", "cardcatalog")
        self.postgres_user = os.getenv("POSTGRES_USER", "postgres")
        self.postgres_password = os.getenv("POSTGRES_PASSWORD", "postgres")
        self.pool_size = int(os.getenv("DB_POOL_SIZE", "10"))
        self.max_overflow = int(os.getenv("DB_MAX_OVERFLOW", "20"))
        self.pool_timeout = int(os.getenv("DB_POOL_TIMEOUT", "10"))

        self.engine: Optional[AsyncEngine] = None
        self._initialized = False

    def build_url(self) -> str:
        """Resolve the async database URL."""
        if self.database_url:
            return self.database_url

        return (
            f"postgresql+asyncpg://{self.postgres_user}:"
            f"{self.postgres_password}@{self.postgres_host}:"
            f"{self.postgres_port}/{self.postgres_db}"
        )

    def init_db(self):
        """Create the async engine (lazy: no connection is opened here)."""
        if self._initialized:
            return

        self.engine = create_async_engine(
            self.build_url(),
            echo=False,  # Set to True for SQL debugging
            pool_size=self.pool_size,
            max_overflow=self.max_overflow,
            pool_timeout=self.pool_timeout,
            pool_pre_ping=True,
        )

        self._initialized = True
        logger.info(f"Catalog database engine created: {self.postgres_host}:{self.postgres_port}/{self.postgres_db}")

    async def verify_connectivity(self) -> bool:
        """
        Run a trivial query against the catalog.

        Returns:
            True if the database answered, False otherwise
        """
        if not self.engine:
            return False

        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"Catalog database connectivity check failed: {e}")
            return False

    async def close(self):
        """Dispose engine and pooled connections."""
        if self.engine:
            await self.engine.dispose()
            logger.info("Catalog database engine disposed")
        self.engine = None
        self._initialized = False


# Global manager instance
catalog_db_manager = CatalogDatabaseManager()


def init_catalog_db() -> AsyncEngine:
    """Initialize catalog engine and return it."""
    catalog_db_manager.init_db()
    return catalog_db_manager.engine


async def close_catalog_db():
    """Close catalog engine."""
    await catalog_db_manager.close()
