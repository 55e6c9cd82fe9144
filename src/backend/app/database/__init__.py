"""
Database package for the card catalog.

Provides the async PostgreSQL engine manager and the read-only CatalogStore
used by universal search.
"""

from .database import (
    Base,
    CatalogDatabaseManager,
    catalog_db_manager,
    init_catalog_db,
    close_catalog_db
)
from .catalog_store import CatalogStore, SqlCatalogStore

__all__ = [
    "Base",
    "CatalogDatabaseManager",
    "catalog_db_manager",
    "init_catalog_db",
    "close_catalog_db",
    "CatalogStore",
    "SqlCatalogStore"
]
