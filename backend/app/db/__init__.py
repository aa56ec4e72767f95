"""
Database module: engine lifecycle, collection registry and document store.
"""

from app.db.collections import (
    CollectionConfig,
    Plugin,
    StoreConfig,
    build_store_config,
    default_store_config,
)
from app.db.init_db import check_connection, init_database
from app.db.postgres import close_db, get_db_session, init_db
from app.db.sql_store import SQLAlchemyDocumentStore
from app.db.store import CountResult, DocumentStore, Record
from app.db.transaction import store_transaction

__all__ = [
    # Engine lifecycle
    "init_db",
    "close_db",
    "get_db_session",
    "init_database",
    "check_connection",
    # Collections
    "CollectionConfig",
    "Plugin",
    "StoreConfig",
    "build_store_config",
    "default_store_config",
    # Store
    "CountResult",
    "DocumentStore",
    "Record",
    "SQLAlchemyDocumentStore",
    "store_transaction",
]
