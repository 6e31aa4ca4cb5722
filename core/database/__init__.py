"""
Async database module for the FastAPI application.
"""

from .engine import Base, get_engine, init_db, close_db, create_tables, health_check
from .gateway import DataStoreGateway, QueryResult

__all__ = [
    "Base",
    "get_engine",
    "init_db",
    "close_db",
    "create_tables",
    "health_check",
    "DataStoreGateway",
    "QueryResult",
]
