"""
Dependency Injection for FastAPI

Common dependencies used across the application: the data store gateway
and configuration.
"""

from config import get_settings, Settings
from core.database.gateway import DataStoreGateway


def get_gateway() -> DataStoreGateway:
    """
    Data store dependency.
    The gateway opens one connection per statement from the shared engine pool.
    """
    return DataStoreGateway()


def get_config() -> Settings:
    """Configuration dependency."""
    return get_settings()
