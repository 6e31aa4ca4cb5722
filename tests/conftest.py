"""Pytest configuration helpers for the user service test suite."""

import os
import sys
from pathlib import Path

import pytest
import pytest_asyncio

# Settings are read once (lru_cache), so the environment must be in place
# before anything imports config.
os.environ["FASTAPI_ENV"] = "testing"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ.setdefault("JWT_SECRET", "test-secret-key-with-at-least-32-characters")

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from core.database.engine import create_tables  # noqa: E402
from core.database.gateway import DataStoreGateway  # noqa: E402


@pytest_asyncio.fixture()
async def db_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture()
async def gateway(db_engine):
    return DataStoreGateway(db_engine)


@pytest.fixture()
def client():
    """TestClient running the app lifespan, so each test gets a fresh in-memory database."""
    from fastapi.testclient import TestClient
    from main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def ana_payload():
    return {
        "name": "Ana",
        "email": "ana@x.com",
        "password": "secret1",
        "cpf": "52998224725",
        "state": "SP",
        "city": "SP",
        "neighborhood": "Centro",
        "street": "Rua A",
        "number": "10",
        "phone": "11999990000",
        "birthdate": "1990-01-01",
    }
