"""
Test fixtures for gym-tracker.

Service tests get a fresh SQLite file per test; HTTP tests get a TestClient
whose database dependency points at its own file.
"""
import os
import tempfile
from pathlib import Path

# The app builds its engine at import time; keep it away from the working directory
_TMP = Path(tempfile.mkdtemp(prefix="gym_tracker_tests_"))
os.environ.setdefault("DATABASE_URL", f"sqlite+aiosqlite:///{_TMP / 'app.db'}")

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import NullPool

from gym_tracker.db.base import Base
from gym_tracker.db.session import build_engine, build_sessionmaker, get_db
from gym_tracker.main import app


# ---------------------------------------------------------------------------
# Service-level database
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def session_factory(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'services.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield build_sessionmaker(engine)
    await engine.dispose()


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


# ---------------------------------------------------------------------------
# HTTP client
# ---------------------------------------------------------------------------


@pytest.fixture
def client(tmp_path) -> TestClient:
    """TestClient with its own database; lifespan runs so the session registry exists."""
    db_path = tmp_path / "api.db"
    sync_engine = create_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(sync_engine)
    sync_engine.dispose()

    # NullPool: TestClient drives the app from its own event loop
    factory = build_sessionmaker(create_async_engine(f"sqlite+aiosqlite:///{db_path}", poolclass=NullPool))

    async def override_get_db():
        async with factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def registered_client(client) -> TestClient:
    """Client already logged in as alice/secret-pw."""
    r = client.post("/register", data={"user_name": "alice", "password": "secret-pw"})
    assert r.status_code == 201
    return client


