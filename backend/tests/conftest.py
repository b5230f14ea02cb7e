"""
HealthTrack Backend — Test Configuration (conftest.py)
=======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: Mock async session (service unit tests, no DB)
    ├── database: Throwaway SQLite database with all tables created
    ├── test_client: HTTPX AsyncClient bound to an app using `database`
    └── register_and_login: Helper returning (user_id, auth headers)
"""

import os
import tempfile

# Override settings for testing BEFORE any app imports: the settings
# singleton reads the environment once, at import time
os.environ["DATABASE_URL"] = (
    "sqlite+aiosqlite:///" + os.path.join(tempfile.mkdtemp(prefix="healthtrack_test_"), "app.db")
)
os.environ["JWT_SECRET"] = "test-secret-not-for-production-0123456789abcdef"
os.environ["BCRYPT_ROUNDS"] = "4"  # Minimum cost keeps the suite fast
os.environ["LOG_LEVEL"] = "WARNING"

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from app.database import Database


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = "Jane Doe"
        mock_db_session.execute.return_value = mock_result
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest_asyncio.fixture
async def database(tmp_path):
    """A fresh SQLite database file per test, schema created from the ORM models."""
    db = Database(url=f"sqlite+aiosqlite:///{tmp_path / 'healthtrack.db'}")
    await db.create_all()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def test_client(database):
    """
    Async HTTP client talking to a fresh app through ASGITransport.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from app.main import create_app

    app = create_app(database=database)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def register_and_login(test_client):
    """
    Returns a coroutine that registers a user, logs in, and yields
    (user_id, {"Authorization": "Bearer <token>"}).
    """

    async def _register_and_login(
        name: str = "Jane Doe",
        email: str = "jane@example.com",
        password: str = "s3cret-pass",
    ):
        registered = await test_client.post(
            "/register", json={"name": name, "email": email, "password": password}
        )
        assert registered.status_code == 200, registered.text
        logged_in = await test_client.post("/login", json={"email": email, "password": password})
        assert logged_in.status_code == 200, logged_in.text
        token = logged_in.json()["token"]
        return registered.json()["userId"], {"Authorization": f"Bearer {token}"}

    return _register_and_login
