"""
Q&A Backend: Test Configuration (conftest.py)
==============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session: Mock database session (no real DB needed)
    ├── database:        Database handle on a throwaway SQLite file, schema created
    ├── test_client:     HTTPX AsyncClient bound to an app using `database`
    ├── question_payload / answer_payload: Request bodies
    └── create_question: Helper posting a question and returning its id
"""

import os

# Override settings for testing BEFORE any qanda imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./qanda_test.db"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["DB_CREATE_SCHEMA"] = "false"
os.environ["EXPOSE_STORE_ERRORS"] = "false"

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from qanda.database import Database
from qanda.main import create_app


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get_question(mock_db_session):
            result = MagicMock()
            result.scalar_one_or_none.return_value = question
            mock_db_session.execute.return_value = result
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
    """
    A real Database on a fresh SQLite file with the four tables created.

    One pooled connection and no overflow: concurrent requests queue in the
    pool instead of contending for SQLite's write lock.
    """
    db = Database(
        url=f"sqlite+aiosqlite:///{tmp_path / 'qanda.db'}",
        pool_size=1,
        max_overflow=0,
        pool_pre_ping=False,
    )
    await db.create_schema()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def test_client(database):
    """
    HTTPX AsyncClient routed straight into the app.

    ASGITransport does not run the lifespan, so the handle is passed to
    create_app and read from app.state by the session dependency.
    """
    app = create_app(database)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def question_payload():
    return {
        "title": "How do I reverse a list in Python?",
        "description": "I have a list of integers and want it in reverse order.",
        "category": "Programming",
    }


@pytest.fixture
def answer_payload():
    return {"content": "Use my_list[::-1] or my_list.reverse()."}


@pytest.fixture
def create_question(test_client, question_payload):
    """Posts a question (overriding any fields given) and returns its id."""

    async def _create(**overrides) -> int:
        response = await test_client.post("/questions", json={**question_payload, **overrides})
        assert response.status_code == 201
        return response.json()["data"]["id"]

    return _create
