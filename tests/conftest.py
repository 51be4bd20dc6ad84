"""
Todo API - Test Configuration (conftest.py)
=============================================

What:  Shared pytest fixtures for the entire test suite.
How:   The HTTP client talks to an app built around in-memory repositories;
       database repositories run against a throwaway SQLite file through
       aiosqlite, so no PostgreSQL is needed.

Fixtures:
    ├── repositories:       Fresh in-memory Repositories context
    ├── test_client:        HTTPX AsyncClient bound to create_app(repositories)
    ├── sqlite_url:         URL of a SQLite file under tmp_path
    ├── database:           Database on sqlite_url with tables created
    ├── todo_repository:    Parametrized: in-memory and database variants
    └── label_repository:   Parametrized: in-memory and database variants
"""

import os

# Override settings for testing BEFORE any app imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["REPOSITORY_BACKEND"] = "memory"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from todo_api.context import Repositories
from todo_api.database import Database
from todo_api.main import create_app
from todo_api.repositories import (
    DatabaseLabelRepository,
    DatabaseTodoRepository,
    InMemoryLabelRepository,
    InMemoryTodoRepository,
)


@pytest.fixture
def repositories():
    """A fresh in-memory context: every test starts from an empty store."""
    return Repositories.in_memory()


@pytest_asyncio.fixture
async def test_client(repositories):
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_root(test_client):
            response = await test_client.get("/")
            assert response.status_code == 200
    """
    app = create_app(repositories)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def sqlite_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'todo_api_test.db'}"


@pytest_asyncio.fixture
async def database(sqlite_url):
    """A Database on a temporary SQLite file with every table created."""
    db = Database.from_url(sqlite_url)
    await db.create_tables()
    yield db
    await db.dispose()


@pytest_asyncio.fixture(params=["memory", "database"])
async def todo_repository(request, sqlite_url):
    """Runs the test once per TodoRepository implementation."""
    if request.param == "memory":
        yield InMemoryTodoRepository()
        return

    db = Database.from_url(sqlite_url)
    await db.create_tables()
    yield DatabaseTodoRepository(db)
    await db.dispose()


@pytest_asyncio.fixture(params=["memory", "database"])
async def label_repository(request, sqlite_url):
    """Runs the test once per LabelRepository implementation."""
    if request.param == "memory":
        yield InMemoryLabelRepository()
        return

    db = Database.from_url(sqlite_url)
    await db.create_tables()
    yield DatabaseLabelRepository(db)
    await db.dispose()
