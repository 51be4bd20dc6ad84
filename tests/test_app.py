"""
Todo API - Application Wiring Tests
=====================================

What:  The app factory, middleware, error handlers, settings and the
       database-backed wiring (lifespan included).
"""

from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient
from pydantic import ValidationError
from sqlalchemy.exc import OperationalError

from todo_api.config import Settings
from todo_api.context import Repositories, build_repositories
from todo_api.database import Database
from todo_api.exceptions import TodoApiError
from todo_api.main import create_app
from todo_api.repositories import (
    DatabaseTodoRepository,
    InMemoryLabelRepository,
    InMemoryTodoRepository,
    TodoRepository,
)


class TestRootAndMiddleware:

    @pytest.mark.asyncio
    async def test_root_greets(self, test_client):
        response = await test_client.get("/")

        assert response.status_code == 200
        assert response.text == "Hello, World!"

    @pytest.mark.asyncio
    async def test_request_id_is_generated(self, test_client):
        response = await test_client.get("/todos")

        assert response.headers["X-Request-ID"]

    @pytest.mark.asyncio
    async def test_client_request_id_is_echoed_in_header_and_errors(self, test_client):
        response = await test_client.get("/todos/404", headers={"X-Request-ID": "trace-me"})

        assert response.headers["X-Request-ID"] == "trace-me"
        assert response.json()["request_id"] == "trace-me"

    @pytest.mark.asyncio
    async def test_cors_preflight_allows_configured_origin(self, test_client):
        response = await test_client.options(
            "/todos",
            headers={
                "Origin": "http://localhost:3001",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Content-Type",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "http://localhost:3001"


class TestUnexpectedErrors:

    @pytest.mark.asyncio
    async def test_unexpected_exception_is_generic_500(self):
        todos = AsyncMock(spec=TodoRepository)
        todos.all.side_effect = RuntimeError("boom: secret detail")
        app = create_app(Repositories(todos=todos, labels=InMemoryLabelRepository()))

        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/todos")

        assert response.status_code == 500
        assert response.json()["error"] == "internal_server_error"
        assert "secret detail" not in response.text

    @pytest.mark.asyncio
    async def test_unhandled_application_error_is_500(self):
        todos = AsyncMock(spec=TodoRepository)
        todos.all.side_effect = TodoApiError("queue drained", context={"detail": "secret"})
        app = create_app(Repositories(todos=todos, labels=InMemoryLabelRepository()))

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/todos")

        assert response.status_code == 500
        assert response.json()["error"] == "server_error"
        assert "queue drained" not in response.text


class TestSettings:

    def test_repository_backend_is_normalized(self):
        assert Settings(repository_backend="MEMORY").repository_backend == "memory"

    def test_unknown_repository_backend_rejected(self):
        with pytest.raises(ValidationError):
            Settings(repository_backend="redis")

    def test_log_level_is_normalized(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level_rejected(self):
        with pytest.raises(ValidationError):
            Settings(log_level="chatty")

    def test_cors_origins_list(self):
        settings = Settings(cors_origins="http://a.test, http://b.test,")

        assert settings.cors_origins_list == ["http://a.test", "http://b.test"]


class TestBuildRepositories:

    def test_memory_backend(self):
        repositories = build_repositories(Settings(repository_backend="memory"))

        assert isinstance(repositories.todos, InMemoryTodoRepository)
        assert isinstance(repositories.labels, InMemoryLabelRepository)
        assert repositories.database is None

    @pytest.mark.asyncio
    async def test_database_backend_shares_one_database(self, sqlite_url):
        repositories = build_repositories(
            Settings(repository_backend="database", database_url=sqlite_url)
        )
        try:
            assert isinstance(repositories.todos, DatabaseTodoRepository)
            assert repositories.database is not None
            assert repositories.todos._database is repositories.labels._database
        finally:
            await repositories.database.dispose()


class TestDatabaseWiring:

    @pytest.mark.asyncio
    async def test_wait_until_ready(self, database):
        await database.wait_until_ready(max_attempts=1)

    @pytest.mark.asyncio
    async def test_wait_until_ready_gives_up(self, tmp_path):
        # Parent directory does not exist, so SQLite cannot open the file
        db = Database.from_url(f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'x.db'}")
        try:
            with pytest.raises(OperationalError):
                await db.wait_until_ready(max_attempts=1)
        finally:
            await db.dispose()

    @pytest.mark.asyncio
    async def test_lifespan_creates_tables_and_serves_requests(self, sqlite_url):
        settings = Settings(
            repository_backend="database",
            database_url=sqlite_url,
            db_connect_max_attempts=1,
            log_level="WARNING",
        )
        app = create_app(build_repositories(settings), settings)

        async with app.router.lifespan_context(app):
            transport = ASGITransport(app=app)
            async with AsyncClient(transport=transport, base_url="http://test") as client:
                created = await client.post("/todos", json={"text": "should_created_todo"})
                updated = await client.patch(
                    "/todos/1", json={"id": 1, "text": "should_update_todo", "completed": True}
                )
                listed = await client.get("/todos")
                deleted = await client.delete("/todos/1")
                missing = await client.get("/todos/1")
                label = await client.post("/labels", json={"name": "db label"})

        assert created.status_code == 201
        assert created.json() == {"id": 1, "text": "should_created_todo", "completed": False}
        assert updated.json() == {"id": 1, "text": "should_update_todo", "completed": True}
        assert listed.json() == [{"id": 1, "text": "should_update_todo", "completed": True}]
        assert deleted.status_code == 204
        assert missing.status_code == 404
        assert label.json() == {"id": 1, "name": "db label"}
