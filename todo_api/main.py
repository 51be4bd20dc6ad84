"""
Todo API - FastAPI Application Factory
========================================

What:  Creates and configures the FastAPI application instance.
How:   `create_app(repositories)` assembles middleware, exception handlers
       and routes around an explicitly constructed `Repositories` context.
       `create_default_app()` builds that context from settings; `run()`
       serves it with uvicorn.
Who:   uvicorn (`uvicorn todo_api.main:create_default_app --factory`), the
       `todo-api` console script, and the test suite (with in-memory
       repositories).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────┐ ┌──────────────────┐  │
    │  │  Req ID  │→│  Logging    │→│  CORS            │  │
    │  └──────────┘ └─────────────┘ └──────────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────┐ ┌──────────────┐ ┌─────────────┐  │
    │  │ /todos       │ │ /labels      │ │ GET /       │  │
    │  └──────────────┘ └──────────────┘ └─────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Malformed→400 │ Validation→422 │ Repo→404    │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle (only when the repositories use a database):
    Startup:  wait for the database, create missing tables
    Shutdown: dispose the engine (close all pooled connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from todo_api import __version__
from todo_api.config import Settings, settings as default_settings
from todo_api.context import Repositories, build_repositories
from todo_api.exceptions import (
    MalformedBodyError,
    RepositoryError,
    TodoApiError,
    ValidationFailedError,
)
from todo_api.middleware.logging import RequestLoggingMiddleware
from todo_api.middleware.request_id import RequestIDMiddleware, request_id_var
from todo_api.routes import labels, root, todos

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str) -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during app startup, before any other initialization.
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),  # Docker captures stdout
        ],
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

def make_lifespan(repositories: Repositories, settings: Settings):
    """Build the lifespan handler for one app instance."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        # ── Startup ───────────────────────────────────────────────────────
        setup_logging(settings.log_level)
        logger.info("=" * 60)
        logger.info("Todo API %s starting up...", __version__)

        database = repositories.database
        if database is not None:
            try:
                await database.wait_until_ready(
                    max_attempts=settings.db_connect_max_attempts,
                    min_wait=settings.db_connect_min_wait,
                    max_wait=settings.db_connect_max_wait,
                )
                if settings.db_create_tables:
                    await database.create_tables()
            except Exception:
                logger.error(
                    "fail connect database, url is [%s]",
                    database.engine.url.render_as_string(hide_password=True),
                )
                await database.dispose()
                raise

        logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
        logger.info("=" * 60)

        yield  # Application runs here

        # ── Shutdown ──────────────────────────────────────────────────────
        logger.info("Todo API shutting down...")
        if database is not None:
            await database.dispose()
        logger.info("Shutdown complete.")

    return lifespan


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _request_id(request: Request) -> str:
    return request_id_var.get("") or getattr(request.state, "request_id", "")


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        MalformedBodyError      → 400 Bad Request
        RequestValidationError  → 400 Bad Request (path ID is not an integer)
        ValidationFailedError   → 422 Unprocessable Entity (lists violations)
        RepositoryError         → 404 Not Found (absent id or backend failure)
        TodoApiError (base)     → 500 Internal Server Error
        Exception (fallback)    → 500 Internal Server Error

    Responses never carry stack traces or backend error text; those are
    logged server-side.
    """

    @app.exception_handler(MalformedBodyError)
    async def handle_malformed_body(request: Request, exc: MalformedBodyError):
        rid = _request_id(request)
        logger.warning("[%s] Malformed body: %s", rid, exc.message)
        return JSONResponse(
            status_code=400,
            content={
                "error": "malformed_body",
                "message": exc.message,
                "details": {"errors": exc.errors},
                "request_id": rid,
            },
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        """FastAPI could not parse a path parameter."""
        rid = _request_id(request)
        logger.warning("[%s] Malformed request: %s", rid, exc.errors())
        return JSONResponse(
            status_code=400,
            content={
                "error": "malformed_request",
                "message": "Request path or query parameters are malformed",
                "details": {
                    "errors": [
                        {
                            "field": ".".join(str(part) for part in error["loc"]),
                            "message": error["msg"],
                        }
                        for error in exc.errors()
                    ]
                },
                "request_id": rid,
            },
        )

    @app.exception_handler(ValidationFailedError)
    async def handle_validation_failed(request: Request, exc: ValidationFailedError):
        rid = _request_id(request)
        logger.warning("[%s] Validation failed: %s", rid, exc.violations)
        return JSONResponse(
            status_code=422,
            content={
                "error": "validation_failed",
                "message": exc.message,
                "details": {"violations": exc.violations},
                "request_id": rid,
            },
        )

    @app.exception_handler(RepositoryError)
    async def handle_repository_error(request: Request, exc: RepositoryError):
        """Absent ids and backend failures look the same to the client."""
        rid = _request_id(request)
        logger.info("[%s] Repository error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=404,
            content={
                "error": "not_found",
                "message": "Not Found",
                "request_id": rid,
            },
        )

    @app.exception_handler(TodoApiError)
    async def handle_app_error(request: Request, exc: TodoApiError):
        rid = _request_id(request)
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": "An internal error occurred. Please try again later.",
                "request_id": rid,
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = _request_id(request)
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred. Please try again or contact support.",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    repositories: Repositories,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application around `repositories`.

    The same routes serve whichever backends `repositories` holds; tests
    pass `Repositories.in_memory()`, production wiring passes database
    repositories.
    """
    settings = settings or default_settings

    app = FastAPI(
        title="Todo API",
        description="CRUD service for todos and labels.",
        version=__version__,
        lifespan=make_lifespan(repositories, settings),
    )

    app.state.repositories = repositories

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added = first to execute: RequestID → Logging → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["Content-Type"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(root.router)
    app.include_router(todos.router)
    app.include_router(labels.router)

    return app


def create_default_app() -> FastAPI:
    """Wire the repositories named by the environment and build the app."""
    return create_app(build_repositories(default_settings), default_settings)


def run() -> None:
    """Entry point for the `todo-api` console script."""
    uvicorn.run(
        "todo_api.main:create_default_app",
        factory=True,
        host=default_settings.backend_host,
        port=default_settings.backend_port,
        log_level=default_settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
