"""
Todo API - Application Package
================================

What: A small CRUD service for todos and labels.
How:  Handlers are written once against the repository interfaces in
      `todo_api.repositories`; the storage backend (database or in-memory)
      is picked when the app is wired and handed to `create_app()`.

Layers:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     Validated Request Gate          │  ← parse + constraint checks
    ├─────────────────────────────────────┤
    │   Repositories (database | memory)  │  ← storage-specific execution
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
