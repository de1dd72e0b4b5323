"""Route Dependencies - hand the lifespan-built clients to route handlers.

Invariants:
    - Clients live on app.state (db, file_storage); nothing here creates them
    - A request arriving before startup completes fails loudly (RuntimeError)

Design Decisions:
    - FastAPI Depends over module globals: tests swap app.state or use
      dependency_overrides, no monkeypatching of imports
"""

from fastapi import Request

from guest_services.core.repository_protocols import (
    AttachmentStorage, RequestRepository,
)
from guest_services.infrastructure.database import DatabaseSessionManager
from guest_services.infrastructure.request_store import SqlRequestStore


def get_db_manager(request: Request) -> DatabaseSessionManager:
    db = getattr(request.app.state, "db", None)
    if db is None:
        raise RuntimeError("Database not initialized")
    return db


def get_request_store(request: Request) -> RequestRepository:
    return SqlRequestStore(get_db_manager(request))


def get_file_storage(request: Request) -> AttachmentStorage:
    storage = getattr(request.app.state, "file_storage", None)
    if storage is None:
        raise RuntimeError("File storage not initialized")
    return storage
