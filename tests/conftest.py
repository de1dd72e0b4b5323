"""Root conftest - shared test configuration and fixtures.

Invariants:
    - Tests never touch a real database: every test gets a fresh in-memory SQLite store
    - Uploads go to a throwaway directory, the same one the /uploads mount serves
    - app.state is reset after each client test

Design Decisions:
    - Environment set before guest_services is imported: Settings is cached
      and the static mount reads upload_dir at import time
    - app.state assigned directly: the lifespan does not run under ASGITransport
"""

import os
import tempfile

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault(
    "UPLOAD_DIR", tempfile.mkdtemp(prefix="guest-services-uploads-"),
)
os.environ.setdefault("LOG_FORMAT", "text")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from guest_services.config import get_settings  # noqa: E402
from guest_services.db.base import Base  # noqa: E402
from guest_services.infrastructure.database import DatabaseSessionManager  # noqa: E402
from guest_services.infrastructure.file_storage import LocalFileStorage  # noqa: E402
from guest_services.infrastructure.request_store import SqlRequestStore  # noqa: E402
from guest_services.main import app  # noqa: E402
import guest_services.models  # noqa: F401, E402


@pytest.fixture
def jane_doe_form():
    """Form fields of a complete housekeeping request."""
    return {
        "floor": "5",
        "room": "12",
        "block": "A",
        "guestName": "Jane Doe",
        "phoneNumber": "555-0100",
        "service": "Towels",
        "department": "Housekeeping",
    }


@pytest.fixture
async def db_manager():
    manager = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    async with manager.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield manager
    await manager.close()


@pytest.fixture
def store(db_manager):
    return SqlRequestStore(db_manager)


@pytest.fixture
def upload_dir():
    return get_settings().upload_dir


@pytest.fixture
def file_storage(upload_dir):
    return LocalFileStorage(upload_dir)


@pytest.fixture
async def seed_request(store, jane_doe_form):
    """A stored request created straight through the store."""
    return await store.create(jane_doe_form)


@pytest.fixture
async def client(db_manager, file_storage):
    """API client wired to the in-memory store and the test upload directory."""
    app.state.db = db_manager
    app.state.file_storage = file_storage

    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    app.state.db = None
    app.state.file_storage = None


class RefusedSession:
    """Session whose every round trip fails the way asyncpg does with no server."""
    rolled_back = False

    def add(self, obj):
        pass

    async def _refuse(self, *args, **kwargs):
        raise ConnectionRefusedError(111, "Connect call failed ('127.0.0.1', 1)")

    execute = get = commit = _refuse

    async def rollback(self):
        RefusedSession.rolled_back = True

    async def close(self):
        pass


@pytest.fixture
def unreachable_db(db_manager):
    """db_manager with the database server gone; shared with the client fixture."""
    RefusedSession.rolled_back = False
    db_manager._session_factory = RefusedSession
    return db_manager
