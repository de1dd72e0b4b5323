"""Guest Services API - FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map GuestServicesError -> {"message": ...} JSON responses
    - CORS configured from settings (origins with credentials, explicit methods)
    - Store and attachment storage built in the lifespan, kept on app.state,
      and disposed on shutdown; no import-time connections

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Uploads served by StaticFiles under settings.uploads_url_path; the
      directory is created during startup, so check_dir is deferred
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from guest_services.api.error_handlers import register_error_handlers
from guest_services.api.routes import health, service_requests
from guest_services.config import get_settings
from guest_services.infrastructure.database import DatabaseSessionManager
from guest_services.infrastructure.file_storage import LocalFileStorage
from guest_services.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)

    file_storage = LocalFileStorage(settings.upload_dir)
    file_storage.ensure_directory()
    db = DatabaseSessionManager(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    app.state.db = db
    app.state.file_storage = file_storage
    logger.info(
        f"Guest Services API started (uploads in {file_storage.base_path})",
    )
    try:
        yield
    finally:
        logger.info("Guest Services API shutting down")
        await db.close()
        app.state.db = None


app = FastAPI(
    title="Guest Services API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=settings.cors_methods,
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(service_requests.router)

app.mount(
    settings.uploads_url_path,
    StaticFiles(directory=settings.upload_dir, check_dir=False),
    name="uploads",
)

register_error_handlers(app)
