"""Database Session Manager - async connection pool with automatic rollback and health checks.

Invariants:
    - Every session auto-rolls-back on a driver/ORM exception (no partial commits leak)
    - Connection failures the driver raises unwrapped (OSError, timeouts)
      are mapped the same way as SQLAlchemy exceptions
    - All SQLAlchemy exceptions mapped to StorageError (core/errors.py); the
      cause is logged here and never copied into the error message
    - One manager per application, created in the lifespan and disposed on shutdown

Design Decisions:
    - No module-level singleton: the manager lives on app.state and reaches
      handlers through api/dependencies.py
    - expire_on_commit=False: returned models stay readable after the session closes
    - Pool sizing only applies to server databases; SQLite uses SQLAlchemy's default pool
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

from guest_services.core.errors import StorageError

logger = logging.getLogger(__name__)

GENERIC_STORAGE_MESSAGE = "Database operation failed"


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        engine_kwargs: dict = {"pool_pre_ping": True}
        if not database_url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_recycle=3600,
            )
        self.engine = create_async_engine(database_url, **engine_kwargs)
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except IntegrityError as e:
            await session.rollback()
            logger.error(f"DB integrity error: {e}")
            raise StorageError(GENERIC_STORAGE_MESSAGE, "commit") from e
        except OperationalError as e:
            await session.rollback()
            logger.error(f"DB operational error: {e}")
            raise StorageError(GENERIC_STORAGE_MESSAGE, "execute") from e
        except DBAPIError as e:
            await session.rollback()
            logger.error(f"DB driver error: {e}")
            raise StorageError(GENERIC_STORAGE_MESSAGE, "query") from e
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"SQLAlchemy error: {e}")
            raise StorageError(GENERIC_STORAGE_MESSAGE, "unknown") from e
        except (OSError, asyncio.TimeoutError) as e:
            await session.rollback()
            logger.error(f"DB connection error: {e!r}")
            raise StorageError(GENERIC_STORAGE_MESSAGE, "connect") from e
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def close(self) -> None:
        """Dispose the engine and its pooled connections."""
        await self.engine.dispose()
