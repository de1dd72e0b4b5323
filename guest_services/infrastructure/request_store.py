"""Request Store - SQLAlchemy implementation of RequestRepository.

Invariants:
    - One session per operation; each operation performs at most one commit
    - Field values pass through ServiceRequest @validates on every write;
      create also rejects absent required fields before the INSERT
    - Not-found is a return value (None / False), never an exception
    - Driver failures surface as StorageError via DatabaseSessionManager

Design Decisions:
    - Store accepts public (JSON) field names and maps them with to_columns():
      handlers never see column names
"""

import logging
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import select

from guest_services.core.domain_types import (
    DEFAULT_PRIORITY, DEFAULT_STATUS, RequestId,
)
from guest_services.core.request_rules import check_required_fields, to_columns
from guest_services.infrastructure.database import DatabaseSessionManager
from guest_services.models.service_request import ServiceRequest

logger = logging.getLogger(__name__)


class SqlRequestStore:
    """Request persistence over a DatabaseSessionManager."""

    def __init__(self, db: DatabaseSessionManager):
        self._db = db

    async def create(self, fields: Mapping[str, Any]) -> ServiceRequest:
        """Insert a new request. Status, priority and created_on get their defaults."""
        check_required_fields(fields)
        values = {
            "status": DEFAULT_STATUS.value,
            "priority": DEFAULT_PRIORITY.value,
            "created_on": datetime.now(timezone.utc),
            **to_columns(fields),
        }
        async with self._db.session() as session:
            record = ServiceRequest(**values)
            session.add(record)
            await session.commit()
            await session.refresh(record)
        logger.info(
            f"Request {record.id} created for room {record.room}",
            extra={"request_id": str(record.id)},
        )
        return record

    async def list_all(self) -> list[ServiceRequest]:
        async with self._db.session() as session:
            result = await session.execute(select(ServiceRequest))
            return list(result.scalars().all())

    async def update_by_id(
        self, request_id: RequestId, changes: Mapping[str, Any],
    ) -> ServiceRequest | None:
        """Apply changes to the matching request and return it, or None if absent."""
        async with self._db.session() as session:
            record = await session.get(ServiceRequest, request_id)
            if record is None:
                return None
            for column, value in to_columns(changes).items():
                setattr(record, column, value)
            await session.commit()
            await session.refresh(record)
        logger.info(
            f"Request {request_id} updated: {sorted(changes)}",
            extra={"request_id": str(request_id)},
        )
        return record

    async def delete_by_id(self, request_id: RequestId) -> bool:
        """Remove the matching request. False if it did not exist."""
        async with self._db.session() as session:
            record = await session.get(ServiceRequest, request_id)
            if record is None:
                return False
            await session.delete(record)
            await session.commit()
        logger.info(
            f"Request {request_id} deleted",
            extra={"request_id": str(request_id)},
        )
        return True
