"""Boundary Protocols - contracts between route handlers and the shell.

Invariants:
    - Route handlers depend on these Protocols, never on concrete store classes
    - All IO operations are async because implementations do IO

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
"""

from collections.abc import Mapping
from datetime import datetime
from typing import Any, BinaryIO, Protocol
from uuid import UUID

from guest_services.core.domain_types import RequestId


class ServiceRequestLike(Protocol):
    """Structural contract for stored requests handed to response schemas."""
    id: UUID
    floor: str
    room: str
    block: str
    guest_name: str
    phone_number: str
    service: str
    department: str
    status: str
    priority: str
    created_on: datetime
    file: str | None


class RequestRepository(Protocol):
    """Contract for Request persistence - implemented by infrastructure."""
    async def create(self, fields: Mapping[str, Any]) -> ServiceRequestLike: ...
    async def list_all(self) -> list[ServiceRequestLike]: ...
    async def update_by_id(
        self, request_id: RequestId, changes: Mapping[str, Any],
    ) -> ServiceRequestLike | None: ...
    async def delete_by_id(self, request_id: RequestId) -> bool: ...


class AttachmentStorage(Protocol):
    """Contract for attachment persistence - implemented by infrastructure."""
    async def save(
        self, fileobj: BinaryIO, original_name: str, submitted_at: datetime,
    ) -> str: ...
    async def delete(self, stored_name: str) -> bool: ...
