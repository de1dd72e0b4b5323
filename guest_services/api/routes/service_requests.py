"""Service Request Routes - create, list, update and delete guest service requests.

Invariants:
    - Every guard raises (early return); a handler never writes two responses
    - Create validates all form fields before any file or record is written
    - Update checks run in order: allow-list, priority, status, id format, existence
    - Store failures surface as 500 with a per-route generic message; the
      underlying cause is only logged
    - A stored attachment is removed again when its record could not be written

Design Decisions:
    - Validation rules come from core/request_rules.py, the same functions the
      ORM model runs on write
    - Store and attachment storage injected via api/dependencies.py
"""

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Iterator

from fastapi import APIRouter, Body, Depends, File, Form, UploadFile, status

from guest_services.api.dependencies import get_file_storage, get_request_store
from guest_services.core.domain_types import DEFAULT_PRIORITY
from guest_services.core.errors import NotFoundError, StorageError
from guest_services.core.repository_protocols import (
    AttachmentStorage, RequestRepository,
)
from guest_services.core.request_rules import (
    check_priority, check_required_fields, check_update, is_blank,
    parse_request_id,
)
from guest_services.schemas.service_request import (
    serialize_request, serialize_requests,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["requests"])

CREATED_MESSAGE = "Request created successfully!"
UPDATED_MESSAGE = "Request updated successfully!"
DELETED_MESSAGE = "Request deleted successfully!"


@contextmanager
def _public_storage_message(message: str) -> Iterator[None]:
    """Replace the store's internal failure message with the route's public one."""
    try:
        yield
    except StorageError as e:
        raise StorageError(message, e.operation) from e


@router.post("/requests", status_code=status.HTTP_201_CREATED)
async def create_request(
    floor: str | None = Form(None),
    room: str | None = Form(None),
    block: str | None = Form(None),
    guest_name: str | None = Form(None, alias="guestName"),
    phone_number: str | None = Form(None, alias="phoneNumber"),
    service: str | None = Form(None),
    department: str | None = Form(None),
    priority: str | None = Form(None),
    file: UploadFile | None = File(None),
    store: RequestRepository = Depends(get_request_store),
    storage: AttachmentStorage = Depends(get_file_storage),
):
    """Submit a new request; the record starts PENDING."""
    form = {
        "floor": floor,
        "room": room,
        "block": block,
        "guestName": guest_name,
        "phoneNumber": phone_number,
        "service": service,
        "department": department,
    }
    check_required_fields(form)
    fields: dict[str, Any] = {name: value.strip() for name, value in form.items()}
    fields["priority"] = (
        DEFAULT_PRIORITY if is_blank(priority) else check_priority(priority.strip())
    )

    with _public_storage_message("Error creating request"):
        stored_name = None
        if file is not None and file.filename:
            stored_name = await storage.save(
                file.file, file.filename, datetime.now(timezone.utc),
            )
            fields["file"] = stored_name
        try:
            record = await store.create(fields)
        except Exception:
            if stored_name:
                await storage.delete(stored_name)
                logger.warning(
                    "Discarded attachment of a request that was not saved",
                    extra={"stored_name": stored_name},
                )
            raise

    return {"message": CREATED_MESSAGE, "request": serialize_request(record)}


@router.get("/capture")
async def list_requests(
    store: RequestRepository = Depends(get_request_store),
):
    """Every stored request, unfiltered."""
    with _public_storage_message("Error fetching requests"):
        records = await store.list_all()
    return serialize_requests(records)


@router.patch("/requests/{request_id}")
async def update_request(
    request_id: str,
    changes: dict[str, Any] = Body(...),
    store: RequestRepository = Depends(get_request_store),
):
    """Apply a partial update restricted to the allow-listed fields."""
    check_update(changes)
    rid = parse_request_id(request_id)
    with _public_storage_message("Error updating request"):
        record = await store.update_by_id(rid, changes)
    if record is None:
        raise NotFoundError(str(rid))
    return {
        "message": UPDATED_MESSAGE,
        "updatedRequest": serialize_request(record),
    }


@router.delete("/requests/{request_id}")
async def delete_request(
    request_id: str,
    store: RequestRepository = Depends(get_request_store),
):
    rid = parse_request_id(request_id)
    with _public_storage_message("Error deleting request"):
        deleted = await store.delete_by_id(rid)
    if not deleted:
        raise NotFoundError(str(rid))
    return {"message": DELETED_MESSAGE}
