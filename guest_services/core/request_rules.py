"""Request Rules - the single rule set shared by route guards and the ORM model.

Invariants:
    - Pure functions: no IO, no session, no FastAPI imports
    - Every rule violation raises ValidationError with the public message
    - Field names here are the public (JSON) names; FIELD_COLUMNS maps them
      to model attributes

Design Decisions:
    - Route handlers call these before touching the store and the model's
      @validates hooks call the same functions, so the enum and field lists
      exist exactly once
"""

from collections.abc import Iterable, Mapping
from typing import Any
from uuid import UUID

from guest_services.core.domain_types import (
    RequestId, RequestPriority, RequestStatus,
)
from guest_services.core.errors import ValidationError


REQUIRED_FIELDS: tuple[str, ...] = (
    "floor", "room", "block", "guestName", "phoneNumber",
    "service", "department",
)

UPDATABLE_FIELDS: frozenset[str] = frozenset(
    REQUIRED_FIELDS + ("priority", "status", "file"),
)

FIELD_COLUMNS: dict[str, str] = {
    "floor": "floor",
    "room": "room",
    "block": "block",
    "guestName": "guest_name",
    "phoneNumber": "phone_number",
    "service": "service",
    "department": "department",
    "priority": "priority",
    "status": "status",
    "file": "file",
}

COLUMN_FIELDS: dict[str, str] = {v: k for k, v in FIELD_COLUMNS.items()}


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def missing_required_fields(data: Mapping[str, Any]) -> list[str]:
    """Required field names that are absent or blank, in declaration order."""
    return [name for name in REQUIRED_FIELDS if is_blank(data.get(name))]


def check_required_fields(data: Mapping[str, Any]) -> None:
    missing = missing_required_fields(data)
    if missing:
        raise ValidationError("Missing required fields", field=missing[0])


def check_update_fields(field_names: Iterable[str]) -> None:
    """Reject any field name outside the update allow-list."""
    for name in field_names:
        if name not in UPDATABLE_FIELDS:
            raise ValidationError("Invalid updates", field=name)


def check_priority(value: Any) -> RequestPriority:
    try:
        return RequestPriority(value)
    except (ValueError, TypeError):
        raise ValidationError("Invalid priority", field="priority")


def check_status(value: Any) -> RequestStatus:
    try:
        return RequestStatus(value)
    except (ValueError, TypeError):
        raise ValidationError("Invalid status", field="status")


def check_text(field: str, value: Any) -> str:
    """Required text value, stripped. Numbers are stored as their text form."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        value = str(value)
    if not isinstance(value, str) or is_blank(value):
        raise ValidationError(f"Invalid value for {field}", field=field)
    return value.strip()


def check_file_reference(value: Any) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError("Invalid value for file", field="file")
    return value or None


def check_update(changes: Mapping[str, Any]) -> None:
    """Transport-level update guard: allow-list, then priority, then status."""
    check_update_fields(changes.keys())
    if "priority" in changes:
        check_priority(changes["priority"])
    if "status" in changes:
        check_status(changes["status"])


def parse_request_id(raw: str) -> RequestId:
    """Parse a path id; malformed ids never reach the store."""
    try:
        return RequestId(UUID(str(raw)))
    except (ValueError, TypeError, AttributeError):
        raise ValidationError("Invalid request ID", field="id")


def to_columns(changes: Mapping[str, Any]) -> dict[str, Any]:
    """Translate public field names to model attribute names."""
    return {FIELD_COLUMNS[name]: value for name, value in changes.items()}
