"""Service Request Schemas - Pydantic models for API responses.

Invariants:
    - JSON keys are camelCase (guestName, phoneNumber, createdOn)
    - file is omitted from the JSON body when the request has no attachment
    - status/priority serialize as their enum values

Design Decisions:
    - Create input is multipart form data validated by core/request_rules.py,
      not a body model: missing fields must map to the single
      "Missing required fields" message, not per-field Pydantic errors
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from guest_services.core.domain_types import RequestPriority, RequestStatus
from guest_services.core.repository_protocols import ServiceRequestLike


class ServiceRequestResponse(BaseModel):
    """Public representation of a stored request."""
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True,
    )

    id: UUID
    floor: str
    room: str
    block: str
    guest_name: str
    phone_number: str
    service: str
    department: str
    status: RequestStatus
    priority: RequestPriority
    created_on: datetime
    file: str | None = None


def serialize_request(record: ServiceRequestLike) -> dict:
    """Stored request -> JSON-ready dict."""
    return ServiceRequestResponse.model_validate(record).model_dump(
        mode="json", by_alias=True, exclude_none=True,
    )


def serialize_requests(records: list[ServiceRequestLike]) -> list[dict]:
    return [serialize_request(r) for r in records]
