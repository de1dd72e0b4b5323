"""ServiceRequest ORM - the single persisted record of the request tracker.

Invariants:
    - id is a UUID assigned on insert and never reassigned
    - floor, room, block, guest_name, phone_number, service, department are non-blank
    - status and priority always hold an enum member value
    - created_on is set once at creation; it is not an updatable field
    - file is a bare stored file name or NULL

Design Decisions:
    - @validates hooks delegate to core/request_rules.py: the same rules the
      route guards use, enforced on every attribute write (insert and update)
    - Enum columns stored as String(20) with CHECK constraints generated from
      the same enums; no native DB enum type to migrate
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, String, Text, DateTime, Uuid
from sqlalchemy.orm import Mapped, mapped_column, validates

from guest_services.core.domain_types import (
    DEFAULT_PRIORITY, DEFAULT_STATUS, RequestPriority, RequestStatus,
)
from guest_services.core.request_rules import (
    COLUMN_FIELDS, check_file_reference, check_priority, check_status, check_text,
)
from guest_services.db.base import Base


def _one_of(column: str, members) -> str:
    values = ", ".join(f"'{m.value}'" for m in members)
    return f"{column} IN ({values})"


class ServiceRequest(Base):
    """A guest service request tied to a floor/room/block."""
    __tablename__ = "requests"
    __table_args__ = (
        CheckConstraint(_one_of("status", RequestStatus), name="ck_requests_status"),
        CheckConstraint(
            _one_of("priority", RequestPriority), name="ck_requests_priority",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    floor: Mapped[str] = mapped_column(String(50), nullable=False)
    room: Mapped[str] = mapped_column(String(50), nullable=False)
    block: Mapped[str] = mapped_column(String(50), nullable=False)
    guest_name: Mapped[str] = mapped_column(String(200), nullable=False)
    phone_number: Mapped[str] = mapped_column(String(50), nullable=False)
    service: Mapped[str] = mapped_column(Text, nullable=False)
    department: Mapped[str] = mapped_column(String(100), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=DEFAULT_STATUS.value,
    )
    priority: Mapped[str] = mapped_column(
        String(20), nullable=False, default=DEFAULT_PRIORITY.value,
    )
    created_on: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    file: Mapped[str | None] = mapped_column(String(500), nullable=True)

    @validates(
        "floor", "room", "block", "guest_name", "phone_number",
        "service", "department",
    )
    def _validate_text(self, key: str, value):
        return check_text(COLUMN_FIELDS[key], value)

    @validates("status")
    def _validate_status(self, key: str, value):
        return check_status(value).value

    @validates("priority")
    def _validate_priority(self, key: str, value):
        return check_priority(value).value

    @validates("file")
    def _validate_file(self, key: str, value):
        return check_file_reference(value)

    def __repr__(self) -> str:
        return f"<ServiceRequest {self.id} room={self.room} status={self.status}>"
