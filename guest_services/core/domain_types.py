"""Domain Types - identity and enum types for guest service requests.

Invariants:
    - RequestId wraps a UUID; handlers never pass raw path strings to the store
    - Status and priority values are encoded as Enums, no raw string matching

Design Decisions:
    - str Enums: serialize to JSON without custom encoders and compare equal
      to the stored column value
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

RequestId = NewType("RequestId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class RequestStatus(str, Enum):
    """Request lifecycle states. PENDING -> IN_PROGRESS -> COMPLETED."""
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"


class RequestPriority(str, Enum):
    """Staff-assigned urgency."""
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


DEFAULT_STATUS = RequestStatus.PENDING
DEFAULT_PRIORITY = RequestPriority.MEDIUM
