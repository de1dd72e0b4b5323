"""Error Hierarchy - verifies status mapping and the public response shape.

Tests:
    - ValidationError -> 400, NotFoundError -> 404, StorageError -> 500
    - to_response() exposes only the message
    - Log extras carry the code and context fields
"""

import dataclasses

from guest_services.core.domain_types import RequestPriority, RequestStatus
from guest_services.core.errors import (
    ErrorCategory, ErrorContext, ErrorSeverity, GuestServicesError,
    NotFoundError, StorageError, ValidationError,
)


def test_validation_error_is_400():
    err = ValidationError("Invalid status", field="status")
    assert err.http_status == 400
    assert err.category is ErrorCategory.VALIDATION
    assert err.severity is ErrorSeverity.WARNING
    assert err.context.field == "status"


def test_not_found_error_is_404_with_fixed_message():
    err = NotFoundError("abc")
    assert err.http_status == 404
    assert err.message == "Request not found"
    assert err.context.request_id == "abc"


def test_storage_error_is_500_and_critical():
    err = StorageError("Error fetching requests", "execute")
    assert err.http_status == 500
    assert err.severity is ErrorSeverity.CRITICAL
    assert err.operation == "execute"


def test_all_errors_share_the_base():
    for err in (
        ValidationError("x"), NotFoundError("1"), StorageError("x", "commit"),
    ):
        assert isinstance(err, GuestServicesError)


def test_response_contains_only_message():
    err = StorageError("Error updating request", "commit")
    assert err.to_response() == {"message": "Error updating request"}


def test_log_extra_includes_code():
    extra = ValidationError("Invalid updates", field="createdOn").log_extra()
    assert extra["error_code"] == "VALIDATION_ERROR"
    assert extra["field"] == "createdOn"


def test_log_extra_covers_every_context_field():
    extra = NotFoundError("abc").log_extra()
    context_fields = {f.name for f in dataclasses.fields(ErrorContext)}
    assert context_fields <= extra.keys()
    assert extra["request_id"] == "abc"


def test_enum_values_match_wire_format():
    assert [s.value for s in RequestStatus] == ["PENDING", "IN_PROGRESS", "COMPLETED"]
    assert [p.value for p in RequestPriority] == ["HIGH", "MEDIUM", "LOW"]
    assert RequestStatus.PENDING == "PENDING"
