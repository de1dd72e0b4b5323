"""Create Request - POST /api/requests with form fields and an optional attachment.

Invariants:
    - Missing/blank required field -> 400, nothing persisted, no file written
    - New requests start PENDING with priority MEDIUM unless given
    - Attachment stored as "{ms}-{name}" and served under /uploads
    - Store failure -> 500 generic message; the stored attachment is removed
"""

import re
from datetime import datetime
from pathlib import Path
from uuid import UUID

import pytest

from guest_services.api.dependencies import get_request_store
from guest_services.core.errors import StorageError
from guest_services.core.request_rules import REQUIRED_FIELDS
from guest_services.main import app


async def test_scenario_jane_doe_towels(client, jane_doe_form):
    res = await client.post("/api/requests", data=jane_doe_form)

    assert res.status_code == 201
    body = res.json()
    assert body["message"] == "Request created successfully!"
    created = body["request"]
    assert created["priority"] == "MEDIUM"
    assert created["status"] == "PENDING"
    assert created["guestName"] == "Jane Doe"
    assert created["department"] == "Housekeeping"
    assert "file" not in created
    UUID(created["id"])
    datetime.fromisoformat(created["createdOn"])


@pytest.mark.parametrize("missing", REQUIRED_FIELDS)
async def test_missing_required_field_rejected_and_not_persisted(
    client, jane_doe_form, missing,
):
    del jane_doe_form[missing]

    res = await client.post("/api/requests", data=jane_doe_form)

    assert res.status_code == 400
    assert res.json() == {"message": "Missing required fields"}
    assert (await client.get("/api/capture")).json() == []


async def test_blank_required_field_rejected(client, jane_doe_form):
    jane_doe_form["room"] = "   "
    res = await client.post("/api/requests", data=jane_doe_form)
    assert res.status_code == 400
    assert (await client.get("/api/capture")).json() == []


async def test_given_priority_kept(client, jane_doe_form):
    res = await client.post(
        "/api/requests", data={**jane_doe_form, "priority": "HIGH"},
    )
    assert res.status_code == 201
    assert res.json()["request"]["priority"] == "HIGH"


async def test_empty_priority_defaults_to_medium(client, jane_doe_form):
    res = await client.post(
        "/api/requests", data={**jane_doe_form, "priority": ""},
    )
    assert res.status_code == 201
    assert res.json()["request"]["priority"] == "MEDIUM"


async def test_invalid_priority_rejected(client, jane_doe_form):
    res = await client.post(
        "/api/requests", data={**jane_doe_form, "priority": "URGENT"},
    )
    assert res.status_code == 400
    assert res.json() == {"message": "Invalid priority"}
    assert (await client.get("/api/capture")).json() == []


async def test_status_cannot_be_set_on_create(client, jane_doe_form):
    res = await client.post(
        "/api/requests", data={**jane_doe_form, "status": "COMPLETED"},
    )
    assert res.status_code == 201
    assert res.json()["request"]["status"] == "PENDING"


async def test_attachment_stored_and_served(client, jane_doe_form, upload_dir):
    res = await client.post(
        "/api/requests",
        data=jane_doe_form,
        files={"file": ("towels.txt", b"two bath towels", "text/plain")},
    )

    assert res.status_code == 201
    stored = res.json()["request"]["file"]
    assert re.fullmatch(r"\d{13}-towels\.txt", stored)
    assert (Path(upload_dir) / stored).read_bytes() == b"two bath towels"

    served = await client.get(f"/uploads/{stored}")
    assert served.status_code == 200
    assert served.content == b"two bath towels"


async def test_missing_field_with_attachment_writes_no_file(
    client, jane_doe_form, upload_dir,
):
    del jane_doe_form["block"]

    res = await client.post(
        "/api/requests",
        data=jane_doe_form,
        files={"file": ("never-written.txt", b"x", "text/plain")},
    )

    assert res.status_code == 400
    assert not list(Path(upload_dir).glob("*-never-written.txt"))


class _FailingStore:
    async def create(self, fields):
        raise StorageError("Database operation failed", "commit")


async def test_store_failure_returns_generic_500(client, jane_doe_form, upload_dir):
    app.dependency_overrides[get_request_store] = _FailingStore

    res = await client.post(
        "/api/requests",
        data=jane_doe_form,
        files={"file": ("orphan-check.txt", b"x", "text/plain")},
    )

    assert res.status_code == 500
    assert res.json() == {"message": "Error creating request"}
    assert not list(Path(upload_dir).glob("*-orphan-check.txt"))


async def test_unreachable_database_returns_route_message_and_removes_file(
    client, unreachable_db, jane_doe_form, upload_dir,
):
    res = await client.post(
        "/api/requests",
        data=jane_doe_form,
        files={"file": ("db-down.txt", b"x", "text/plain")},
    )

    assert res.status_code == 500
    assert res.json() == {"message": "Error creating request"}
    assert not list(Path(upload_dir).glob("*-db-down.txt"))


class _CrashingStore:
    async def create(self, fields):
        raise RuntimeError("unexpected")


async def test_unexpected_store_crash_still_removes_file(
    client, jane_doe_form, upload_dir,
):
    app.dependency_overrides[get_request_store] = _CrashingStore

    res = await client.post(
        "/api/requests",
        data=jane_doe_form,
        files={"file": ("crash-check.txt", b"x", "text/plain")},
    )

    assert res.status_code == 500
    assert not list(Path(upload_dir).glob("*-crash-check.txt"))
