"""Create the requests table.

Revision ID: 001_requests
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_requests"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "requests",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("floor", sa.String(50), nullable=False),
        sa.Column("room", sa.String(50), nullable=False),
        sa.Column("block", sa.String(50), nullable=False),
        sa.Column("guest_name", sa.String(200), nullable=False),
        sa.Column("phone_number", sa.String(50), nullable=False),
        sa.Column("service", sa.Text, nullable=False),
        sa.Column("department", sa.String(100), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="PENDING"),
        sa.Column("priority", sa.String(20), nullable=False, server_default="MEDIUM"),
        sa.Column("created_on", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("file", sa.String(500), nullable=True),
        sa.CheckConstraint(
            "status IN ('PENDING', 'IN_PROGRESS', 'COMPLETED')",
            name="ck_requests_status",
        ),
        sa.CheckConstraint(
            "priority IN ('HIGH', 'MEDIUM', 'LOW')",
            name="ck_requests_priority",
        ),
    )


def downgrade() -> None:
    op.drop_table("requests")
