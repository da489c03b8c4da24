"""initial changetrack schema

Revision ID: a1c2e3f4b5d6
Revises:
Create Date: 2026-10-16

Tables owned by the change tracking service: the append-only activity track,
owner-linked documents, staged uploads and the organization date format.
Employee profile tables are owned by the HR schema and read only here.
"""

from collections.abc import Sequence
from typing import Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "a1c2e3f4b5d6"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "employee_profile_activity_track",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("employee_id", sa.String(), nullable=False),
        sa.Column("referrable_type", sa.SmallInteger(), nullable=True),
        sa.Column("referrable_type_id", sa.String(), nullable=True),
        sa.Column("action_type", sa.SmallInteger(), nullable=False),
        sa.Column("activity", sa.Text(), nullable=False),
        sa.Column(
            "change_log",
            sa.JSON().with_variant(postgresql.JSONB(), "postgresql"),
            nullable=False,
        ),
        sa.Column("created_by", sa.String(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_employee_profile_activity_track_employee_id",
        "employee_profile_activity_track",
        ["employee_id"],
        unique=False,
    )
    op.create_index(
        "ix_activity_track_employee_created",
        "employee_profile_activity_track",
        ["employee_id", "created_at"],
        unique=False,
    )

    op.create_table(
        "employee_mapped_documents",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("referrable_type", sa.SmallInteger(), nullable=True),
        sa.Column("referrable_type_id", sa.String(), nullable=True),
        sa.Column("document_name", sa.String(), nullable=True),
        sa.Column("document_url", sa.String(), nullable=True),
        sa.Column("document_path", sa.String(), nullable=True),
        sa.Column("created_by", sa.String(), nullable=True),
        sa.Column("deleted_by", sa.String(), nullable=True),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_employee_mapped_documents_referrable",
        "employee_mapped_documents",
        ["referrable_type", "referrable_type_id"],
        unique=False,
    )
    op.create_index(
        "ix_employee_mapped_documents_deleted_at",
        "employee_mapped_documents",
        ["deleted_at"],
        unique=False,
    )

    op.create_table(
        "temp_upload_documents",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("document_name", sa.String(), nullable=False),
        sa.Column("document_url", sa.String(), nullable=True),
        sa.Column("document_path", sa.String(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "organization",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("organization_name", sa.String(), nullable=False),
        sa.Column("date_format", sa.String(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )


def downgrade() -> None:
    op.drop_table("organization")
    op.drop_table("temp_upload_documents")
    op.drop_index(
        "ix_employee_mapped_documents_deleted_at", table_name="employee_mapped_documents"
    )
    op.drop_index(
        "ix_employee_mapped_documents_referrable", table_name="employee_mapped_documents"
    )
    op.drop_table("employee_mapped_documents")
    op.drop_index(
        "ix_activity_track_employee_created", table_name="employee_profile_activity_track"
    )
    op.drop_index(
        "ix_employee_profile_activity_track_employee_id",
        table_name="employee_profile_activity_track",
    )
    op.drop_table("employee_profile_activity_track")
