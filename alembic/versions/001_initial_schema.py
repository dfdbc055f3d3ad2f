"""Initial schema - document with embedded routing ledger.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "document",
        sa.Column("id", sa.UUID(), primary_key=True),
        sa.Column("subject", sa.Text(), nullable=False),
        sa.Column("organization", sa.String(255), nullable=False, server_default=""),
        sa.Column("date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("source_type", sa.String(20), nullable=False, server_default="incoming"),
        sa.Column("department", sa.String(255), nullable=True),
        # Three-step outgoing route
        sa.Column("from_dept", sa.String(255), nullable=True),
        sa.Column("sent_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("received_at_dept", sa.String(255), nullable=True),
        sa.Column("received_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("to_dept", sa.String(255), nullable=True),
        sa.Column("forwarded_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("route_note", sa.Text(), nullable=True),
        # Routing state
        sa.Column("stage", sa.String(255), nullable=False, server_default=""),
        sa.Column("status", sa.String(20), nullable=False, server_default="InProgress"),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "history",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'[]'::jsonb"),
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False, server_default="0"),
        sa.CheckConstraint("source_type IN ('incoming', 'outgoing')", name="ck_document_source_type"),
        sa.CheckConstraint("status IN ('InProgress', 'Completed')", name="ck_document_status"),
    )
    op.create_index("ix_document_stage", "document", ["stage"])
    op.create_index("ix_document_status", "document", ["status"])
    op.create_index("ix_document_source_type", "document", ["source_type"])
    op.create_index("ix_document_date", "document", [sa.text("date DESC")])


def downgrade() -> None:
    op.drop_index("ix_document_date", table_name="document")
    op.drop_index("ix_document_source_type", table_name="document")
    op.drop_index("ix_document_status", table_name="document")
    op.drop_index("ix_document_stage", table_name="document")
    op.drop_table("document")
