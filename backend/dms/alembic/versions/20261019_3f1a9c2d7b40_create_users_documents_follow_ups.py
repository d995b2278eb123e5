"""Create users, documents and follow_up_notifications tables.

Revision ID: 3f1a9c2d7b40
Revises:
Create Date: 2026-10-19
"""

import sqlalchemy as sa
from alembic import op

revision = "3f1a9c2d7b40"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("username", sa.String(length=50), nullable=False),
        sa.Column("password", sa.String(length=255), nullable=False),
        sa.Column("role", sa.String(length=30), nullable=False),
        sa.Column("department", sa.String(length=100), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column("created_by", sa.String(length=50), nullable=True),
        sa.Column("preferences", sa.JSON(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sqlite_autoincrement=True,
    )
    op.create_index("ix_users_username", "users", ["username"], unique=True)
    op.create_index("ix_users_department", "users", ["department"])

    op.create_table(
        "documents",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("sender", sa.String(length=255), nullable=False),
        sa.Column("recipient", sa.String(length=255), nullable=False),
        sa.Column("department", sa.String(length=100), nullable=False),
        sa.Column("document_type", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column(
            "status",
            sa.String(length=40),
            nullable=False,
            server_default="Waiting for Confirmation",
        ),
        sa.Column(
            "document_category", sa.String(length=20), nullable=False, server_default="queue"
        ),
        sa.Column("date_sent", sa.DateTime(timezone=True), nullable=True),
        sa.Column("date_received", sa.DateTime(timezone=True), nullable=True),
        sa.Column("last_updated", sa.DateTime(timezone=True), nullable=True),
        sa.Column("file_name", sa.String(length=255), nullable=True),
        sa.Column("created_by_user", sa.String(length=50), nullable=True),
        sa.Column("updated_by", sa.String(length=50), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sqlite_autoincrement=True,
    )
    op.create_index("ix_documents_department", "documents", ["department"])
    op.create_index("ix_documents_document_category", "documents", ["document_category"])
    op.create_index("ix_documents_created_by_user", "documents", ["created_by_user"])

    op.create_table(
        "follow_up_notifications",
        sa.Column("id", sa.String(length=80), nullable=False),
        sa.Column("document_id", sa.Integer(), nullable=False),
        sa.Column("department", sa.String(length=100), nullable=False),
        sa.Column("message", sa.String(length=500), nullable=False),
        sa.Column("created_by", sa.String(length=50), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_follow_up_notifications_document_id", "follow_up_notifications", ["document_id"]
    )
    op.create_index(
        "ix_follow_up_notifications_department", "follow_up_notifications", ["department"]
    )


def downgrade() -> None:
    op.drop_index("ix_follow_up_notifications_department", table_name="follow_up_notifications")
    op.drop_index("ix_follow_up_notifications_document_id", table_name="follow_up_notifications")
    op.drop_table("follow_up_notifications")
    op.drop_index("ix_documents_created_by_user", table_name="documents")
    op.drop_index("ix_documents_document_category", table_name="documents")
    op.drop_index("ix_documents_department", table_name="documents")
    op.drop_table("documents")
    op.drop_index("ix_users_department", table_name="users")
    op.drop_index("ix_users_username", table_name="users")
    op.drop_table("users")
