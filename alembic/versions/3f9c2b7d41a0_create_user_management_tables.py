"""create user management tables

Revision ID: 3f9c2b7d41a0
Revises:
Create Date: 2025-11-30

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f9c2b7d41a0"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _timestamp(name: str) -> sa.Column:
    return sa.Column(
        name, sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
    )


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(100), nullable=False),
        _timestamp("created_at"),
        _timestamp("updated_at"),
    )
    op.create_index("ix_users_id", "users", ["id"])
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "attributes",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("attribute_name", sa.String(50), nullable=False, unique=True),
        sa.Column("data_type", sa.String(20), nullable=False),
        sa.Column("display_order", sa.Integer(), nullable=False),
        sa.Column("is_required", sa.Boolean(), nullable=False),
        _timestamp("created_at"),
    )
    op.create_index("ix_attributes_id", "attributes", ["id"])
    op.create_index("ix_attributes_display_order", "attributes", ["display_order"])

    op.create_table(
        "user_attribute_values",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "attribute_id",
            sa.Integer(),
            sa.ForeignKey("attributes.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("value", sa.String(500), nullable=False),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.UniqueConstraint(
            "user_id", "attribute_id", name="uq_user_attribute_values_user_attribute"
        ),
    )
    op.create_index("ix_user_attribute_values_id", "user_attribute_values", ["id"])
    op.create_index("ix_user_attribute_values_user_id", "user_attribute_values", ["user_id"])
    op.create_index(
        "ix_user_attribute_values_attribute_id", "user_attribute_values", ["attribute_id"]
    )

    # Default attribute catalog
    attributes = sa.table(
        "attributes",
        sa.column("attribute_name", sa.String),
        sa.column("data_type", sa.String),
        sa.column("display_order", sa.Integer),
        sa.column("is_required", sa.Boolean),
    )
    op.bulk_insert(
        attributes,
        [
            {"attribute_name": "Age", "data_type": "Number", "display_order": 1, "is_required": False},
            {"attribute_name": "Department", "data_type": "Text", "display_order": 2, "is_required": True},
            {"attribute_name": "Position", "data_type": "Text", "display_order": 3, "is_required": False},
            {"attribute_name": "Hire Date", "data_type": "Date", "display_order": 4, "is_required": True},
        ],
    )


def downgrade() -> None:
    op.drop_table("user_attribute_values")
    op.drop_table("attributes")
    op.drop_table("users")
