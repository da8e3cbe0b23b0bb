"""Initial schema — partners, orders, assignment log.

Revision ID: 001
Revises: None
Create Date: 2026-10-17
"""

from typing import Sequence, Union

import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import ARRAY, JSONB

from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Partners
    op.create_table(
        "partners",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("email", sa.String(200), unique=True, nullable=False),
        sa.Column("phone", sa.String(50), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="active"),
        sa.Column("current_load", sa.Integer, nullable=False, server_default="0"),
        sa.Column(
            "areas", ARRAY(sa.String(100)), nullable=False, server_default="{}"
        ),
        sa.Column("shift_start", sa.String(5), nullable=True),
        sa.Column("shift_end", sa.String(5), nullable=True),
        sa.Column("rating", sa.Float, nullable=False, server_default="5.0"),
        sa.Column("completed_orders", sa.Integer, nullable=False, server_default="0"),
        sa.Column("cancelled_orders", sa.Integer, nullable=False, server_default="0"),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.CheckConstraint("current_load >= 0", name="ck_partners_load_non_negative"),
    )
    op.create_index("idx_partners_status_load", "partners", ["status", "current_load"])

    # Orders
    op.create_table(
        "orders",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("order_number", sa.String(50), unique=True, nullable=False),
        sa.Column("customer_name", sa.String(200), nullable=False),
        sa.Column("customer_phone", sa.String(50), nullable=False),
        sa.Column("customer_address", sa.Text, nullable=False),
        sa.Column("area", sa.String(100), nullable=False),
        sa.Column("items", JSONB, nullable=False, server_default="[]"),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("scheduled_for", sa.String(5), nullable=False),
        sa.Column(
            "assigned_to", sa.Integer, sa.ForeignKey("partners.id"), nullable=True
        ),
        sa.Column("total_amount", sa.Float, nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    )
    op.create_index("idx_orders_status", "orders", ["status"])
    op.create_index("idx_orders_area", "orders", ["area"])
    op.create_index("idx_orders_assigned_to", "orders", ["assigned_to"])

    # Assignment attempts (no FKs: attempts on unknown ids are logged too)
    op.create_table(
        "assignments",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("order_id", sa.Integer, nullable=False),
        sa.Column("partner_id", sa.Integer, nullable=True),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("reason", sa.Text, nullable=True),
        sa.Column(
            "timestamp",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    )
    op.create_index("idx_assignments_order", "assignments", ["order_id"])
    op.create_index("idx_assignments_status", "assignments", ["status"])


def downgrade() -> None:
    op.drop_table("assignments")
    op.drop_table("orders")
    op.drop_table("partners")
