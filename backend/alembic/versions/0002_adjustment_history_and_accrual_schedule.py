"""Add balance adjustment history and the accrual schedule.

Revision ID: 0002
Revises: 0001
Create Date: 2026-10-18
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0002"
down_revision = "0001"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "leave_balance_adjustment",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("employee_id", sa.Uuid(), nullable=False),
        sa.Column("target", sa.String(length=20), nullable=False),
        sa.Column("amount_days", sa.Numeric(6, 2), nullable=False),
        sa.Column("reason", sa.String(), nullable=False),
        sa.Column("previous_days", sa.Numeric(8, 2), nullable=False),
        sa.Column("new_days", sa.Numeric(8, 2), nullable=False),
        sa.Column("adjusted_by", sa.Uuid(), nullable=False),
    )
    op.create_index("ix_leave_balance_adjustment_employee_id", "leave_balance_adjustment", ["employee_id"])

    op.create_table(
        "accrual_schedule",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("last_run_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_by", sa.Uuid(), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_accrual_schedule_is_active", "accrual_schedule", ["is_active"])


def downgrade() -> None:
    op.drop_table("accrual_schedule")
    op.drop_table("leave_balance_adjustment")
