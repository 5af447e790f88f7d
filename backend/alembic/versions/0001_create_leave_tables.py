"""Create leave application, balance, rate and audit tables.

Revision ID: 0001
Revises:
Create Date: 2026-10-18
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "leave_application",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("employee_id", sa.Uuid(), nullable=False),
        sa.Column("leave_type_key", sa.String(length=50), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("is_half_day", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("half_day_period", sa.String(length=20), nullable=True),
        sa.Column("days_count", sa.Numeric(6, 2), nullable=False),
        sa.Column("lop_days", sa.Numeric(6, 2), nullable=False),
        sa.Column("reason", sa.String(), nullable=True),
        sa.Column("status", sa.String(length=50), server_default="PENDING", nullable=False),
        sa.Column("applied_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("decided_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("decided_by", sa.Uuid(), nullable=True),
        sa.Column("decision_note", sa.String(), nullable=True),
        sa.CheckConstraint("lop_days >= 0 AND lop_days <= days_count", name="ck_leave_lop_days_valid"),
    )
    op.create_index("ix_leave_application_employee_id", "leave_application", ["employee_id"])
    op.create_index("ix_leave_application_start_date", "leave_application", ["start_date"])
    op.create_index("ix_leave_application_status", "leave_application", ["status"])
    op.create_index("ix_leave_employee_status", "leave_application", ["employee_id", "status"])

    op.create_table(
        "leave_balance",
        sa.Column("employee_id", sa.Uuid(), primary_key=True),
        sa.Column("allocated_days", sa.Numeric(8, 2), server_default="0", nullable=False),
        sa.Column("used_days", sa.Numeric(8, 2), server_default="0", nullable=False),
        sa.Column("rate_of_leave", sa.Numeric(5, 2), nullable=True),
        sa.Column("comp_off_balance_days", sa.Numeric(8, 2), server_default="0", nullable=False),
        sa.Column("last_accrued_month", sa.String(length=7), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("version", sa.Integer(), server_default="1", nullable=False),
        sa.CheckConstraint("comp_off_balance_days >= 0", name="ck_comp_off_not_negative"),
    )

    op.create_table(
        "employment_term_leave_rate",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("employment_term", sa.String(length=50), nullable=False, unique=True),
        sa.Column("leave_rate", sa.Numeric(5, 2), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.CheckConstraint("leave_rate >= 0", name="ck_leave_rate_not_negative"),
    )

    op.create_table(
        "audit_log",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("actor_id", sa.Uuid(), nullable=False),
        sa.Column("entity_type", sa.String(length=50), nullable=False),
        sa.Column("entity_id", sa.String(length=255), nullable=False),
        sa.Column("action", sa.String(length=50), nullable=False),
        sa.Column("before_json", sa.JSON(), nullable=True),
        sa.Column("after_json", sa.JSON(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_audit_log_actor_id", "audit_log", ["actor_id"])
    op.create_index("ix_audit_log_created_at", "audit_log", ["created_at"])
    op.create_index("ix_audit_entity", "audit_log", ["entity_type", "entity_id"])


def downgrade() -> None:
    op.drop_table("audit_log")
    op.drop_table("employment_term_leave_rate")
    op.drop_table("leave_balance")
    op.drop_table("leave_application")
