# ruff: noqa: TC003
from __future__ import annotations

import uuid
from datetime import date, datetime
from decimal import Decimal

import sqlalchemy as sa
from sqlmodel import Field

from app.models.base import TimestampMixin, UUIDBase
from app.models.enums import LeaveStatus


class LeaveApplication(UUIDBase, TimestampMixin, table=True):
    """An employee's leave application with approval workflow state."""

    __tablename__ = "leave_application"
    __table_args__ = (
        sa.Index("ix_leave_employee_status", "employee_id", "status"),
        sa.CheckConstraint("lop_days >= 0 AND lop_days <= days_count", name="ck_leave_lop_days_valid"),
    )

    employee_id: uuid.UUID = Field(index=True)
    leave_type_key: str = Field(max_length=50)
    start_date: date = Field(index=True)
    end_date: date
    is_half_day: bool = Field(default=False, sa_column_kwargs={"server_default": sa.false()})
    half_day_period: str | None = Field(default=None, max_length=20)
    days_count: Decimal = Field(max_digits=6, decimal_places=2)
    lop_days: Decimal = Field(default=Decimal(0), max_digits=6, decimal_places=2)
    reason: str | None = None
    status: str = Field(
        default=LeaveStatus.PENDING, max_length=50, index=True, sa_column_kwargs={"server_default": "PENDING"}
    )
    applied_at: datetime | None = Field(
        default=None,
        sa_type=sa.DateTime(timezone=True),  # ty: ignore[invalid-argument-type]
    )
    decided_at: datetime | None = Field(
        default=None,
        sa_type=sa.DateTime(timezone=True),  # ty: ignore[invalid-argument-type]
    )
    decided_by: uuid.UUID | None = None
    decision_note: str | None = None
