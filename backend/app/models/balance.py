# ruff: noqa: TC003
from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal

import sqlalchemy as sa
from sqlmodel import Field, SQLModel

from app.models.base import TimestampMixin, UUIDBase, now_utc


class LeaveBalance(SQLModel, table=True):
    """Per-employee leave counters, updated transactionally with leave decisions.

    ``allocated_days - used_days`` is the remaining balance and may go negative.
    ``rate_of_leave`` overrides the employment-term rate when set.
    """

    __tablename__ = "leave_balance"
    __table_args__ = (sa.CheckConstraint("comp_off_balance_days >= 0", name="ck_comp_off_not_negative"),)

    employee_id: uuid.UUID = Field(primary_key=True, sa_type=sa.Uuid)
    allocated_days: Decimal = Field(
        default=Decimal(0), max_digits=8, decimal_places=2, sa_column_kwargs={"server_default": "0"}
    )
    used_days: Decimal = Field(
        default=Decimal(0), max_digits=8, decimal_places=2, sa_column_kwargs={"server_default": "0"}
    )
    rate_of_leave: Decimal | None = Field(default=None, max_digits=5, decimal_places=2)
    comp_off_balance_days: Decimal = Field(
        default=Decimal(0), max_digits=8, decimal_places=2, sa_column_kwargs={"server_default": "0"}
    )
    last_accrued_month: str | None = Field(default=None, max_length=7)  # "YYYY-MM"
    updated_at: datetime = Field(  # type: ignore[call-overload]
        default_factory=now_utc,
        sa_type=sa.DateTime(timezone=True),
        sa_column_kwargs={"server_default": sa.func.now(), "onupdate": now_utc},
    )
    version: int = Field(default=1, sa_column_kwargs={"server_default": "1"})

    @property
    def remaining_days(self) -> Decimal:
        return self.allocated_days - self.used_days


class LeaveBalanceAdjustment(UUIDBase, TimestampMixin, table=True):
    """One manual HR credit or debit, with the counter value before and after it."""

    __tablename__ = "leave_balance_adjustment"

    employee_id: uuid.UUID = Field(index=True)
    target: str = Field(max_length=20)  # AdjustmentTarget
    amount_days: Decimal = Field(max_digits=6, decimal_places=2)
    reason: str
    previous_days: Decimal = Field(max_digits=8, decimal_places=2)
    new_days: Decimal = Field(max_digits=8, decimal_places=2)
    adjusted_by: uuid.UUID
