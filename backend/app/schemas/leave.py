# ruff: noqa: TC001, TC003
from __future__ import annotations

import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.models.enums import HalfDayPeriod, LeaveStatus, LeaveTypeKey, RejectionReason

# ---------------------------------------------------------------------------
# Evaluator value objects
# ---------------------------------------------------------------------------


class LeaveRecord(BaseModel):
    """An existing leave entry the overlap check runs against."""

    model_config = ConfigDict(frozen=True)

    id: uuid.UUID | None = None
    start_date: date
    end_date: date
    is_half_day: bool = False
    half_day_period: HalfDayPeriod | None = None
    status: LeaveStatus = LeaveStatus.PENDING


class LeaveRequest(BaseModel):
    """A proposed absence, built by the caller for evaluation only.

    The date range is not validated here; the evaluator raises
    ``InvalidRangeError`` for ``end_date < start_date``.
    """

    model_config = ConfigDict(frozen=True)

    employee_id: uuid.UUID
    leave_type_key: LeaveTypeKey
    start_date: date
    end_date: date
    is_half_day: bool = False
    half_day_period: HalfDayPeriod | None = None


class LeaveContext(BaseModel):
    """Read-only snapshot of an employee's leave state at evaluation time."""

    model_config = ConfigDict(frozen=True)

    remaining_balance_days: Decimal = Decimal(0)
    monthly_accrual_rate: Decimal = Field(default=Decimal(0), ge=0)
    month_to_date_non_lop_days: Decimal = Field(default=Decimal(0), ge=0)
    comp_off_balance_days: Decimal = Field(default=Decimal(0), ge=0)
    employee_birth_date: date | None = None
    active_leaves: tuple[LeaveRecord, ...] = ()


class LeaveDecision(BaseModel):
    """Terminal outcome of one evaluation."""

    model_config = ConfigDict(frozen=True)

    accepted: bool
    rejection_reason: RejectionReason | None = None
    days_requested: Decimal
    days_from_balance: Decimal = Decimal(0)
    days_from_monthly_rate: Decimal = Decimal(0)
    days_as_loss_of_pay: Decimal = Decimal(0)
    conflicting_leave: LeaveRecord | None = None

    @property
    def has_loss_of_pay(self) -> bool:
        return self.days_as_loss_of_pay > 0


# ---------------------------------------------------------------------------
# Request payloads
# ---------------------------------------------------------------------------


class LeavePayload(BaseModel):
    """Request body for evaluating or submitting a leave application.

    A half-day payload may omit ``end_date``; it is pinned to ``start_date``.
    """

    employee_id: uuid.UUID
    leave_type_key: LeaveTypeKey
    start_date: date
    end_date: date | None = None
    is_half_day: bool = False
    half_day_period: HalfDayPeriod | None = None
    reason: str | None = Field(default=None, max_length=2000)

    @model_validator(mode="after")
    def _validate_half_day(self) -> Self:
        if self.is_half_day:
            if self.half_day_period is None:
                msg = "half_day_period is required for a half-day leave"
                raise ValueError(msg)
            self.end_date = self.start_date
        elif self.end_date is None:
            msg = "end_date is required for a full-day leave"
            raise ValueError(msg)
        elif self.half_day_period is not None:
            msg = "half_day_period is only allowed for a half-day leave"
            raise ValueError(msg)
        return self

    def to_leave_request(self) -> LeaveRequest:
        return LeaveRequest(
            employee_id=self.employee_id,
            leave_type_key=self.leave_type_key,
            start_date=self.start_date,
            end_date=self.end_date or self.start_date,
            is_half_day=self.is_half_day,
            half_day_period=self.half_day_period,
        )


class DecisionPayload(BaseModel):
    """Request body for approve/reject actions."""

    note: str | None = Field(default=None, max_length=1000)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class EvaluationResponse(BaseModel):
    """Preview of how a leave request would be costed."""

    decision: LeaveDecision
    covered_dates: list[date]


class LeaveResponse(BaseModel):
    """Response schema for a single leave application."""

    id: uuid.UUID
    employee_id: uuid.UUID
    leave_type_key: LeaveTypeKey
    start_date: date
    end_date: date
    is_half_day: bool
    half_day_period: HalfDayPeriod | None
    days_count: Decimal
    lop_days: Decimal
    reason: str | None
    status: LeaveStatus
    applied_at: datetime | None
    decided_at: datetime | None
    decided_by: uuid.UUID | None
    decision_note: str | None
    created_at: datetime


class LeaveListResponse(BaseModel):
    """Paginated list of leave applications."""

    items: list[LeaveResponse]
    total: int
