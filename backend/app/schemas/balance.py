# ruff: noqa: TC001, TC003
from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Self

from pydantic import BaseModel, Field, model_validator

from app.models.enums import AdjustmentTarget

# ---------------------------------------------------------------------------
# Balance response schemas
# ---------------------------------------------------------------------------


class BalanceResponse(BaseModel):
    """Leave counters for one employee."""

    employee_id: uuid.UUID
    allocated_days: Decimal
    used_days: Decimal
    remaining_days: Decimal  # negative when over-drawn
    rate_of_leave: Decimal | None  # employee-specific override
    effective_monthly_rate: Decimal
    comp_off_balance_days: Decimal
    updated_at: datetime | None


# ---------------------------------------------------------------------------
# Mutation payloads
# ---------------------------------------------------------------------------


class CreateAdjustmentRequest(BaseModel):
    """Request body for an HR balance adjustment."""

    employee_id: uuid.UUID
    target: AdjustmentTarget = AdjustmentTarget.LEAVE_BALANCE
    amount_days: Decimal = Field(
        max_digits=6,
        decimal_places=2,
        description="Signed amount: positive to credit, negative to debit",
    )
    reason: str = Field(min_length=1, max_length=1000)

    @model_validator(mode="after")
    def _validate_amount(self) -> Self:
        if self.amount_days == 0:
            msg = "amount_days must be non-zero"
            raise ValueError(msg)
        return self


class SetLeaveRatePayload(BaseModel):
    """Request body for setting an employee's monthly leave rate.

    ``None`` clears the override so the employment-term rate applies.
    """

    rate_of_leave: Decimal | None = Field(default=None, ge=0, max_digits=5, decimal_places=2)


# ---------------------------------------------------------------------------
# Adjustment history
# ---------------------------------------------------------------------------


class AdjustmentResponse(BaseModel):
    """A recorded HR adjustment."""

    id: uuid.UUID
    employee_id: uuid.UUID
    target: AdjustmentTarget
    amount_days: Decimal
    reason: str
    previous_days: Decimal
    new_days: Decimal
    adjusted_by: uuid.UUID
    created_at: datetime


class AdjustmentListResponse(BaseModel):
    """Paginated adjustment history, newest first."""

    items: list[AdjustmentResponse]
    total: int
