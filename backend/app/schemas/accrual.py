# ruff: noqa: TC003
from __future__ import annotations

import uuid
from datetime import date, datetime

from pydantic import BaseModel


class AccrualRunResponse(BaseModel):
    """Response from the monthly accrual trigger endpoint."""

    target_date: date
    processed: int
    accrued: int
    skipped: int
    errors: int
    skipped_reason: str | None = None  # set when the whole run was skipped


class AccrualSchedulePayload(BaseModel):
    """Request body for configuring the scheduled accrual."""

    is_active: bool = True
    end_date: date


class AccrualScheduleResponse(BaseModel):
    """Current scheduled-accrual configuration."""

    id: uuid.UUID
    is_active: bool
    end_date: date
    last_run_at: datetime | None
    updated_by: uuid.UUID | None
    updated_at: datetime
