# ruff: noqa: TC001, TC003
from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from app.models.enums import EmploymentTerm


class UpsertLeaveRatePayload(BaseModel):
    """Request body for setting an employment term's monthly leave rate."""

    leave_rate: Decimal = Field(ge=0, max_digits=5, decimal_places=2)
    description: str | None = Field(default=None, max_length=1000)


class LeaveRateResponse(BaseModel):
    """Monthly leave rate configured for an employment term."""

    id: uuid.UUID
    employment_term: EmploymentTerm
    leave_rate: Decimal
    description: str | None
    created_at: datetime


class LeaveRateListResponse(BaseModel):
    """All configured employment-term rates."""

    items: list[LeaveRateResponse]
    total: int
