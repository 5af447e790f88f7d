from __future__ import annotations

from decimal import Decimal

import sqlalchemy as sa
from sqlmodel import Field

from app.models.base import TimestampMixin, UUIDBase


class EmploymentTermLeaveRate(UUIDBase, TimestampMixin, table=True):
    """Default monthly leave rate (days per month) for an employment term."""

    __tablename__ = "employment_term_leave_rate"
    __table_args__ = (sa.CheckConstraint("leave_rate >= 0", name="ck_leave_rate_not_negative"),)

    employment_term: str = Field(max_length=50, unique=True)
    leave_rate: Decimal = Field(default=Decimal(0), max_digits=5, decimal_places=2)
    description: str | None = None
