# ruff: noqa: TC003
from __future__ import annotations

import uuid
from datetime import date, datetime

import sqlalchemy as sa
from sqlmodel import Field

from app.models.base import TimestampMixin, UUIDBase, now_utc


class AccrualSchedule(UUIDBase, TimestampMixin, table=True):
    """Switch and end date for the scheduled monthly accrual.

    The most recently created active row governs scheduled runs; without one
    nothing is credited unless a run is forced.
    """

    __tablename__ = "accrual_schedule"

    is_active: bool = Field(default=True, index=True, sa_column_kwargs={"server_default": sa.true()})
    end_date: date  # no scheduled run posts after this date
    last_run_at: datetime | None = Field(
        default=None,
        sa_type=sa.DateTime(timezone=True),  # ty: ignore[invalid-argument-type]
    )
    updated_by: uuid.UUID | None = None
    updated_at: datetime = Field(  # type: ignore[call-overload]
        default_factory=now_utc,
        sa_type=sa.DateTime(timezone=True),
        sa_column_kwargs={"server_default": sa.func.now(), "onupdate": now_utc},
    )
