# ruff: noqa: B008
"""API endpoints for the monthly leave accrual and its schedule."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Query

from app.api.deps import HRDep
from app.db import SessionDep
from app.schemas.accrual import AccrualRunResponse, AccrualSchedulePayload, AccrualScheduleResponse
from app.services import accrual as accrual_service

accrual_trigger_router = APIRouter(
    prefix="/accruals",
    tags=["accruals"],
)


@accrual_trigger_router.post("/trigger", response_model=AccrualRunResponse)
async def trigger_accrual(
    session: SessionDep,
    auth: HRDep,
    target_date: date | None = Query(default=None),
    force: bool = Query(default=False),
) -> AccrualRunResponse:
    """Manually trigger the monthly accrual (HR only).

    ``target_date`` defaults to today in the configured timezone. Without
    ``force`` nothing posts unless it is the first of a month and the accrual
    schedule is active and not past its end date. Employees already credited
    for that month are skipped either way.
    """
    result = await accrual_service.run_monthly_accrual(session, target_date, actor_id=auth.user_id, force=force)
    return AccrualRunResponse(
        target_date=result.target_date,
        processed=result.processed,
        accrued=result.accrued,
        skipped=result.skipped,
        errors=result.errors,
        skipped_reason=result.skipped_reason,
    )


@accrual_trigger_router.get("/schedule", response_model=AccrualScheduleResponse)
async def get_accrual_schedule(
    session: SessionDep,
    auth: HRDep,
) -> AccrualScheduleResponse:
    """Get the scheduled accrual's switch and end date (HR only)."""
    return await accrual_service.get_schedule(session)


@accrual_trigger_router.put("/schedule", response_model=AccrualScheduleResponse)
async def set_accrual_schedule(
    payload: AccrualSchedulePayload,
    session: SessionDep,
    auth: HRDep,
) -> AccrualScheduleResponse:
    """Enable, disable or extend the scheduled accrual (HR only)."""
    return await accrual_service.upsert_schedule(session, auth, payload)
