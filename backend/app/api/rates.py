# ruff: noqa: TC001
from __future__ import annotations

from fastapi import APIRouter

from app.api.deps import AuthDep, HRDep
from app.db import SessionDep
from app.models.enums import EmploymentTerm
from app.schemas.rate import LeaveRateListResponse, LeaveRateResponse, UpsertLeaveRatePayload
from app.services import rate as rate_service

rates_router = APIRouter(prefix="/leave-rates", tags=["leave-rates"])


@rates_router.get("", response_model=LeaveRateListResponse)
async def list_leave_rates(
    session: SessionDep,
    auth: AuthDep,
) -> LeaveRateListResponse:
    """List the monthly leave rate of every configured employment term."""
    return await rate_service.list_rates(session)


@rates_router.put("/{employment_term}", response_model=LeaveRateResponse)
async def upsert_leave_rate(
    employment_term: EmploymentTerm,
    payload: UpsertLeaveRatePayload,
    session: SessionDep,
    auth: HRDep,
) -> LeaveRateResponse:
    """Create or update an employment term's monthly leave rate (HR only)."""
    return await rate_service.upsert_rate(session, auth, employment_term, payload)
