# ruff: noqa: B008, TC001, TC003
from __future__ import annotations

import uuid

from fastapi import APIRouter, Query, status

from app.api.deps import AuthDep, HRDep
from app.db import SessionDep
from app.exceptions import AppError
from app.schemas.balance import (
    AdjustmentListResponse,
    BalanceResponse,
    CreateAdjustmentRequest,
    SetLeaveRatePayload,
)
from app.services import balance as balance_service

employee_balance_router = APIRouter(
    prefix="/employees/{employee_id}",
    tags=["balances"],
)

adjustment_router = APIRouter(
    prefix="/adjustments",
    tags=["balances"],
)


@employee_balance_router.get("/balance", response_model=BalanceResponse)
async def get_employee_balance(
    employee_id: uuid.UUID,
    session: SessionDep,
    auth: AuthDep,
) -> BalanceResponse:
    """Get an employee's leave balance, monthly rate and comp-off balance."""
    if not auth.is_hr and auth.user_id != employee_id:
        raise AppError("Not authorized to view another employee's balance", status_code=status.HTTP_403_FORBIDDEN)
    return await balance_service.get_balance(session, employee_id)


@employee_balance_router.put("/leave-rate", response_model=BalanceResponse)
async def set_employee_leave_rate(
    employee_id: uuid.UUID,
    payload: SetLeaveRatePayload,
    session: SessionDep,
    auth: HRDep,
) -> BalanceResponse:
    """Set or clear an employee's monthly leave rate override (HR only)."""
    return await balance_service.set_leave_rate(session, auth, employee_id, payload)


@employee_balance_router.get("/adjustments", response_model=AdjustmentListResponse)
async def list_employee_adjustments(
    employee_id: uuid.UUID,
    session: SessionDep,
    auth: AuthDep,
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=50, ge=1, le=100),
) -> AdjustmentListResponse:
    """List the HR adjustments made to an employee's balances, newest first."""
    if not auth.is_hr and auth.user_id != employee_id:
        raise AppError(
            "Not authorized to view another employee's adjustments", status_code=status.HTTP_403_FORBIDDEN
        )
    return await balance_service.list_adjustments(session, employee_id, offset, limit)


@adjustment_router.post("", response_model=BalanceResponse, status_code=status.HTTP_201_CREATED)
async def create_adjustment(
    payload: CreateAdjustmentRequest,
    session: SessionDep,
    auth: HRDep,
) -> BalanceResponse:
    """Credit or debit a leave or comp-off balance (HR only)."""
    return await balance_service.create_adjustment(session, auth, payload)
