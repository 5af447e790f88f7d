# ruff: noqa: B008, TC001, TC003
from __future__ import annotations

import uuid

from fastapi import APIRouter, Query, status

from app.api.deps import AuthDep, HRDep
from app.db import SessionDep
from app.models.enums import LeaveStatus
from app.schemas.leave import (
    DecisionPayload,
    EvaluationResponse,
    LeaveListResponse,
    LeavePayload,
    LeaveResponse,
)
from app.services import leave as leave_service

leaves_router = APIRouter(prefix="/leaves", tags=["leaves"])


@leaves_router.post("/evaluate", response_model=EvaluationResponse)
async def evaluate_leave(
    payload: LeavePayload,
    session: SessionDep,
    auth: AuthDep,
) -> EvaluationResponse:
    """Preview the decision and loss-of-pay split for a leave request."""
    return await leave_service.evaluate_leave(session, auth, payload)


@leaves_router.post("", response_model=LeaveResponse, status_code=status.HTTP_201_CREATED)
async def submit_leave(
    payload: LeavePayload,
    session: SessionDep,
    auth: AuthDep,
) -> LeaveResponse:
    """Submit a new leave application."""
    return await leave_service.submit_leave(session, auth, payload)


@leaves_router.get("", response_model=LeaveListResponse)
async def list_leaves(
    session: SessionDep,
    auth: AuthDep,
    employee_id: uuid.UUID | None = Query(default=None),
    status_filter: LeaveStatus | None = Query(default=None, alias="status"),
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=50, ge=1, le=100),
) -> LeaveListResponse:
    """List leave applications with optional filters."""
    return await leave_service.list_leaves(
        session,
        auth,
        employee_id,
        status_filter.value if status_filter else None,
        offset,
        limit,
    )


@leaves_router.get("/{leave_id}", response_model=LeaveResponse)
async def get_leave(
    leave_id: uuid.UUID,
    session: SessionDep,
    auth: AuthDep,
) -> LeaveResponse:
    """Get a single leave application."""
    return await leave_service.get_leave(session, auth, leave_id)


@leaves_router.post("/{leave_id}/approve", response_model=LeaveResponse)
async def approve_leave(
    leave_id: uuid.UUID,
    session: SessionDep,
    auth: HRDep,
    payload: DecisionPayload | None = None,
) -> LeaveResponse:
    """Approve a pending leave application (HR only)."""
    return await leave_service.approve_leave(session, auth, leave_id, payload)


@leaves_router.post("/{leave_id}/reject", response_model=LeaveResponse)
async def reject_leave(
    leave_id: uuid.UUID,
    session: SessionDep,
    auth: HRDep,
    payload: DecisionPayload | None = None,
) -> LeaveResponse:
    """Reject a pending leave application (HR only)."""
    return await leave_service.reject_leave(session, auth, leave_id, payload)


@leaves_router.post("/{leave_id}/withdraw", response_model=LeaveResponse)
async def withdraw_leave(
    leave_id: uuid.UUID,
    session: SessionDep,
    auth: AuthDep,
) -> LeaveResponse:
    """Withdraw a pending or approved leave application."""
    return await leave_service.withdraw_leave(session, auth, leave_id)
