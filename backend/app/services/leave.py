# ruff: noqa: TC003
from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import func, select
from sqlmodel import col

from app.exceptions import AppError, LeaveRejectedError
from app.models.enums import (
    AuditAction,
    AuditEntityType,
    HalfDayPeriod,
    LeaveStatus,
    LeaveTypeKey,
    RejectionReason,
)
from app.models.leave import LeaveApplication
from app.schemas.leave import EvaluationResponse, LeaveListResponse, LeaveRequest, LeaveResponse
from app.services.audit import model_to_audit_dict, write_audit_log
from app.services.balance import _get_or_create_balance_for_update
from app.services.context import build_leave_context
from app.services.date_window import covered_dates
from app.services.evaluator import evaluate

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from app.models.balance import LeaveBalance
    from app.schemas.auth import AuthContext
    from app.schemas.leave import DecisionPayload, LeaveDecision, LeavePayload

logger = logging.getLogger(__name__)

_REJECTION_MESSAGES = {
    RejectionReason.DUPLICATE_LEAVE: "Leave overlaps with an existing pending or approved leave",
    RejectionReason.MISSING_BIRTH_DATE: "Birthday leave requires a date of birth on the employee record",
    RejectionReason.NOT_BIRTHDAY: "Birthday leave can only be taken on the employee's birthday",
    RejectionReason.MULTI_DAY_NOT_ALLOWED: "Birthday leave must be a single day",
    RejectionReason.HALF_DAY_NOT_ALLOWED: "Birthday leave cannot be a half day",
    RejectionReason.INSUFFICIENT_COMP_BALANCE: "Insufficient compensatory-off balance for this leave",
}


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _build_leave_response(application: LeaveApplication) -> LeaveResponse:
    """Map a leave application model to its response schema."""
    return LeaveResponse(
        id=application.id,
        employee_id=application.employee_id,
        leave_type_key=LeaveTypeKey(application.leave_type_key),
        start_date=application.start_date,
        end_date=application.end_date,
        is_half_day=application.is_half_day,
        half_day_period=HalfDayPeriod(application.half_day_period) if application.half_day_period else None,
        days_count=application.days_count,
        lop_days=application.lop_days,
        reason=application.reason,
        status=LeaveStatus(application.status),
        applied_at=application.applied_at,
        decided_at=application.decided_at,
        decided_by=application.decided_by,
        decision_note=application.decision_note,
        created_at=application.created_at,
    )


def _to_leave_request(application: LeaveApplication) -> LeaveRequest:
    return LeaveRequest(
        employee_id=application.employee_id,
        leave_type_key=LeaveTypeKey(application.leave_type_key),
        start_date=application.start_date,
        end_date=application.end_date,
        is_half_day=application.is_half_day,
        half_day_period=HalfDayPeriod(application.half_day_period) if application.half_day_period else None,
    )


def _rejection_error(decision: LeaveDecision) -> AppError:
    """Translate a rejected decision into the error surfaced to the caller."""
    reason = decision.rejection_reason
    if reason is None:
        return AppError("Leave request was not accepted", status_code=400)
    message = f"{reason.value}: {_REJECTION_MESSAGES[reason]}"
    conflict = decision.conflicting_leave
    if conflict is not None:
        message += f" ({conflict.start_date.isoformat()} to {conflict.end_date.isoformat()}, {conflict.status.value})"
    return LeaveRejectedError(reason.value, message, conflict=conflict is not None)


def _ensure_self_or_hr(auth: AuthContext, employee_id: uuid.UUID, action: str) -> None:
    if not auth.is_hr and auth.user_id != employee_id:
        raise AppError(f"Not authorized to {action} leave for another employee", status_code=403)


async def _get_leave_or_404(session: AsyncSession, leave_id: uuid.UUID) -> LeaveApplication:
    """Fetch a leave application by ID. Raises 404 if not found."""
    result = await session.execute(select(LeaveApplication).where(col(LeaveApplication.id) == leave_id))
    application = result.scalar_one_or_none()
    if application is None:
        raise AppError("Leave application not found", status_code=404)
    return application


def _restore_booking(balance: LeaveBalance, application: LeaveApplication) -> None:
    """Undo exactly what approval booked for this application."""
    leave_type = LeaveTypeKey(application.leave_type_key)
    if leave_type == LeaveTypeKey.COMPENSATORY:
        balance.comp_off_balance_days += application.days_count
    elif leave_type != LeaveTypeKey.BIRTHDAY:
        # LOP days were never deducted, so only the paid portion comes back.
        balance.used_days -= application.days_count - application.lop_days
    balance.version += 1


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


async def evaluate_leave(
    session: AsyncSession,
    auth: AuthContext,
    payload: LeavePayload,
) -> EvaluationResponse:
    """Preview how a leave request would be decided and costed. Writes nothing."""
    _ensure_self_or_hr(auth, payload.employee_id, "evaluate")
    request = payload.to_leave_request()
    context = await build_leave_context(session, payload.employee_id, request.start_date)
    decision = evaluate(request, context)
    return EvaluationResponse(decision=decision, covered_dates=covered_dates(request))


async def submit_leave(
    session: AsyncSession,
    auth: AuthContext,
    payload: LeavePayload,
) -> LeaveResponse:
    """Submit a leave application as PENDING.

    Flow:
    1. Lock the employee's balance row (serialises concurrent submissions)
    2. Re-read the leave context inside this transaction
    3. Evaluate; a rejection aborts with the reason
    4. Persist the application with its day count and LOP days
    5. Write audit log and commit
    """
    _ensure_self_or_hr(auth, payload.employee_id, "submit")
    request = payload.to_leave_request()

    balance = await _get_or_create_balance_for_update(session, payload.employee_id)
    context = await build_leave_context(session, payload.employee_id, request.start_date, balance=balance)
    decision = evaluate(request, context)
    if not decision.accepted:
        raise _rejection_error(decision)

    application = LeaveApplication(
        employee_id=request.employee_id,
        leave_type_key=request.leave_type_key.value,
        start_date=request.start_date,
        end_date=request.end_date,
        is_half_day=request.is_half_day,
        half_day_period=request.half_day_period.value if request.half_day_period else None,
        days_count=decision.days_requested,
        lop_days=decision.days_as_loss_of_pay,
        reason=payload.reason,
        status=LeaveStatus.PENDING.value,
        applied_at=datetime.now(UTC),
    )
    session.add(application)
    await session.flush()

    await write_audit_log(
        session,
        actor_id=auth.user_id,
        entity_type=AuditEntityType.LEAVE_APPLICATION,
        entity_id=application.id,
        action=AuditAction.SUBMIT,
        after_json=model_to_audit_dict(application),
    )

    await session.commit()
    await session.refresh(application)
    logger.info(
        "Leave %s submitted for employee=%s: %s days, %s LOP",
        application.id,
        application.employee_id,
        application.days_count,
        application.lop_days,
    )
    return _build_leave_response(application)


async def approve_leave(
    session: AsyncSession,
    auth: AuthContext,
    leave_id: uuid.UUID,
    payload: DecisionPayload | None = None,
) -> LeaveResponse:
    """Approve a pending application and book its cost.

    The allocation is recomputed against the current balance, since other
    leave may have been approved after this one was submitted. Ordinary
    leave adds its paid days to used days; compensatory leave consumes the
    comp-off counter; birthday leave books nothing.
    """
    application = await _get_leave_or_404(session, leave_id)
    if application.status != LeaveStatus.PENDING.value:
        raise AppError("Only pending leave can be approved", status_code=400)

    balance = await _get_or_create_balance_for_update(session, application.employee_id)
    context = await build_leave_context(
        session,
        application.employee_id,
        application.start_date,
        balance=balance,
        exclude_leave_id=application.id,
    )
    decision = evaluate(_to_leave_request(application), context)
    if not decision.accepted:
        raise _rejection_error(decision)

    before_dict = model_to_audit_dict(application)
    leave_type = LeaveTypeKey(application.leave_type_key)
    if leave_type == LeaveTypeKey.COMPENSATORY:
        balance.comp_off_balance_days -= application.days_count
    elif leave_type != LeaveTypeKey.BIRTHDAY:
        application.lop_days = decision.days_as_loss_of_pay
        balance.used_days += application.days_count - application.lop_days
    balance.version += 1

    application.status = LeaveStatus.APPROVED.value
    application.decided_at = datetime.now(UTC)
    application.decided_by = auth.user_id
    application.decision_note = payload.note if payload else None

    await session.flush()

    await write_audit_log(
        session,
        actor_id=auth.user_id,
        entity_type=AuditEntityType.LEAVE_APPLICATION,
        entity_id=application.id,
        action=AuditAction.APPROVE,
        before_json=before_dict,
        after_json=model_to_audit_dict(application),
    )

    await session.commit()
    await session.refresh(application)
    logger.info("Leave %s approved by %s", application.id, auth.user_id)
    return _build_leave_response(application)


async def reject_leave(
    session: AsyncSession,
    auth: AuthContext,
    leave_id: uuid.UUID,
    payload: DecisionPayload | None = None,
) -> LeaveResponse:
    """Reject a pending application. Nothing was booked, so nothing is restored."""
    application = await _get_leave_or_404(session, leave_id)
    if application.status != LeaveStatus.PENDING.value:
        raise AppError("Only pending leave can be rejected", status_code=400)

    before_dict = model_to_audit_dict(application)
    application.status = LeaveStatus.REJECTED.value
    application.decided_at = datetime.now(UTC)
    application.decided_by = auth.user_id
    application.decision_note = payload.note if payload else None

    await session.flush()

    await write_audit_log(
        session,
        actor_id=auth.user_id,
        entity_type=AuditEntityType.LEAVE_APPLICATION,
        entity_id=application.id,
        action=AuditAction.REJECT,
        before_json=before_dict,
        after_json=model_to_audit_dict(application),
    )

    await session.commit()
    await session.refresh(application)
    logger.info("Leave %s rejected by %s", application.id, auth.user_id)
    return _build_leave_response(application)


async def withdraw_leave(
    session: AsyncSession,
    auth: AuthContext,
    leave_id: uuid.UUID,
) -> LeaveResponse:
    """Withdraw a pending or approved application.

    The employee who owns the application or HR can withdraw. Withdrawing
    approved leave restores what its approval booked.
    """
    application = await _get_leave_or_404(session, leave_id)
    _ensure_self_or_hr(auth, application.employee_id, "withdraw")

    if application.status not in (LeaveStatus.PENDING.value, LeaveStatus.APPROVED.value):
        raise AppError("Only pending or approved leave can be withdrawn", status_code=400)

    before_dict = model_to_audit_dict(application)
    if application.status == LeaveStatus.APPROVED.value:
        balance = await _get_or_create_balance_for_update(session, application.employee_id)
        _restore_booking(balance, application)

    application.status = LeaveStatus.WITHDRAWN.value
    application.decided_at = datetime.now(UTC)
    application.decided_by = auth.user_id

    await session.flush()

    await write_audit_log(
        session,
        actor_id=auth.user_id,
        entity_type=AuditEntityType.LEAVE_APPLICATION,
        entity_id=application.id,
        action=AuditAction.WITHDRAW,
        before_json=before_dict,
        after_json=model_to_audit_dict(application),
    )

    await session.commit()
    await session.refresh(application)
    logger.info("Leave %s withdrawn by %s", application.id, auth.user_id)
    return _build_leave_response(application)


async def get_leave(
    session: AsyncSession,
    auth: AuthContext,
    leave_id: uuid.UUID,
) -> LeaveResponse:
    """Get a single leave application."""
    application = await _get_leave_or_404(session, leave_id)
    _ensure_self_or_hr(auth, application.employee_id, "view")
    return _build_leave_response(application)


async def list_leaves(
    session: AsyncSession,
    auth: AuthContext,
    employee_id: uuid.UUID | None = None,
    status_filter: str | None = None,
    offset: int = 0,
    limit: int = 50,
) -> LeaveListResponse:
    """List leave applications, newest start date first.

    Employees only ever see their own applications.
    """
    if not auth.is_hr:
        employee_id = auth.user_id

    base_filters = []
    if employee_id is not None:
        base_filters.append(col(LeaveApplication.employee_id) == employee_id)
    if status_filter is not None:
        base_filters.append(col(LeaveApplication.status) == status_filter)

    count_result = await session.execute(select(func.count()).select_from(LeaveApplication).where(*base_filters))
    total = count_result.scalar_one()

    result = await session.execute(
        select(LeaveApplication)
        .where(*base_filters)
        .order_by(col(LeaveApplication.start_date).desc(), col(LeaveApplication.created_at).desc())
        .offset(offset)
        .limit(limit)
    )
    applications = list(result.scalars().all())

    return LeaveListResponse(
        items=[_build_leave_response(a) for a in applications],
        total=total,
    )
