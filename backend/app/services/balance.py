from __future__ import annotations

import logging
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import func, select
from sqlmodel import col

from app.exceptions import AppError
from app.models.balance import LeaveBalance, LeaveBalanceAdjustment
from app.models.enums import AdjustmentTarget, AuditAction, AuditEntityType
from app.schemas.balance import AdjustmentListResponse, AdjustmentResponse, BalanceResponse
from app.services.audit import model_to_audit_dict, write_audit_log
from app.services.employee import get_employee_service
from app.services.rate import get_term_rate

if TYPE_CHECKING:
    import uuid

    from sqlalchemy.ext.asyncio import AsyncSession

    from app.schemas.auth import AuthContext
    from app.schemas.balance import CreateAdjustmentRequest, SetLeaveRatePayload

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


async def _get_balance(session: AsyncSession, employee_id: uuid.UUID) -> LeaveBalance | None:
    result = await session.execute(select(LeaveBalance).where(col(LeaveBalance.employee_id) == employee_id))
    return result.scalar_one_or_none()


async def _get_or_create_balance_for_update(session: AsyncSession, employee_id: uuid.UUID) -> LeaveBalance:
    """Get the employee's balance row with a FOR UPDATE lock, creating it if absent."""
    result = await session.execute(
        select(LeaveBalance).where(col(LeaveBalance.employee_id) == employee_id).with_for_update()
    )
    balance = result.scalar_one_or_none()

    if balance is None:
        balance = LeaveBalance(employee_id=employee_id)
        session.add(balance)
        await session.flush()

    return balance


async def resolve_monthly_rate(
    session: AsyncSession,
    employee_id: uuid.UUID,
    balance: LeaveBalance | None,
) -> Decimal:
    """Employee override first, then the employment-term default, else 0."""
    if balance is not None and balance.rate_of_leave is not None:
        return balance.rate_of_leave
    employee = await get_employee_service().get_employee(employee_id)
    if employee is None:
        return Decimal(0)
    return await get_term_rate(session, employee.employment_term)


async def _build_balance_response(
    session: AsyncSession,
    employee_id: uuid.UUID,
    balance: LeaveBalance | None,
) -> BalanceResponse:
    rate = await resolve_monthly_rate(session, employee_id, balance)
    if balance is None:
        return BalanceResponse(
            employee_id=employee_id,
            allocated_days=Decimal(0),
            used_days=Decimal(0),
            remaining_days=Decimal(0),
            rate_of_leave=None,
            effective_monthly_rate=rate,
            comp_off_balance_days=Decimal(0),
            updated_at=None,
        )
    return BalanceResponse(
        employee_id=employee_id,
        allocated_days=balance.allocated_days,
        used_days=balance.used_days,
        remaining_days=balance.remaining_days,
        rate_of_leave=balance.rate_of_leave,
        effective_monthly_rate=rate,
        comp_off_balance_days=balance.comp_off_balance_days,
        updated_at=balance.updated_at,
    )


def _build_adjustment_response(adjustment: LeaveBalanceAdjustment) -> AdjustmentResponse:
    return AdjustmentResponse(
        id=adjustment.id,
        employee_id=adjustment.employee_id,
        target=AdjustmentTarget(adjustment.target),
        amount_days=adjustment.amount_days,
        reason=adjustment.reason,
        previous_days=adjustment.previous_days,
        new_days=adjustment.new_days,
        adjusted_by=adjustment.adjusted_by,
        created_at=adjustment.created_at,
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


async def get_balance(session: AsyncSession, employee_id: uuid.UUID) -> BalanceResponse:
    """Get an employee's leave counters. Employees without a row read as zero."""
    balance = await _get_balance(session, employee_id)
    return await _build_balance_response(session, employee_id, balance)


async def create_adjustment(
    session: AsyncSession,
    auth: AuthContext,
    payload: CreateAdjustmentRequest,
) -> BalanceResponse:
    """Credit or debit an employee's leave balance or comp-off counter.

    Leave-balance adjustments change allocated days and may drive the
    remaining balance negative. The comp-off counter may not go below zero.
    """
    balance = await _get_or_create_balance_for_update(session, payload.employee_id)
    before_dict = model_to_audit_dict(balance)

    if payload.target == AdjustmentTarget.COMP_OFF:
        previous = balance.comp_off_balance_days
        new_comp_off = previous + payload.amount_days
        if new_comp_off < 0:
            raise AppError("Adjustment would make the comp-off balance negative", status_code=400)
        balance.comp_off_balance_days = new_comp_off
    else:
        previous = balance.allocated_days
        balance.allocated_days += payload.amount_days
    balance.version += 1

    adjustment = LeaveBalanceAdjustment(
        employee_id=payload.employee_id,
        target=payload.target.value,
        amount_days=payload.amount_days,
        reason=payload.reason,
        previous_days=previous,
        new_days=previous + payload.amount_days,
        adjusted_by=auth.user_id,
    )
    session.add(adjustment)
    await session.flush()

    after_dict = model_to_audit_dict(balance)
    after_dict["adjustment"] = {
        "id": str(adjustment.id),
        "target": payload.target.value,
        "amount_days": str(payload.amount_days),
        "reason": payload.reason,
    }
    await write_audit_log(
        session,
        actor_id=auth.user_id,
        entity_type=AuditEntityType.LEAVE_BALANCE,
        entity_id=payload.employee_id,
        action=AuditAction.ADJUST,
        before_json=before_dict,
        after_json=after_dict,
    )

    await session.commit()
    await session.refresh(balance)
    logger.info(
        "Adjusted %s for employee=%s by %s", payload.target.value, payload.employee_id, payload.amount_days
    )
    return await _build_balance_response(session, payload.employee_id, balance)


async def set_leave_rate(
    session: AsyncSession,
    auth: AuthContext,
    employee_id: uuid.UUID,
    payload: SetLeaveRatePayload,
) -> BalanceResponse:
    """Set or clear an employee's monthly leave rate override."""
    balance = await _get_or_create_balance_for_update(session, employee_id)
    before_dict = model_to_audit_dict(balance)

    balance.rate_of_leave = payload.rate_of_leave
    balance.version += 1

    await session.flush()

    await write_audit_log(
        session,
        actor_id=auth.user_id,
        entity_type=AuditEntityType.LEAVE_BALANCE,
        entity_id=employee_id,
        action=AuditAction.UPDATE,
        before_json=before_dict,
        after_json=model_to_audit_dict(balance),
    )

    await session.commit()
    await session.refresh(balance)
    return await _build_balance_response(session, employee_id, balance)


async def list_adjustments(
    session: AsyncSession,
    employee_id: uuid.UUID,
    offset: int = 0,
    limit: int = 50,
) -> AdjustmentListResponse:
    """List an employee's balance adjustments, newest first."""
    employee_filter = col(LeaveBalanceAdjustment.employee_id) == employee_id

    count_result = await session.execute(
        select(func.count()).select_from(LeaveBalanceAdjustment).where(employee_filter)
    )
    total = count_result.scalar_one()

    result = await session.execute(
        select(LeaveBalanceAdjustment)
        .where(employee_filter)
        .order_by(col(LeaveBalanceAdjustment.created_at).desc())
        .offset(offset)
        .limit(limit)
    )
    return AdjustmentListResponse(
        items=[_build_adjustment_response(a) for a in result.scalars().all()],
        total=total,
    )
