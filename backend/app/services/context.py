"""Read path: assemble a ``LeaveContext`` snapshot from persisted rows."""

from __future__ import annotations

from calendar import monthrange
from datetime import date, timedelta
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import func, select
from sqlmodel import col

from app.models.enums import ACTIVE_LEAVE_STATUSES, HalfDayPeriod, LeaveStatus, LeaveTypeKey
from app.models.leave import LeaveApplication
from app.schemas.leave import LeaveContext, LeaveRecord
from app.services.balance import _get_balance, resolve_monthly_rate
from app.services.employee import get_employee_service

if TYPE_CHECKING:
    import uuid

    from sqlalchemy.ext.asyncio import AsyncSession

    from app.models.balance import LeaveBalance

_SPECIAL_TYPE_KEYS = [key.value for key in LeaveTypeKey if key.is_special]


def month_bounds(target_date: date) -> tuple[date, date]:
    """Return [first of month, first of next month) around target_date."""
    month_start = target_date.replace(day=1)
    _, days_in_month = monthrange(target_date.year, target_date.month)
    return month_start, month_start + timedelta(days=days_in_month)


def to_leave_record(application: LeaveApplication) -> LeaveRecord:
    """Map a persisted application to the evaluator's record type."""
    return LeaveRecord(
        id=application.id,
        start_date=application.start_date,
        end_date=application.end_date,
        is_half_day=application.is_half_day,
        half_day_period=HalfDayPeriod(application.half_day_period) if application.half_day_period else None,
        status=LeaveStatus(application.status),
    )


async def _month_to_date_non_lop_days(
    session: AsyncSession,
    employee_id: uuid.UUID,
    target_date: date,
    exclude_leave_id: uuid.UUID | None,
) -> Decimal:
    """Sum of paid days of approved ordinary leave starting in target_date's month."""
    month_start, next_month = month_bounds(target_date)
    query = select(
        func.coalesce(func.sum(col(LeaveApplication.days_count) - col(LeaveApplication.lop_days)), 0)
    ).where(
        col(LeaveApplication.employee_id) == employee_id,
        col(LeaveApplication.status) == LeaveStatus.APPROVED.value,
        col(LeaveApplication.leave_type_key).not_in(_SPECIAL_TYPE_KEYS),
        col(LeaveApplication.start_date) >= month_start,
        col(LeaveApplication.start_date) < next_month,
    )
    if exclude_leave_id is not None:
        query = query.where(col(LeaveApplication.id) != exclude_leave_id)

    result = await session.execute(query)
    return Decimal(str(result.scalar_one()))


async def _active_leaves(
    session: AsyncSession,
    employee_id: uuid.UUID,
    exclude_leave_id: uuid.UUID | None,
) -> tuple[LeaveRecord, ...]:
    query = (
        select(LeaveApplication)
        .where(
            col(LeaveApplication.employee_id) == employee_id,
            col(LeaveApplication.status).in_([s.value for s in ACTIVE_LEAVE_STATUSES]),
        )
        .order_by(col(LeaveApplication.start_date), col(LeaveApplication.created_at))
    )
    if exclude_leave_id is not None:
        query = query.where(col(LeaveApplication.id) != exclude_leave_id)

    result = await session.execute(query)
    return tuple(to_leave_record(a) for a in result.scalars().all())


async def build_leave_context(
    session: AsyncSession,
    employee_id: uuid.UUID,
    target_date: date,
    *,
    balance: LeaveBalance | None = None,
    exclude_leave_id: uuid.UUID | None = None,
) -> LeaveContext:
    """Snapshot the employee's leave state for evaluating a request in target_date's month.

    Pass ``balance`` when the caller already holds the row (locked); pass
    ``exclude_leave_id`` to evaluate an existing application against
    everything except itself.
    """
    if balance is None:
        balance = await _get_balance(session, employee_id)

    employee = await get_employee_service().get_employee(employee_id)

    return LeaveContext(
        remaining_balance_days=balance.remaining_days if balance is not None else Decimal(0),
        monthly_accrual_rate=await resolve_monthly_rate(session, employee_id, balance),
        month_to_date_non_lop_days=await _month_to_date_non_lop_days(
            session, employee_id, target_date, exclude_leave_id
        ),
        comp_off_balance_days=balance.comp_off_balance_days if balance is not None else Decimal(0),
        employee_birth_date=employee.birth_date if employee is not None else None,
        active_leaves=await _active_leaves(session, employee_id, exclude_leave_id),
    )
