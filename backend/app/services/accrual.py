"""Monthly leave accrual: credit each employee's monthly rate to their balance."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import date, datetime
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo

from sqlalchemy import select
from sqlmodel import col

from app.config import get_settings
from app.exceptions import AppError
from app.models.accrual import AccrualSchedule
from app.models.base import now_utc
from app.models.enums import AuditAction, AuditEntityType
from app.schemas.accrual import AccrualScheduleResponse
from app.services.audit import model_to_audit_dict, write_audit_log
from app.services.balance import _get_or_create_balance_for_update, resolve_monthly_rate
from app.services.employee import get_employee_service

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from app.schemas.accrual import AccrualSchedulePayload
    from app.schemas.auth import AuthContext

logger = logging.getLogger(__name__)

# Accrual runs are recorded against this actor in the audit log.
SYSTEM_ACTOR_ID = uuid.UUID(int=0)


@dataclass
class AccrualRunResult:
    """Summary of a monthly accrual run."""

    target_date: date
    processed: int = 0
    accrued: int = 0
    skipped: int = 0
    errors: int = 0
    skipped_reason: str | None = None


def regional_today() -> date:
    """Today's date in the organisation's calendar."""
    return datetime.now(ZoneInfo(get_settings().timezone)).date()


def _month_key(target_date: date) -> str:
    return f"{target_date.year:04d}-{target_date.month:02d}"


def is_accrual_date(target_date: date) -> bool:
    """Accruals post on the first day of each month."""
    return target_date.day == 1


# ---------------------------------------------------------------------------
# Schedule
# ---------------------------------------------------------------------------


def _build_schedule_response(schedule: AccrualSchedule) -> AccrualScheduleResponse:
    return AccrualScheduleResponse(
        id=schedule.id,
        is_active=schedule.is_active,
        end_date=schedule.end_date,
        last_run_at=schedule.last_run_at,
        updated_by=schedule.updated_by,
        updated_at=schedule.updated_at,
    )


async def _latest_schedule(session: AsyncSession, *, active_only: bool) -> AccrualSchedule | None:
    query = select(AccrualSchedule)
    if active_only:
        query = query.where(col(AccrualSchedule.is_active).is_(True))
    result = await session.execute(query.order_by(col(AccrualSchedule.created_at).desc()).limit(1))
    return result.scalar_one_or_none()


async def get_schedule(session: AsyncSession) -> AccrualScheduleResponse:
    """Get the accrual schedule. Raises 404 if none was configured."""
    schedule = await _latest_schedule(session, active_only=False)
    if schedule is None:
        raise AppError("Accrual schedule not configured", status_code=404)
    return _build_schedule_response(schedule)


async def upsert_schedule(
    session: AsyncSession,
    auth: AuthContext,
    payload: AccrualSchedulePayload,
) -> AccrualScheduleResponse:
    """Create the accrual schedule or update the current one."""
    schedule = await _latest_schedule(session, active_only=False)
    before_dict = model_to_audit_dict(schedule) if schedule is not None else None

    if schedule is None:
        schedule = AccrualSchedule(end_date=payload.end_date)
        session.add(schedule)
        action = AuditAction.CREATE
    else:
        action = AuditAction.UPDATE
    schedule.is_active = payload.is_active
    schedule.end_date = payload.end_date
    schedule.updated_by = auth.user_id

    await session.flush()

    await write_audit_log(
        session,
        actor_id=auth.user_id,
        entity_type=AuditEntityType.ACCRUAL_SCHEDULE,
        entity_id=schedule.id,
        action=action,
        before_json=before_dict,
        after_json=model_to_audit_dict(schedule),
    )

    await session.commit()
    await session.refresh(schedule)
    logger.info("Accrual schedule set: active=%s end_date=%s", schedule.is_active, schedule.end_date)
    return _build_schedule_response(schedule)


def _schedule_block_reason(schedule: AccrualSchedule | None, target_date: date) -> str | None:
    """Why a scheduled run may not post on target_date, or None when it may."""
    if schedule is None:
        return "No active accrual schedule"
    if target_date > schedule.end_date:
        return f"Accrual schedule ended on {schedule.end_date.isoformat()}"
    return None


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------


async def _accrue_employee(
    session: AsyncSession,
    employee_id: uuid.UUID,
    target_date: date,
    actor_id: uuid.UUID,
) -> bool:
    """Credit one employee's monthly rate. Returns False when nothing was posted."""
    month_key = _month_key(target_date)
    balance = await _get_or_create_balance_for_update(session, employee_id)
    if balance.last_accrued_month == month_key:
        return False

    rate = await resolve_monthly_rate(session, employee_id, balance)
    if rate <= 0:
        return False

    before_dict = model_to_audit_dict(balance)
    balance.allocated_days += rate
    balance.last_accrued_month = month_key
    balance.version += 1
    await session.flush()

    await write_audit_log(
        session,
        actor_id=actor_id,
        entity_type=AuditEntityType.LEAVE_BALANCE,
        entity_id=employee_id,
        action=AuditAction.ALLOCATE,
        before_json=before_dict,
        after_json=model_to_audit_dict(balance),
    )
    await session.flush()
    return True


async def run_monthly_accrual(
    session: AsyncSession,
    target_date: date | None = None,
    *,
    actor_id: uuid.UUID = SYSTEM_ACTOR_ID,
    force: bool = False,
) -> AccrualRunResult:
    """Credit the monthly leave rate to every known employee.

    Unless ``force`` is set, posts only on the first of the month and only
    while an active accrual schedule has not passed its end date. Idempotent
    per employee and month. Each employee posts inside its own savepoint, so
    one failure leaves no partial credit and the run continues.
    """
    if target_date is None:
        target_date = regional_today()
    result = AccrualRunResult(target_date=target_date)

    schedule = await _latest_schedule(session, active_only=True)
    if not force:
        if not is_accrual_date(target_date):
            result.skipped_reason = f"{target_date.isoformat()} is not the first of the month"
        else:
            result.skipped_reason = _schedule_block_reason(schedule, target_date)
        if result.skipped_reason is not None:
            logger.info("Accrual skipped: %s", result.skipped_reason)
            return result

    employees = await get_employee_service().list_employees()
    for employee in employees:
        result.processed += 1
        try:
            async with session.begin_nested():
                posted = await _accrue_employee(session, employee.id, target_date, actor_id)
        except Exception:
            logger.exception("Accrual failed for employee=%s month=%s", employee.id, _month_key(target_date))
            result.errors += 1
            continue
        if posted:
            result.accrued += 1
        else:
            result.skipped += 1

    if schedule is not None:
        schedule.last_run_at = now_utc()

    await session.commit()
    return result
