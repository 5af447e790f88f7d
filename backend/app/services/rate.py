from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import func, select
from sqlmodel import col

from app.models.enums import AuditAction, AuditEntityType, EmploymentTerm
from app.models.rate import EmploymentTermLeaveRate
from app.schemas.rate import LeaveRateListResponse, LeaveRateResponse
from app.services.audit import model_to_audit_dict, write_audit_log

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from app.schemas.auth import AuthContext
    from app.schemas.rate import UpsertLeaveRatePayload


def _build_rate_response(rate: EmploymentTermLeaveRate) -> LeaveRateResponse:
    return LeaveRateResponse(
        id=rate.id,
        employment_term=EmploymentTerm(rate.employment_term),
        leave_rate=rate.leave_rate,
        description=rate.description,
        created_at=rate.created_at,
    )


async def _get_rate_row(session: AsyncSession, term: EmploymentTerm) -> EmploymentTermLeaveRate | None:
    result = await session.execute(
        select(EmploymentTermLeaveRate).where(col(EmploymentTermLeaveRate.employment_term) == term.value)
    )
    return result.scalar_one_or_none()


async def get_term_rate(session: AsyncSession, term: EmploymentTerm | None) -> Decimal:
    """Monthly rate for an employment term; 0 when the term or its row is missing."""
    if term is None:
        return Decimal(0)
    rate = await _get_rate_row(session, term)
    return rate.leave_rate if rate is not None else Decimal(0)


async def list_rates(session: AsyncSession) -> LeaveRateListResponse:
    """List all employment-term rates ordered by term."""
    count_result = await session.execute(select(func.count()).select_from(EmploymentTermLeaveRate))
    total = count_result.scalar_one()

    result = await session.execute(
        select(EmploymentTermLeaveRate).order_by(col(EmploymentTermLeaveRate.employment_term))
    )
    return LeaveRateListResponse(
        items=[_build_rate_response(r) for r in result.scalars().all()],
        total=total,
    )


async def upsert_rate(
    session: AsyncSession,
    auth: AuthContext,
    term: EmploymentTerm,
    payload: UpsertLeaveRatePayload,
) -> LeaveRateResponse:
    """Create or update the monthly rate of an employment term."""
    rate = await _get_rate_row(session, term)
    before_dict = model_to_audit_dict(rate) if rate is not None else None

    if rate is None:
        rate = EmploymentTermLeaveRate(employment_term=term.value, leave_rate=payload.leave_rate)
        session.add(rate)
        action = AuditAction.CREATE
    else:
        rate.leave_rate = payload.leave_rate
        action = AuditAction.UPDATE
    if payload.description is not None:
        rate.description = payload.description

    await session.flush()

    await write_audit_log(
        session,
        actor_id=auth.user_id,
        entity_type=AuditEntityType.LEAVE_RATE,
        entity_id=term.value,
        action=action,
        before_json=before_dict,
        after_json=model_to_audit_dict(rate),
    )

    await session.commit()
    await session.refresh(rate)
    return _build_rate_response(rate)
