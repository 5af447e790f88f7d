from __future__ import annotations

from typing import TYPE_CHECKING

from app.models.enums import LeaveTypeKey, RejectionReason

if TYPE_CHECKING:
    from decimal import Decimal

    from app.schemas.leave import LeaveContext, LeaveRequest


def _validate_birthday(request: LeaveRequest, context: LeaveContext) -> RejectionReason | None:
    birth_date = context.employee_birth_date
    if birth_date is None:
        return RejectionReason.MISSING_BIRTH_DATE
    if (request.start_date.month, request.start_date.day) != (birth_date.month, birth_date.day):
        return RejectionReason.NOT_BIRTHDAY
    if request.start_date != request.end_date:
        return RejectionReason.MULTI_DAY_NOT_ALLOWED
    if request.is_half_day:
        return RejectionReason.HALF_DAY_NOT_ALLOWED
    return None


def _validate_compensatory(context: LeaveContext, days_requested: Decimal) -> RejectionReason | None:
    balance = context.comp_off_balance_days
    if balance <= 0 or days_requested > balance:
        return RejectionReason.INSUFFICIENT_COMP_BALANCE
    return None


def validate_special(
    request: LeaveRequest,
    context: LeaveContext,
    days_requested: Decimal,
) -> RejectionReason | None:
    """Check the eligibility rules of birthday and compensatory-off leave.

    Returns the first failing reason, or None when the request is eligible.
    Ordinary leave types always pass.
    """
    if request.leave_type_key == LeaveTypeKey.BIRTHDAY:
        return _validate_birthday(request, context)
    if request.leave_type_key == LeaveTypeKey.COMPENSATORY:
        return _validate_compensatory(context, days_requested)
    return None
