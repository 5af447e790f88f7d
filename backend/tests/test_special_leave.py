"""Tests for birthday and compensatory-off eligibility rules."""

from __future__ import annotations

import uuid
from datetime import date
from decimal import Decimal

import pytest

from app.models.enums import HalfDayPeriod, LeaveTypeKey, RejectionReason
from app.schemas.leave import LeaveContext, LeaveRequest
from app.services.special_leave import validate_special

EMPLOYEE_ID = uuid.uuid4()
BIRTH_DATE = date(2000, 5, 10)


def _request(
    leave_type: LeaveTypeKey,
    start: date,
    end: date | None = None,
    *,
    half_day: bool = False,
) -> LeaveRequest:
    return LeaveRequest(
        employee_id=EMPLOYEE_ID,
        leave_type_key=leave_type,
        start_date=start,
        end_date=end or start,
        is_half_day=half_day,
        half_day_period=HalfDayPeriod.FIRST_HALF if half_day else None,
    )


# ---------------------------------------------------------------------------
# Birthday leave
# ---------------------------------------------------------------------------


def test_birthday_on_birthday_passes() -> None:
    context = LeaveContext(employee_birth_date=BIRTH_DATE)
    request = _request(LeaveTypeKey.BIRTHDAY, date(2024, 5, 10))
    assert validate_special(request, context, Decimal(1)) is None


def test_birthday_without_birth_date() -> None:
    request = _request(LeaveTypeKey.BIRTHDAY, date(2024, 5, 10))
    assert validate_special(request, LeaveContext(), Decimal(1)) == RejectionReason.MISSING_BIRTH_DATE


def test_birthday_on_other_day() -> None:
    context = LeaveContext(employee_birth_date=BIRTH_DATE)
    request = _request(LeaveTypeKey.BIRTHDAY, date(2024, 5, 11))
    assert validate_special(request, context, Decimal(1)) == RejectionReason.NOT_BIRTHDAY


def test_birthday_same_day_other_month() -> None:
    context = LeaveContext(employee_birth_date=BIRTH_DATE)
    request = _request(LeaveTypeKey.BIRTHDAY, date(2024, 6, 10))
    assert validate_special(request, context, Decimal(1)) == RejectionReason.NOT_BIRTHDAY


def test_birthday_spanning_several_days() -> None:
    context = LeaveContext(employee_birth_date=BIRTH_DATE)
    request = _request(LeaveTypeKey.BIRTHDAY, date(2024, 5, 10), date(2024, 5, 11))
    assert validate_special(request, context, Decimal(2)) == RejectionReason.MULTI_DAY_NOT_ALLOWED


def test_birthday_as_half_day() -> None:
    context = LeaveContext(employee_birth_date=BIRTH_DATE)
    request = _request(LeaveTypeKey.BIRTHDAY, date(2024, 5, 10), half_day=True)
    assert validate_special(request, context, Decimal("0.5")) == RejectionReason.HALF_DAY_NOT_ALLOWED


def test_birthday_mismatch_reported_before_multi_day() -> None:
    context = LeaveContext(employee_birth_date=BIRTH_DATE)
    request = _request(LeaveTypeKey.BIRTHDAY, date(2024, 5, 9), date(2024, 5, 10))
    assert validate_special(request, context, Decimal(2)) == RejectionReason.NOT_BIRTHDAY


def test_leap_day_birthday_has_no_match_in_common_years() -> None:
    context = LeaveContext(employee_birth_date=date(2000, 2, 29))
    request = _request(LeaveTypeKey.BIRTHDAY, date(2023, 2, 28))
    assert validate_special(request, context, Decimal(1)) == RejectionReason.NOT_BIRTHDAY


# ---------------------------------------------------------------------------
# Compensatory off
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    ("balance", "days", "expected"),
    [
        (Decimal(2), Decimal(2), None),
        (Decimal(2), Decimal("0.5"), None),
        (Decimal("1.5"), Decimal(2), RejectionReason.INSUFFICIENT_COMP_BALANCE),
        (Decimal(0), Decimal("0.5"), RejectionReason.INSUFFICIENT_COMP_BALANCE),
    ],
)
def test_compensatory_balance(balance: Decimal, days: Decimal, expected: RejectionReason | None) -> None:
    context = LeaveContext(comp_off_balance_days=balance)
    request = _request(LeaveTypeKey.COMPENSATORY, date(2024, 6, 10))
    assert validate_special(request, context, days) == expected


# ---------------------------------------------------------------------------
# Ordinary types
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "leave_type",
    [LeaveTypeKey.ANNUAL, LeaveTypeKey.SICK, LeaveTypeKey.CASUAL, LeaveTypeKey.OTHER],
)
def test_ordinary_types_pass(leave_type: LeaveTypeKey) -> None:
    request = _request(leave_type, date(2024, 6, 10), date(2024, 6, 20))
    assert validate_special(request, LeaveContext(), Decimal(11)) is None
