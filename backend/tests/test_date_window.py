"""Tests for day counting and covered dates of a leave request."""

from __future__ import annotations

import uuid
from datetime import date
from decimal import Decimal

import pytest

from app.exceptions import AppError, InvalidRangeError
from app.models.enums import HalfDayPeriod, LeaveTypeKey
from app.schemas.leave import LeaveRequest
from app.services.date_window import compute_day_count, covered_dates

EMPLOYEE_ID = uuid.uuid4()


def _request(start: date, end: date, *, half_day: bool = False) -> LeaveRequest:
    return LeaveRequest(
        employee_id=EMPLOYEE_ID,
        leave_type_key=LeaveTypeKey.ANNUAL,
        start_date=start,
        end_date=end,
        is_half_day=half_day,
        half_day_period=HalfDayPeriod.FIRST_HALF if half_day else None,
    )


def test_single_day_counts_one() -> None:
    assert compute_day_count(_request(date(2024, 6, 10), date(2024, 6, 10))) == Decimal(1)


def test_range_is_inclusive() -> None:
    assert compute_day_count(_request(date(2024, 6, 10), date(2024, 6, 14))) == Decimal(5)


def test_range_spanning_month_end() -> None:
    assert compute_day_count(_request(date(2024, 1, 30), date(2024, 2, 2))) == Decimal(4)


def test_weekends_are_not_excluded() -> None:
    """Calendar days count; sandwich/weekend rules are not applied."""
    # 2024-06-14 is a Friday, 2024-06-17 a Monday.
    assert compute_day_count(_request(date(2024, 6, 14), date(2024, 6, 17))) == Decimal(4)


def test_half_day_counts_half() -> None:
    assert compute_day_count(_request(date(2024, 6, 10), date(2024, 6, 10), half_day=True)) == Decimal("0.5")


@pytest.mark.parametrize(
    ("start", "end"),
    [
        (date(2024, 6, 10), date(2024, 6, 20)),
        (date(2024, 6, 10), date(2024, 6, 1)),
    ],
)
def test_half_day_ignores_supplied_range(start: date, end: date) -> None:
    assert compute_day_count(_request(start, end, half_day=True)) == Decimal("0.5")


def test_reversed_range_raises() -> None:
    with pytest.raises(InvalidRangeError, match="before start_date"):
        compute_day_count(_request(date(2024, 6, 12), date(2024, 6, 10)))


def test_invalid_range_is_a_client_error() -> None:
    with pytest.raises(AppError) as exc_info:
        compute_day_count(_request(date(2024, 6, 12), date(2024, 6, 11)))
    assert exc_info.value.status_code == 400


def test_covered_dates_full_range() -> None:
    assert covered_dates(_request(date(2024, 2, 28), date(2024, 3, 1))) == [
        date(2024, 2, 28),
        date(2024, 2, 29),
        date(2024, 3, 1),
    ]


def test_covered_dates_half_day() -> None:
    assert covered_dates(_request(date(2024, 6, 10), date(2024, 6, 10), half_day=True)) == [date(2024, 6, 10)]
