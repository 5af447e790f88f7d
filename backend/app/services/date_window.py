from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal
from typing import TYPE_CHECKING

from app.exceptions import InvalidRangeError

if TYPE_CHECKING:
    from app.schemas.leave import LeaveRequest

HALF_DAY = Decimal("0.5")


def compute_day_count(request: LeaveRequest) -> Decimal:
    """Return the number of leave days a request covers.

    Half-day requests always count 0.5 whatever dates they carry. Full-day
    requests count the inclusive calendar range. Dates must already be in
    the organisation's calendar; no time zone handling happens here.
    """
    if request.is_half_day:
        return HALF_DAY
    if request.end_date < request.start_date:
        raise InvalidRangeError(
            f"end_date {request.end_date.isoformat()} is before start_date {request.start_date.isoformat()}"
        )
    return Decimal((request.end_date - request.start_date).days + 1)


def covered_dates(request: LeaveRequest) -> list[date]:
    """Calendar dates touched by a request, in order."""
    if request.is_half_day:
        return [request.start_date]
    count = int(compute_day_count(request))
    return [request.start_date + timedelta(days=offset) for offset in range(count)]
