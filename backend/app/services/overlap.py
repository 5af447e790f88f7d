from __future__ import annotations

from typing import TYPE_CHECKING

from app.models.enums import ACTIVE_LEAVE_STATUSES

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import date

    from app.schemas.leave import LeaveRecord, LeaveRequest


def _window(entry: LeaveRequest | LeaveRecord) -> tuple[date, date]:
    """Inclusive date window; a half-day entry occupies only its start date."""
    if entry.is_half_day:
        return entry.start_date, entry.start_date
    return entry.start_date, entry.end_date


def leaves_overlap(request: LeaveRequest | LeaveRecord, record: LeaveRequest | LeaveRecord) -> bool:
    """Whether two leave entries collide.

    Any intersection of the inclusive windows is a collision. Two half-day
    entries on one date collide even for different periods, and a half-day
    entry collides with any full-day entry covering its date.
    """
    request_start, request_end = _window(request)
    record_start, record_end = _window(record)
    return request_start <= record_end and record_start <= request_end


def find_conflict(request: LeaveRequest, active_leaves: Iterable[LeaveRecord]) -> LeaveRecord | None:
    """Return the first active leave that collides with the request, if any.

    Records that are neither pending nor approved are skipped.
    """
    for record in active_leaves:
        if record.status not in ACTIVE_LEAVE_STATUSES:
            continue
        if leaves_overlap(request, record):
            return record
    return None
