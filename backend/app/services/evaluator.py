"""Leave cost evaluation: legality, duplicate detection and LOP proration.

``evaluate`` is pure. It reads a ``LeaveContext`` snapshot and returns a
``LeaveDecision``; persisting the outcome is the caller's job, and callers
that write must re-run it inside the writing transaction rather than reuse
an earlier decision.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.models.enums import RejectionReason
from app.schemas.leave import LeaveDecision
from app.services.allocation import allocate
from app.services.date_window import compute_day_count
from app.services.overlap import find_conflict
from app.services.special_leave import validate_special

if TYPE_CHECKING:
    from app.schemas.leave import LeaveContext, LeaveRequest

logger = logging.getLogger(__name__)


def evaluate(request: LeaveRequest, context: LeaveContext) -> LeaveDecision:
    """Decide whether a leave request is legal and how its days are paid.

    1. Count days (raises ``InvalidRangeError`` on a reversed range).
    2. Reject as DUPLICATE_LEAVE on the first colliding active leave.
    3. Birthday / compensatory leave: reject on ineligibility, otherwise
       accept with every bucket at zero.
    4. Ordinary leave: accept with the balance/rate/LOP split.
    """
    days_requested = compute_day_count(request)

    conflict = find_conflict(request, context.active_leaves)
    if conflict is not None:
        logger.debug(
            "Leave for employee=%s %s..%s collides with leave=%s",
            request.employee_id,
            request.start_date,
            request.end_date,
            conflict.id,
        )
        return LeaveDecision(
            accepted=False,
            rejection_reason=RejectionReason.DUPLICATE_LEAVE,
            days_requested=days_requested,
            conflicting_leave=conflict,
        )

    if request.leave_type_key.is_special:
        reason = validate_special(request, context, days_requested)
        if reason is not None:
            logger.debug("Special leave for employee=%s rejected: %s", request.employee_id, reason)
            return LeaveDecision(accepted=False, rejection_reason=reason, days_requested=days_requested)
        return LeaveDecision(accepted=True, days_requested=days_requested)

    allocation = allocate(days_requested, context)
    logger.debug(
        "Leave for employee=%s: %s days -> balance=%s rate=%s lop=%s",
        request.employee_id,
        days_requested,
        allocation.from_balance,
        allocation.from_rate,
        allocation.as_loss_of_pay,
    )
    return LeaveDecision(
        accepted=True,
        days_requested=days_requested,
        days_from_balance=allocation.from_balance,
        days_from_monthly_rate=allocation.from_rate,
        days_as_loss_of_pay=allocation.as_loss_of_pay,
    )
