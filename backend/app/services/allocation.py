from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.schemas.leave import LeaveContext

_ZERO = Decimal(0)


@dataclass(frozen=True)
class Allocation:
    """How a requested day count is paid for."""

    from_balance: Decimal
    from_rate: Decimal
    as_loss_of_pay: Decimal


def remaining_monthly_rate(context: LeaveContext) -> Decimal:
    """Monthly rate still available after approved leave earlier this month."""
    return max(_ZERO, context.monthly_accrual_rate - context.month_to_date_non_lop_days)


def allocate(days_requested: Decimal, context: LeaveContext) -> Allocation:
    """Split requested days into balance, monthly-rate and loss-of-pay buckets.

    Banked balance is spent first, then whatever is left of this month's
    accrual rate; the remainder is loss of pay. A negative balance
    contributes nothing and is never borrowed against.
    """
    from_balance = max(_ZERO, min(context.remaining_balance_days, days_requested))
    after_balance = days_requested - from_balance
    from_rate = max(_ZERO, min(remaining_monthly_rate(context), after_balance))
    as_loss_of_pay = days_requested - from_balance - from_rate
    return Allocation(from_balance=from_balance, from_rate=from_rate, as_loss_of_pay=as_loss_of_pay)
