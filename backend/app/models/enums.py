from __future__ import annotations

import enum


class LeaveTypeKey(enum.StrEnum):
    """Category of a leave request, independent of its display name."""

    ANNUAL = "annual"
    SICK = "sick"
    CASUAL = "casual"
    COMPENSATORY = "compensatory"
    BIRTHDAY = "birthday"
    OTHER = "other"

    @property
    def is_special(self) -> bool:
        """Special types are costed outside the balance/rate/LOP accounting."""
        return self in (LeaveTypeKey.COMPENSATORY, LeaveTypeKey.BIRTHDAY)


class HalfDayPeriod(enum.StrEnum):
    """Which half of the working day a half-day leave covers."""

    FIRST_HALF = "first_half"
    SECOND_HALF = "second_half"


class LeaveStatus(enum.StrEnum):
    """State machine for leave applications."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    WITHDRAWN = "WITHDRAWN"


ACTIVE_LEAVE_STATUSES = frozenset({LeaveStatus.PENDING, LeaveStatus.APPROVED})


class RejectionReason(enum.StrEnum):
    """Why the evaluator refused a leave request."""

    DUPLICATE_LEAVE = "DUPLICATE_LEAVE"
    MISSING_BIRTH_DATE = "MISSING_BIRTH_DATE"
    NOT_BIRTHDAY = "NOT_BIRTHDAY"
    MULTI_DAY_NOT_ALLOWED = "MULTI_DAY_NOT_ALLOWED"
    HALF_DAY_NOT_ALLOWED = "HALF_DAY_NOT_ALLOWED"
    INSUFFICIENT_COMP_BALANCE = "INSUFFICIENT_COMP_BALANCE"


class EmploymentTerm(enum.StrEnum):
    """Employment term types that carry a default monthly leave rate."""

    FULL_TIME = "full_time"
    PART_TIME = "part_time"
    ASSOCIATE = "associate"
    CONTRACT = "contract"
    PROBATION_INTERNSHIP = "probation_internship"


class AdjustmentTarget(enum.StrEnum):
    """Which counter an admin adjustment applies to."""

    LEAVE_BALANCE = "LEAVE_BALANCE"
    COMP_OFF = "COMP_OFF"


class AuditEntityType(enum.StrEnum):
    """Entity type recorded in the audit log."""

    LEAVE_APPLICATION = "LEAVE_APPLICATION"
    LEAVE_BALANCE = "LEAVE_BALANCE"
    LEAVE_RATE = "LEAVE_RATE"
    ACCRUAL_SCHEDULE = "ACCRUAL_SCHEDULE"


class AuditAction(enum.StrEnum):
    """Action recorded in the audit log."""

    CREATE = "CREATE"
    UPDATE = "UPDATE"
    SUBMIT = "SUBMIT"
    APPROVE = "APPROVE"
    REJECT = "REJECT"
    WITHDRAW = "WITHDRAW"
    ADJUST = "ADJUST"
    ALLOCATE = "ALLOCATE"
