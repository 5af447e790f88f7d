from sqlmodel import SQLModel

from app.models.accrual import AccrualSchedule
from app.models.audit import AuditLog
from app.models.balance import LeaveBalance, LeaveBalanceAdjustment
from app.models.base import TimestampMixin, UUIDBase
from app.models.enums import (
    AdjustmentTarget,
    AuditAction,
    AuditEntityType,
    EmploymentTerm,
    HalfDayPeriod,
    LeaveStatus,
    LeaveTypeKey,
    RejectionReason,
)
from app.models.leave import LeaveApplication
from app.models.rate import EmploymentTermLeaveRate

__all__ = [
    "AccrualSchedule",
    "AdjustmentTarget",
    "AuditAction",
    "AuditEntityType",
    "AuditLog",
    "EmploymentTerm",
    "EmploymentTermLeaveRate",
    "HalfDayPeriod",
    "LeaveApplication",
    "LeaveBalance",
    "LeaveBalanceAdjustment",
    "LeaveStatus",
    "LeaveTypeKey",
    "RejectionReason",
    "SQLModel",
    "TimestampMixin",
    "UUIDBase",
]
