"""
Leave Module (``payroll_modules.leave``).

Leave requests (PENDING -> APPROVED | REJECTED), the monthly
``LeaveSummary`` used by salary computation, and the yearly
``LeaveBalance`` against the annual allowance.
"""

from payroll_modules.leave.models import (
    ANNUAL_LEAVE_TYPES,
    PAID_LEAVE_TYPES,
    LeaveBalance,
    LeaveRecord,
    LeaveStatus,
    LeaveSummary,
    LeaveType,
)

__all__ = [
    "ANNUAL_LEAVE_TYPES",
    "PAID_LEAVE_TYPES",
    "LeaveBalance",
    "LeaveRecord",
    "LeaveStatus",
    "LeaveSummary",
    "LeaveType",
]
