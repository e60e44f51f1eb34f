"""
Leave Domain Models (``payroll_modules.leave.models``).

Responsibility
--------------
Frozen dataclass value objects for leave requests and the two derived
aggregates: the monthly ``LeaveSummary`` and the yearly ``LeaveBalance``.

Architecture position
---------------------
**Modules layer** -- pure data definitions with ZERO I/O.

Invariants enforced
-------------------
* All models are ``frozen=True``; durations are ``Decimal`` day counts
  (0.5 for half days).
* ``impact_on_salary`` is derived from the leave type, never supplied.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from uuid import UUID


class LeaveType(Enum):
    """Leave types."""
    PAID = "PAID"
    UNPAID = "UNPAID"
    MATERNITE = "MATERNITE"
    MALADIE = "MALADIE"
    PREAVIS = "PREAVIS"
    REWARD = "REWARD"


class LeaveStatus(Enum):
    """Leave request lifecycle states."""
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


# Leave types that do not reduce salary.
PAID_LEAVE_TYPES = frozenset({
    LeaveType.PAID,
    LeaveType.MATERNITE,
    LeaveType.MALADIE,
    LeaveType.PREAVIS,
    LeaveType.REWARD,
})

# Leave types drawn from the annual allowance.
ANNUAL_LEAVE_TYPES = frozenset({LeaveType.PAID})

# Statuses that block an overlapping request.
ACTIVE_LEAVE_STATUSES = frozenset({LeaveStatus.PENDING, LeaveStatus.APPROVED})


def impacts_salary(leave_type: LeaveType) -> bool:
    return leave_type not in PAID_LEAVE_TYPES


@dataclass(frozen=True)
class LeaveRecord:
    """One leave request."""
    id: UUID
    employee_id: UUID
    leave_type: LeaveType
    start_date: date
    end_date: date
    status: LeaveStatus
    duration_days: Decimal
    is_half_day: bool = False
    half_day_slot: str | None = None
    impact_on_salary: bool = False
    reason: str | None = None
    approved_by_id: UUID | None = None
    approved_at: datetime | None = None
    rejection_reason: str | None = None

    def overlaps(self, start: date, end: date) -> bool:
        return self.start_date <= end and self.end_date >= start


@dataclass(frozen=True)
class LeaveSummary:
    """Approved leave days for one employee/month, clipped to the month."""
    employee_id: UUID
    year: int
    month: int
    paid_days: Decimal = Decimal("0")
    unpaid_days: Decimal = Decimal("0")
    sick_days: Decimal = Decimal("0")
    maternity_days: Decimal = Decimal("0")
    other_days: Decimal = Decimal("0")
    total_days: Decimal = Decimal("0")
    salary_deduction_days: Decimal = Decimal("0")


@dataclass(frozen=True)
class LeaveBalance:
    """Annual-leave position for one employee/year."""
    employee_id: UUID
    year: int
    annual_allowance: Decimal
    used: Decimal
    pending: Decimal
    remaining: Decimal
    by_type: dict[LeaveType, Decimal] = field(default_factory=dict)
