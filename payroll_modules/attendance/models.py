"""
Attendance Domain Models (``payroll_modules.attendance.models``).

Responsibility
--------------
Frozen dataclass value objects for half-day attendance sessions, the
per-day classification derived from them, and the monthly
``AttendanceCalculation`` aggregate.

Architecture position
---------------------
**Modules layer** -- pure data definitions with ZERO I/O.  Consumed by
``payroll_engines.attendance`` and by ``AttendanceService``.

Invariants enforced
-------------------
* All models are ``frozen=True``.
* Day, hour and minute counters on ``AttendanceCalculation`` are
  ``Decimal`` -- NEVER ``float``.
* At most one session per (employee, date, slot); enforced by the
  ``uq_attendance_session_slot`` constraint on the ORM table.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from uuid import UUID


class SessionSlot(Enum):
    """Half-day unit of attendance tracking."""
    MORNING = "MORNING"
    AFTERNOON = "AFTERNOON"


class SessionStatus(Enum):
    """Status tag carried by one session record."""
    FULL = "FULL"
    PARTIAL = "PARTIAL"
    REWARD = "REWARD"
    LEAVE_FULL = "LEAVE_FULL"
    LEAVE_HALF = "LEAVE_HALF"
    ABSENT = "ABSENT"


WORKED_STATUSES = frozenset({SessionStatus.FULL, SessionStatus.PARTIAL})


class DayStatus(Enum):
    """Merged classification of both slots for one calendar date."""
    FULL_DAY = "FULL_DAY"
    HALF_DAY_AM = "HALF_DAY_AM"
    HALF_DAY_PM = "HALF_DAY_PM"
    LEAVE_FULL = "LEAVE_FULL"
    LEAVE_HALF_AM = "LEAVE_HALF_AM"
    LEAVE_HALF_PM = "LEAVE_HALF_PM"
    REWARD = "REWARD"
    ABSENT = "ABSENT"
    REST_DAY = "REST_DAY"


@dataclass(frozen=True)
class AttendanceSessionRecord:
    """One observed (or synthetic) half-day session."""
    id: UUID
    employee_id: UUID
    session_date: date
    slot: SessionSlot
    status: SessionStatus
    check_in: datetime | None = None
    check_out: datetime | None = None
    duration_minutes: int = 0
    flagged_for_review: bool = False


@dataclass(frozen=True)
class DayAttendanceSummary:
    """One calendar date's classification.  Derived, never stored."""
    day: date
    is_work_day: bool
    day_status: DayStatus
    worked_minutes: int
    expected_minutes: int
    morning: SessionStatus | None = None
    afternoon: SessionStatus | None = None


@dataclass(frozen=True)
class AttendanceCalculation:
    """Monthly attendance totals for one employee."""
    employee_id: UUID
    year: int
    month: int
    total_worked_days: Decimal
    total_worked_hours: Decimal
    total_worked_minutes: int
    expected_work_days: int
    expected_work_hours: Decimal
    absent_days: Decimal
    absent_hours: Decimal
    partial_days: Decimal
    full_days: Decimal
    overtime_hours: Decimal
    daily_summaries: tuple[DayAttendanceSummary, ...] = field(default_factory=tuple)

    @property
    def counted_days(self) -> Decimal:
        """full + partial/2 + absent; never exceeds expected_work_days."""
        return self.full_days + self.partial_days * Decimal("0.5") + self.absent_days
