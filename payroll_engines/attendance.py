"""
Attendance Aggregation Engine (``payroll_engines.attendance``).

Responsibility
--------------
Pure functions turning one employee's half-day session records for a
month into a per-day classification and the monthly
``AttendanceCalculation`` totals.

Architecture position
---------------------
**Engines layer** -- pure functional core.  ZERO I/O, ZERO database,
ZERO clock reads.  Imports only the kernel calendar and the attendance
value types.

Invariants enforced
-------------------
* Non-work days are classified REST_DAY and never counted, whatever
  sessions they carry.
* ``full_days + partial_days * 0.5 + absent_days <= expected_work_days``.
* Day summaries count worked (FULL/PARTIAL) slots only; the monthly
  aggregate credits leave and reward days with the expected minutes.
* Hours are rounded half-up to 2 decimals once, at the end.

Failure modes
-------------
* ``CorruptSessionRecordError`` when a worked session has its check-out
  before its check-in.  The record is never silently skipped.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from uuid import UUID

from payroll_engines.tracer import traced_engine
from payroll_kernel.db.types import round_money
from payroll_kernel.domain.calendar import WorkCalendarPolicy, iter_month_dates
from payroll_kernel.exceptions import CorruptSessionRecordError
from payroll_modules.attendance.models import (
    WORKED_STATUSES,
    AttendanceCalculation,
    AttendanceSessionRecord,
    DayAttendanceSummary,
    DayStatus,
    SessionSlot,
    SessionStatus,
)

_HALF = Decimal("0.5")
_SIXTY = Decimal(60)


def session_worked_minutes(record: AttendanceSessionRecord | None) -> int:
    """Minutes actually worked in one session.

    FULL/PARTIAL sessions use check-out minus check-in when both stamps
    are present, else the stored ``duration_minutes``.  Every other
    status contributes zero.
    """
    if record is None or record.status not in WORKED_STATUSES:
        return 0
    if record.check_in is not None and record.check_out is not None:
        if record.check_out < record.check_in:
            raise CorruptSessionRecordError(
                str(record.id),
                f"check_out {record.check_out.isoformat()} before "
                f"check_in {record.check_in.isoformat()}",
            )
        return int((record.check_out - record.check_in).total_seconds() // 60)
    return max(record.duration_minutes, 0)


def _status(record: AttendanceSessionRecord | None) -> SessionStatus | None:
    return record.status if record is not None else None


def classify_day(
    day: date,
    morning: AttendanceSessionRecord | None,
    afternoon: AttendanceSessionRecord | None,
    policy: WorkCalendarPolicy,
) -> DayAttendanceSummary:
    """Merge both slots of one date into a single ``DayStatus``.

    Precedence: rest day, reward, full leave (or two half leaves), one
    half leave, both slots worked, one slot worked, absent.
    """
    am, pm = _status(morning), _status(afternoon)
    expected = policy.expected_minutes_per_day

    if not policy.is_work_day(day):
        return DayAttendanceSummary(
            day=day,
            is_work_day=False,
            day_status=DayStatus.REST_DAY,
            worked_minutes=0,
            expected_minutes=0,
            morning=am,
            afternoon=pm,
        )

    am_worked = am in WORKED_STATUSES
    pm_worked = pm in WORKED_STATUSES
    worked = (session_worked_minutes(morning) if am_worked else 0) + (
        session_worked_minutes(afternoon) if pm_worked else 0
    )
    statuses = {am, pm}

    if SessionStatus.REWARD in statuses:
        day_status = DayStatus.REWARD
    elif SessionStatus.LEAVE_FULL in statuses or am == pm == SessionStatus.LEAVE_HALF:
        day_status = DayStatus.LEAVE_FULL
    elif am == SessionStatus.LEAVE_HALF:
        day_status = DayStatus.LEAVE_HALF_AM
    elif pm == SessionStatus.LEAVE_HALF:
        day_status = DayStatus.LEAVE_HALF_PM
    elif am_worked and pm_worked:
        day_status = DayStatus.FULL_DAY
    elif am_worked:
        day_status = DayStatus.HALF_DAY_AM
    elif pm_worked:
        day_status = DayStatus.HALF_DAY_PM
    else:
        day_status = DayStatus.ABSENT

    return DayAttendanceSummary(
        day=day,
        is_work_day=True,
        day_status=day_status,
        worked_minutes=worked,
        expected_minutes=expected,
        morning=am,
        afternoon=pm,
    )


@traced_engine("attendance", "1.0", fingerprint_fields=("employee_id", "year", "month"))
def aggregate_attendance(
    *,
    employee_id: UUID,
    year: int,
    month: int,
    sessions: list[AttendanceSessionRecord] | tuple[AttendanceSessionRecord, ...],
    policy: WorkCalendarPolicy,
) -> AttendanceCalculation:
    """Build the monthly ``AttendanceCalculation`` for one employee.

    Sessions belonging to another employee or dated outside the month
    are ignored.
    """
    by_key: dict[tuple[date, SessionSlot], AttendanceSessionRecord] = {}
    for record in sessions:
        if record.employee_id != employee_id:
            continue
        if record.session_date.year != year or record.session_date.month != month:
            continue
        by_key[(record.session_date, record.slot)] = record

    full_days = Decimal("0")
    partial_days = Decimal("0")
    absent_days = Decimal("0")
    worked_minutes = 0
    overtime_minutes = 0
    summaries: list[DayAttendanceSummary] = []

    for day in iter_month_dates(year, month):
        summary = classify_day(
            day,
            by_key.get((day, SessionSlot.MORNING)),
            by_key.get((day, SessionSlot.AFTERNOON)),
            policy,
        )
        summaries.append(summary)
        status = summary.day_status

        if status == DayStatus.REST_DAY:
            continue
        if status == DayStatus.FULL_DAY:
            full_days += 1
            worked_minutes += summary.worked_minutes
            overtime_minutes += max(summary.worked_minutes - summary.expected_minutes, 0)
        elif status in (DayStatus.HALF_DAY_AM, DayStatus.HALF_DAY_PM):
            partial_days += 1
            worked_minutes += summary.worked_minutes
        elif status in (DayStatus.LEAVE_FULL, DayStatus.REWARD):
            full_days += 1
            worked_minutes += summary.expected_minutes
        elif status in (DayStatus.LEAVE_HALF_AM, DayStatus.LEAVE_HALF_PM):
            full_days += _HALF
            partial_days += _HALF
            worked_minutes += summary.worked_minutes
        else:
            absent_days += 1

    expected_days = policy.count_work_days_in_month(year, month)
    return AttendanceCalculation(
        employee_id=employee_id,
        year=year,
        month=month,
        total_worked_days=full_days + partial_days * _HALF,
        total_worked_hours=round_money(Decimal(worked_minutes) / _SIXTY),
        total_worked_minutes=worked_minutes,
        expected_work_days=expected_days,
        expected_work_hours=Decimal(expected_days) * policy.standard_hours_per_day,
        absent_days=absent_days,
        absent_hours=absent_days * policy.standard_hours_per_day,
        partial_days=partial_days,
        full_days=full_days,
        overtime_hours=round_money(Decimal(overtime_minutes) / _SIXTY),
        daily_summaries=tuple(summaries),
    )
