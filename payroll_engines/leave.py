"""
Leave Arithmetic Engine (``payroll_engines.leave``).

Responsibility
--------------
Pure functions for leave durations, month clipping, the monthly
``LeaveSummary`` and the yearly ``LeaveBalance``.

Architecture position
---------------------
**Engines layer** -- pure functional core.  ZERO I/O, ZERO clock reads.

Invariants enforced
-------------------
* Duration is 0.5 for a half day, else the number of work days in the
  inclusive range (the same ``is_work_day`` as attendance and salary).
* Only APPROVED records intersecting the month enter the summary.
* ``remaining = annual_allowance - used - pending`` where used/pending
  count annual-leave types only, for leaves starting in the year.
"""

from __future__ import annotations

from collections import defaultdict
from datetime import date
from decimal import Decimal
from uuid import UUID

from payroll_engines.tracer import traced_engine
from payroll_kernel.domain.calendar import WorkCalendarPolicy, month_bounds
from payroll_modules.leave.models import (
    ANNUAL_LEAVE_TYPES,
    LeaveBalance,
    LeaveRecord,
    LeaveStatus,
    LeaveSummary,
    LeaveType,
)

_HALF_DAY = Decimal("0.5")


def leave_duration(
    start: date,
    end: date,
    is_half_day: bool,
    policy: WorkCalendarPolicy,
) -> Decimal:
    """Day count of a leave interval: 0.5 for a half day, else work days."""
    if is_half_day:
        return _HALF_DAY
    return Decimal(policy.count_work_days_between(start, end))


def clip_to_month(start: date, end: date, year: int, month: int) -> tuple[date, date] | None:
    """Intersect [start, end] with the month; None when disjoint."""
    first, last = month_bounds(year, month)
    clipped_start = max(start, first)
    clipped_end = min(end, last)
    if clipped_start > clipped_end:
        return None
    return clipped_start, clipped_end


@traced_engine("leave_summary", "1.0", fingerprint_fields=("employee_id", "year", "month"))
def summarize_month_leaves(
    *,
    employee_id: UUID,
    leaves: list[LeaveRecord] | tuple[LeaveRecord, ...],
    year: int,
    month: int,
    policy: WorkCalendarPolicy,
) -> LeaveSummary:
    """Bucket APPROVED leave days falling in the month by type."""
    buckets: dict[str, Decimal] = defaultdict(Decimal)

    for leave in leaves:
        if leave.status != LeaveStatus.APPROVED:
            continue
        window = clip_to_month(leave.start_date, leave.end_date, year, month)
        if window is None:
            continue
        days = leave_duration(window[0], window[1], leave.is_half_day, policy)

        if leave.leave_type in (LeaveType.PAID, LeaveType.REWARD):
            buckets["paid"] += days
        elif leave.leave_type == LeaveType.UNPAID:
            buckets["unpaid"] += days
            buckets["deduction"] += days
        elif leave.leave_type == LeaveType.MALADIE:
            buckets["sick"] += days
        elif leave.leave_type == LeaveType.MATERNITE:
            buckets["maternity"] += days
        else:
            buckets["other"] += days

    total = (
        buckets["paid"] + buckets["unpaid"] + buckets["sick"]
        + buckets["maternity"] + buckets["other"]
    )
    return LeaveSummary(
        employee_id=employee_id,
        year=year,
        month=month,
        paid_days=buckets["paid"],
        unpaid_days=buckets["unpaid"],
        sick_days=buckets["sick"],
        maternity_days=buckets["maternity"],
        other_days=buckets["other"],
        total_days=total,
        salary_deduction_days=buckets["deduction"],
    )


def compute_leave_balance(
    *,
    employee_id: UUID,
    annual_allowance: Decimal,
    leaves: list[LeaveRecord] | tuple[LeaveRecord, ...],
    year: int,
) -> LeaveBalance:
    """Yearly balance from the stored durations of leaves starting in ``year``."""
    used = Decimal("0")
    pending = Decimal("0")
    by_type: dict[LeaveType, Decimal] = {}

    for leave in leaves:
        if leave.start_date.year != year:
            continue
        if leave.status == LeaveStatus.APPROVED:
            by_type[leave.leave_type] = by_type.get(leave.leave_type, Decimal("0")) + leave.duration_days
            if leave.leave_type in ANNUAL_LEAVE_TYPES:
                used += leave.duration_days
        elif leave.status == LeaveStatus.PENDING and leave.leave_type in ANNUAL_LEAVE_TYPES:
            pending += leave.duration_days

    return LeaveBalance(
        employee_id=employee_id,
        year=year,
        annual_allowance=annual_allowance,
        used=used,
        pending=pending,
        remaining=annual_allowance - used - pending,
        by_type=by_type,
    )
