"""
Salary Calculation Engine (``payroll_engines.salary``).

Responsibility
--------------
Pure function combining an employee's ``EmploymentTerms`` with the
monthly attendance, leave and reward aggregates into a
``SalaryBreakdown``.

Architecture position
---------------------
**Engines layer** -- pure functional core.  ZERO I/O, ZERO database,
ZERO clock reads.  Same inputs always produce the same breakdown.

Invariants enforced
-------------------
* Deduct-from-full-pay model: the full monthly salary is the starting
  point and absences subtract from it.
* Every monetary step is rounded half-up to 0.01 before the next step
  consumes it.  Products use the unrounded daily/hourly rate, so
  ``1000 / 22 * 2`` deducts 90.91, not ``2 * 45.45``.
* The daily-rate denominator is ``policy.count_work_days_in_month``,
  the same function that yields the expected work days.
* ``total_deductions >= 0``.  A negative net is returned as is and
  flagged with ``requires_review``.

Failure modes
-------------
* ``SalaryComputationError`` when the month has no work day (the daily
  rate would be undefined).  Indicates a calendar misconfiguration;
  fatal for that single computation.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from payroll_engines.tracer import traced_engine
from payroll_kernel.db.types import round_money
from payroll_kernel.domain.calendar import WorkCalendarPolicy
from payroll_kernel.exceptions import SalaryComputationError
from payroll_modules.attendance.models import AttendanceCalculation
from payroll_modules.employees.models import EmploymentTerms
from payroll_modules.leave.models import LeaveSummary
from payroll_modules.payroll.models import SalaryBreakdown
from payroll_modules.rewards.models import RewardSummary

_logger = logging.getLogger("payroll_kernel.engines.salary")

_HALF = Decimal("0.5")


@traced_engine(
    "salary",
    "1.0",
    fingerprint_fields=("terms", "attendance", "leaves", "rewards", "year", "month"),
)
def compute_salary(
    *,
    terms: EmploymentTerms,
    attendance: AttendanceCalculation,
    leaves: LeaveSummary,
    rewards: RewardSummary,
    year: int,
    month: int,
    policy: WorkCalendarPolicy,
) -> SalaryBreakdown:
    work_days = policy.count_work_days_in_month(year, month)
    if work_days <= 0:
        raise SalaryComputationError(
            str(attendance.employee_id),
            f"no work day in {year}-{month:02d}; daily rate undefined",
        )

    base = terms.base_salary
    daily_rate = base / Decimal(work_days)
    if terms.hourly_rate > 0:
        hourly_rate = terms.hourly_rate
    else:
        hourly_rate = daily_rate / policy.standard_hours_per_day

    worked_days_pay = round_money(base)
    overtime_pay = round_money(
        attendance.overtime_hours * hourly_rate * policy.overtime_multiplier
    )
    reward_bonus = round_money(rewards.total_bonus)

    absence_deduction = round_money(attendance.absent_days * daily_rate)
    partial_deduction = round_money(attendance.partial_days * daily_rate * _HALF)
    unpaid_leave_deduction = round_money(leaves.unpaid_days * daily_rate)
    total_deductions = round_money(
        absence_deduction + partial_deduction + unpaid_leave_deduction
    )

    gross = round_money(worked_days_pay + overtime_pay + reward_bonus)
    net = round_money(gross - total_deductions)
    requires_review = net < 0

    if requires_review:
        _logger.warning(
            "negative_net_salary",
            extra={
                "employee_id": str(attendance.employee_id),
                "period": f"{year}-{month:02d}",
                "gross_salary": str(gross),
                "total_deductions": str(total_deductions),
                "net_salary": str(net),
            },
        )

    return SalaryBreakdown(
        base_salary=round_money(base),
        daily_rate=round_money(daily_rate),
        hourly_rate=round_money(hourly_rate),
        worked_days_pay=worked_days_pay,
        overtime_pay=overtime_pay,
        reward_bonus=reward_bonus,
        # Full-day and half-day absences are reported as one figure.
        absence_deduction=round_money(absence_deduction + partial_deduction),
        partial_day_deduction=partial_deduction,
        unpaid_leave_deduction=unpaid_leave_deduction,
        total_deductions=total_deductions,
        paid_leave_days=leaves.paid_days,
        unpaid_leave_days=leaves.unpaid_days,
        sick_leave_days=leaves.sick_days,
        other_leave_days=leaves.other_days + leaves.maternity_days,
        reward_days=rewards.total_days,
        gross_salary=gross,
        net_salary=net,
        requires_review=requires_review,
    )
