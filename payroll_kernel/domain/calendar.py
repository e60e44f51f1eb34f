"""
Work Calendar -- which dates count as work days, and how long a day is.

Responsibility:
    Immutable ``WorkCalendarPolicy`` shared by every aggregator and by the
    salary calculator, plus the period helpers (``month_bounds``,
    ``validate_period``).

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.

Invariants enforced:
    - The policy is a frozen dataclass; it is never mutated at runtime.
    - ``count_work_days_in_month`` is the single source for both the
      expected-work-days figure and the daily-rate denominator.
    - Payroll periods are validated before any aggregation or mutation.

Failure modes:
    - InvalidCalendarPolicyError on inconsistent policy fields.
    - InvalidPeriodError on month outside 1..12 or year outside 2020..2100.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal
from typing import Iterator

from payroll_kernel.exceptions import InvalidCalendarPolicyError, InvalidPeriodError

MIN_PAYROLL_YEAR = 2020
MAX_PAYROLL_YEAR = 2100

SATURDAY = 5
SUNDAY = 6


@dataclass(frozen=True)
class WorkCalendarPolicy:
    """
    Work-calendar configuration.

    Weekend days use ``date.weekday()`` numbering (Monday=0 .. Sunday=6).
    ``recurring_holidays`` holds (month, day) pairs observed every year;
    ``public_holidays`` holds one-off dates.
    """

    standard_hours_per_day: Decimal = Decimal("8")
    morning_session_hours: Decimal = Decimal("4")
    afternoon_session_hours: Decimal = Decimal("4")
    overtime_multiplier: Decimal = Decimal("1.25")
    weekend_days: frozenset[int] = frozenset({SATURDAY, SUNDAY})
    public_holidays: frozenset[date] = field(default_factory=frozenset)
    recurring_holidays: frozenset[tuple[int, int]] = field(default_factory=frozenset)
    default_annual_leave_days: Decimal = Decimal("26")

    def __post_init__(self) -> None:
        if self.standard_hours_per_day <= 0:
            raise InvalidCalendarPolicyError(
                "standard_hours_per_day", "must be positive",
            )
        if self.morning_session_hours <= 0 or self.afternoon_session_hours <= 0:
            raise InvalidCalendarPolicyError(
                "session_hours", "morning and afternoon hours must be positive",
            )
        if self.morning_session_hours + self.afternoon_session_hours != self.standard_hours_per_day:
            raise InvalidCalendarPolicyError(
                "session_hours",
                f"morning ({self.morning_session_hours}) + afternoon "
                f"({self.afternoon_session_hours}) must equal "
                f"standard_hours_per_day ({self.standard_hours_per_day})",
            )
        if self.overtime_multiplier < 1:
            raise InvalidCalendarPolicyError(
                "overtime_multiplier", "must be at least 1",
            )
        if any(d not in range(7) for d in self.weekend_days):
            raise InvalidCalendarPolicyError(
                "weekend_days", "weekday numbers must be in 0..6",
            )
        if len(self.weekend_days) >= 7:
            raise InvalidCalendarPolicyError(
                "weekend_days", "at least one day of the week must be a work day",
            )
        if self.default_annual_leave_days < 0:
            raise InvalidCalendarPolicyError(
                "default_annual_leave_days", "cannot be negative",
            )

    @property
    def expected_minutes_per_day(self) -> int:
        return int(self.standard_hours_per_day * 60)

    def is_holiday(self, day: date) -> bool:
        return day in self.public_holidays or (day.month, day.day) in self.recurring_holidays

    def is_work_day(self, day: date) -> bool:
        """True unless the date is a weekend day or a public holiday."""
        return day.weekday() not in self.weekend_days and not self.is_holiday(day)

    def work_dates_between(self, start: date, end: date) -> Iterator[date]:
        """Yield work days in [start, end] (inclusive, empty when start > end)."""
        current = start
        while current <= end:
            if self.is_work_day(current):
                yield current
            current += timedelta(days=1)

    def count_work_days_between(self, start: date, end: date) -> int:
        return sum(1 for _ in self.work_dates_between(start, end))

    def work_dates_in_month(self, year: int, month: int) -> tuple[date, ...]:
        first, last = month_bounds(year, month)
        return tuple(self.work_dates_between(first, last))

    def count_work_days_in_month(self, year: int, month: int) -> int:
        """Work days in the month; also the daily-rate denominator."""
        first, last = month_bounds(year, month)
        return self.count_work_days_between(first, last)


DEFAULT_POLICY = WorkCalendarPolicy()


def validate_period(year: int, month: int) -> None:
    """Raise InvalidPeriodError unless (year, month) is a valid payroll period."""
    if not isinstance(year, int) or not isinstance(month, int):
        raise InvalidPeriodError(year, month)
    if month < 1 or month > 12:
        raise InvalidPeriodError(year, month)
    if year < MIN_PAYROLL_YEAR or year > MAX_PAYROLL_YEAR:
        raise InvalidPeriodError(year, month)


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last calendar day of the month."""
    validate_period(year, month)
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def iter_month_dates(year: int, month: int) -> Iterator[date]:
    """Every calendar date of the month, work day or not."""
    first, last = month_bounds(year, month)
    current = first
    while current <= last:
        yield current
        current += timedelta(days=1)
