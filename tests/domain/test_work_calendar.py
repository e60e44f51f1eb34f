"""
Tests for the work calendar policy and period helpers.

February 2026 starts on a Sunday: 20 work days under the default policy.
March 2026 also starts on a Sunday: 22 work days.
"""

from datetime import date
from decimal import Decimal

import pytest

from payroll_kernel.domain.calendar import (
    DEFAULT_POLICY,
    WorkCalendarPolicy,
    iter_month_dates,
    month_bounds,
    validate_period,
)
from payroll_kernel.exceptions import InvalidCalendarPolicyError, InvalidPeriodError


class TestWorkDays:
    """is_work_day and the month counters."""

    def test_weekend_is_not_a_work_day(self):
        assert not DEFAULT_POLICY.is_work_day(date(2026, 2, 7))  # Saturday
        assert not DEFAULT_POLICY.is_work_day(date(2026, 2, 8))  # Sunday
        assert DEFAULT_POLICY.is_work_day(date(2026, 2, 9))  # Monday

    def test_february_2026_has_twenty_work_days(self):
        assert DEFAULT_POLICY.count_work_days_in_month(2026, 2) == 20

    def test_march_2026_has_twenty_two_work_days(self):
        assert DEFAULT_POLICY.count_work_days_in_month(2026, 3) == 22

    def test_work_dates_in_month_matches_count(self):
        dates = DEFAULT_POLICY.work_dates_in_month(2026, 2)
        assert len(dates) == 20
        assert dates[0] == date(2026, 2, 2)
        assert dates[-1] == date(2026, 2, 27)

    def test_public_holiday_is_excluded(self):
        policy = WorkCalendarPolicy(public_holidays=frozenset({date(2026, 2, 2)}))
        assert policy.is_holiday(date(2026, 2, 2))
        assert not policy.is_work_day(date(2026, 2, 2))
        assert policy.count_work_days_in_month(2026, 2) == 19

    def test_recurring_holiday_applies_every_year(self):
        policy = WorkCalendarPolicy(recurring_holidays=frozenset({(5, 1)}))
        assert not policy.is_work_day(date(2026, 5, 1))  # Friday
        assert not policy.is_work_day(date(2029, 5, 1))  # Tuesday

    def test_custom_weekend(self):
        policy = WorkCalendarPolicy(weekend_days=frozenset({4, 5}))  # Friday, Saturday
        assert policy.is_work_day(date(2026, 2, 8))  # Sunday
        assert not policy.is_work_day(date(2026, 2, 6))  # Friday

    def test_count_between_is_inclusive(self):
        assert DEFAULT_POLICY.count_work_days_between(date(2026, 2, 2), date(2026, 2, 6)) == 5
        assert DEFAULT_POLICY.count_work_days_between(date(2026, 2, 6), date(2026, 2, 9)) == 2

    def test_count_between_empty_when_reversed(self):
        assert DEFAULT_POLICY.count_work_days_between(date(2026, 2, 9), date(2026, 2, 2)) == 0

    def test_expected_minutes_per_day(self):
        assert DEFAULT_POLICY.expected_minutes_per_day == 480


class TestPolicyValidation:
    """Inconsistent policies are rejected at construction."""

    def test_sessions_must_sum_to_day(self):
        with pytest.raises(InvalidCalendarPolicyError) as exc_info:
            WorkCalendarPolicy(morning_session_hours=Decimal("3"))
        assert exc_info.value.field_name == "session_hours"

    def test_non_positive_day_rejected(self):
        with pytest.raises(InvalidCalendarPolicyError):
            WorkCalendarPolicy(
                standard_hours_per_day=Decimal("0"),
                morning_session_hours=Decimal("0"),
                afternoon_session_hours=Decimal("0"),
            )

    def test_overtime_multiplier_below_one_rejected(self):
        with pytest.raises(InvalidCalendarPolicyError) as exc_info:
            WorkCalendarPolicy(overtime_multiplier=Decimal("0.9"))
        assert exc_info.value.code == "INVALID_CALENDAR_POLICY"

    def test_whole_week_weekend_rejected(self):
        with pytest.raises(InvalidCalendarPolicyError):
            WorkCalendarPolicy(weekend_days=frozenset(range(7)))

    def test_weekday_out_of_range_rejected(self):
        with pytest.raises(InvalidCalendarPolicyError):
            WorkCalendarPolicy(weekend_days=frozenset({7}))

    def test_policy_is_frozen(self):
        with pytest.raises(AttributeError):
            DEFAULT_POLICY.standard_hours_per_day = Decimal("7")


class TestPeriods:
    """validate_period, month_bounds, iter_month_dates."""

    @pytest.mark.parametrize("year,month", [(2026, 0), (2026, 13), (2019, 5), (2101, 1)])
    def test_invalid_periods(self, year, month):
        with pytest.raises(InvalidPeriodError) as exc_info:
            validate_period(year, month)
        assert exc_info.value.code == "INVALID_PERIOD"
        assert exc_info.value.month == month

    def test_non_integer_month_rejected(self):
        with pytest.raises(InvalidPeriodError):
            validate_period(2026, "2")

    def test_boundary_years_accepted(self):
        validate_period(2020, 1)
        validate_period(2100, 12)

    def test_month_bounds_leap_year(self):
        assert month_bounds(2028, 2) == (date(2028, 2, 1), date(2028, 2, 29))

    def test_iter_month_dates_covers_every_day(self):
        days = list(iter_month_dates(2026, 2))
        assert len(days) == 28
        assert days[0] == date(2026, 2, 1)
        assert days[-1] == date(2026, 2, 28)
