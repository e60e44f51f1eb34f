"""Tests for the work-calendar YAML configuration."""

from datetime import date
from decimal import Decimal

import pytest

from payroll_config import DEFAULT_CALENDAR_FILE, get_calendar_policy
from payroll_config.loader import (
    compute_checksum,
    load_yaml_file,
    parse_calendar_policy,
    parse_decimal,
    parse_month_day,
    parse_weekday,
)
from payroll_kernel.domain.calendar import DEFAULT_POLICY
from payroll_kernel.exceptions import InvalidCalendarPolicyError

CUSTOM_CALENDAR = """
calendar:
  standard_hours_per_day: "7"
  morning_session_hours: "3.5"
  afternoon_session_hours: "3.5"
  overtime_multiplier: "1.5"
  weekend_days: [FRIDAY, SATURDAY]
  recurring_holidays: ["01-01", "05-01"]
  public_holidays: ["2026-02-09"]
leave:
  default_annual_leave_days: "30"
"""


class TestDefaultCalendar:

    def test_shipped_calendar_matches_defaults(self):
        assert get_calendar_policy() == DEFAULT_POLICY

    def test_default_file_exists(self):
        assert DEFAULT_CALENDAR_FILE.exists()

    def test_config_trace_logged(self, captured_logs):
        get_calendar_policy()
        traces = [r for r in captured_logs() if r["message"] == "PAYROLL_CONFIG_TRACE"]
        assert len(traces) == 1
        assert traces[0]["source"] == str(DEFAULT_CALENDAR_FILE)
        assert traces[0]["weekend_days"] == [5, 6]
        assert traces[0]["checksum"] == compute_checksum(load_yaml_file(DEFAULT_CALENDAR_FILE))


class TestCustomCalendar:

    def test_custom_file(self, tmp_path):
        path = tmp_path / "calendar.yaml"
        path.write_text(CUSTOM_CALENDAR)

        policy = get_calendar_policy(path)

        assert policy.standard_hours_per_day == Decimal("7")
        assert policy.expected_minutes_per_day == 420
        assert policy.overtime_multiplier == Decimal("1.5")
        assert policy.weekend_days == frozenset({4, 5})
        assert policy.recurring_holidays == frozenset({(1, 1), (5, 1)})
        assert policy.public_holidays == frozenset({date(2026, 2, 9)})
        assert policy.default_annual_leave_days == Decimal("30")
        assert not policy.is_work_day(date(2026, 2, 9))

    def test_missing_keys_use_defaults(self):
        policy = parse_calendar_policy({"calendar": {"weekend_days": ["SUNDAY"]}})
        assert policy.weekend_days == frozenset({6})
        assert policy.standard_hours_per_day == Decimal("8")

    def test_inconsistent_sessions_rejected(self):
        with pytest.raises(InvalidCalendarPolicyError):
            parse_calendar_policy({"calendar": {"morning_session_hours": "5"}})

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            get_calendar_policy(tmp_path / "absent.yaml")

    def test_checksum_changes_with_content(self):
        assert compute_checksum({"calendar": {"a": "1"}}) != compute_checksum({"calendar": {"a": "2"}})


class TestValueParsing:

    def test_float_rejected(self):
        with pytest.raises(ValueError):
            parse_decimal("overtime_multiplier", 1.25)

    def test_bool_rejected(self):
        with pytest.raises(ValueError):
            parse_decimal("standard_hours_per_day", True)

    def test_int_and_string_accepted(self):
        assert parse_decimal("x", 8) == Decimal("8")
        assert parse_decimal("x", "1.25") == Decimal("1.25")

    def test_garbage_decimal(self):
        with pytest.raises(ValueError):
            parse_decimal("x", "eight")

    def test_weekday_names_and_numbers(self):
        assert parse_weekday("saturday") == 5
        assert parse_weekday(0) == 0
        with pytest.raises(ValueError):
            parse_weekday("FUNDAY")

    def test_month_day(self):
        assert parse_month_day("02-29") == (2, 29)
        with pytest.raises(ValueError):
            parse_month_day("13-01")
        with pytest.raises(ValueError):
            parse_month_day("2026-01-01")
