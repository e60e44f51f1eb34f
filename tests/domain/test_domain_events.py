"""Tests for the leave/reward domain events and the deterministic clock."""

from datetime import date, datetime, timedelta, timezone
from uuid import uuid4

import pytest

from payroll_kernel.domain.clock import DeterministicClock
from payroll_kernel.domain.events import LeaveApproved, RewardGranted, RewardRevoked


class TestDomainEvents:

    def test_leave_approved_rejects_reversed_range(self):
        with pytest.raises(ValueError):
            LeaveApproved(uuid4(), date(2026, 2, 10), date(2026, 2, 9))

    def test_leave_approved_defaults_to_full_days(self):
        event = LeaveApproved(uuid4(), date(2026, 2, 9), date(2026, 2, 10))
        assert event.half_day_slot is None

    def test_events_are_frozen_values(self):
        employee_id = uuid4()
        granted = RewardGranted(employee_id, date(2026, 2, 9))
        assert granted == RewardGranted(employee_id, date(2026, 2, 9))
        assert granted != RewardRevoked(employee_id, date(2026, 2, 9))
        with pytest.raises(AttributeError):
            granted.reward_date = date(2026, 2, 10)


class TestDeterministicClock:

    def test_default_time_is_stable(self):
        clock = DeterministicClock()
        assert clock.now() == clock.now()
        assert clock.now() == datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)

    def test_advance_moves_the_stamp(self):
        clock = DeterministicClock()
        start = clock.now()
        clock.advance(3600)
        assert clock.now() == start + timedelta(hours=1)

    def test_offset_start_is_normalized_to_utc(self):
        clock = DeterministicClock(datetime(2026, 3, 1, 9, 0, tzinfo=timezone(timedelta(hours=1))))
        assert clock.now() == datetime(2026, 3, 1, 8, 0, tzinfo=timezone.utc)
        assert clock.now().utcoffset() == timedelta(0)

    def test_naive_start_rejected(self):
        with pytest.raises(ValueError):
            DeterministicClock(datetime(2026, 3, 1, 9, 0))
