"""Tests for RewardService: grant, revoke, summaries and listings."""

from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest

from payroll_kernel.exceptions import (
    DuplicateRewardError,
    EmployeeNotFoundError,
    InvalidStatusTransitionError,
    RewardNotFoundError,
    RewardValidationError,
)
from payroll_modules.attendance.models import SessionStatus
from payroll_modules.attendance.service import AttendanceService
from payroll_modules.rewards.models import RewardStatus
from payroll_modules.rewards.service import RewardService

MONDAY = date(2026, 2, 9)
TUESDAY = date(2026, 2, 10)


@pytest.fixture
def reward_service(session, policy, deterministic_clock):
    return RewardService(session, policy, deterministic_clock)


class TestGrantReward:

    def test_grant_creates_reward_sessions(
        self, reward_service, make_employee, session, policy, test_actor_id,
    ):
        employee = make_employee()
        reward = reward_service.grant_reward(
            employee.id, MONDAY, "Closed the quarter", test_actor_id, bonus=Decimal("50"),
        )
        assert reward.status == RewardStatus.APPROVED
        assert reward.bonus == Decimal("50")

        sessions = AttendanceService(session, policy).get_month_sessions(employee.id, 2026, 2)
        assert len(sessions) == 2
        assert {s.status for s in sessions} == {SessionStatus.REWARD}

    def test_duplicate_date_rejected(self, reward_service, make_employee, test_actor_id):
        employee = make_employee()
        first = reward_service.grant_reward(employee.id, MONDAY, "First", test_actor_id)
        with pytest.raises(DuplicateRewardError) as exc_info:
            reward_service.grant_reward(employee.id, MONDAY, "Second", test_actor_id)
        assert exc_info.value.existing_reward_id == str(first.id)

    def test_revoked_reward_still_blocks_date(self, reward_service, make_employee, test_actor_id):
        employee = make_employee()
        reward = reward_service.grant_reward(employee.id, MONDAY, "First", test_actor_id)
        reward_service.revoke_reward(reward.id)
        with pytest.raises(DuplicateRewardError):
            reward_service.grant_reward(employee.id, MONDAY, "Again", test_actor_id)

    def test_negative_bonus_rejected(self, reward_service, make_employee, test_actor_id):
        employee = make_employee()
        with pytest.raises(RewardValidationError):
            reward_service.grant_reward(employee.id, MONDAY, "Oops", test_actor_id, bonus=Decimal("-1"))

    def test_float_bonus_rejected(self, reward_service, make_employee, test_actor_id):
        employee = make_employee()
        with pytest.raises(RewardValidationError):
            reward_service.grant_reward(employee.id, MONDAY, "Float", test_actor_id, bonus=10.5)

    def test_malformed_bonus_string_rejected(self, reward_service, make_employee, test_actor_id):
        employee = make_employee()
        with pytest.raises(RewardValidationError) as exc_info:
            reward_service.grant_reward(employee.id, MONDAY, "Typo", test_actor_id, bonus="abc")
        assert exc_info.value.code == "INVALID_REWARD"

    def test_numeric_string_bonus_accepted(self, reward_service, make_employee, test_actor_id):
        employee = make_employee()
        reward = reward_service.grant_reward(employee.id, MONDAY, "Typed in", test_actor_id, bonus="25.50")
        assert reward.bonus == Decimal("25.50")

    def test_reason_required(self, reward_service, make_employee, test_actor_id):
        employee = make_employee()
        with pytest.raises(RewardValidationError) as exc_info:
            reward_service.grant_reward(employee.id, MONDAY, "  ", test_actor_id)
        assert exc_info.value.code == "INVALID_REWARD"

    def test_unknown_employee(self, reward_service, test_actor_id):
        with pytest.raises(EmployeeNotFoundError):
            reward_service.grant_reward(uuid4(), MONDAY, "Ghost", test_actor_id)


class TestRevokeReward:

    def test_revoke_removes_sessions(
        self, reward_service, make_employee, session, policy, deterministic_clock, test_actor_id,
    ):
        employee = make_employee()
        reward = reward_service.grant_reward(employee.id, MONDAY, "Target", test_actor_id)

        revoked = reward_service.revoke_reward(reward.id)

        assert revoked.status == RewardStatus.REVOKED
        assert revoked.revoked_at == deterministic_clock.now()
        assert AttendanceService(session, policy).get_month_sessions(employee.id, 2026, 2) == ()

    def test_revoke_twice_fails(self, reward_service, make_employee, test_actor_id):
        employee = make_employee()
        reward = reward_service.grant_reward(employee.id, MONDAY, "Target", test_actor_id)
        reward_service.revoke_reward(reward.id)
        with pytest.raises(InvalidStatusTransitionError):
            reward_service.revoke_reward(reward.id)

    def test_unknown_reward(self, reward_service):
        with pytest.raises(RewardNotFoundError):
            reward_service.revoke_reward(uuid4())


class TestRewardQueries:

    def test_monthly_summary_excludes_revoked(self, reward_service, make_employee, test_actor_id):
        employee = make_employee()
        reward_service.grant_reward(employee.id, MONDAY, "A", test_actor_id, bonus=Decimal("50"))
        revoked = reward_service.grant_reward(employee.id, TUESDAY, "B", test_actor_id, bonus=Decimal("30"))
        reward_service.revoke_reward(revoked.id)
        reward_service.grant_reward(employee.id, date(2026, 3, 2), "C", test_actor_id, bonus=Decimal("20"))

        summary = reward_service.get_monthly_summary(employee.id, 2026, 2)

        assert summary.total_days == 1
        assert summary.total_bonus == Decimal("50.00")

    def test_employee_rewards_newest_first(self, reward_service, make_employee, test_actor_id):
        employee = make_employee()
        reward_service.grant_reward(employee.id, MONDAY, "A", test_actor_id)
        reward_service.grant_reward(employee.id, date(2026, 3, 2), "B", test_actor_id)
        dates = [r.reward_date for r in reward_service.get_employee_rewards(employee.id)]
        assert dates == [date(2026, 3, 2), MONDAY]
        assert len(reward_service.get_employee_rewards(employee.id, year=2025)) == 0

    def test_all_rewards_for_month(self, reward_service, make_employee, test_actor_id):
        alice = make_employee()
        bob = make_employee()
        reward_service.grant_reward(alice.id, MONDAY, "A", test_actor_id)
        reward_service.grant_reward(bob.id, TUESDAY, "B", test_actor_id)
        reward_service.grant_reward(bob.id, date(2026, 3, 2), "C", test_actor_id)

        assert len(reward_service.get_all_rewards(2026, 2)) == 2
        assert len(reward_service.get_all_rewards(2026)) == 3

    def test_all_rewards_excludes_revoked(self, reward_service, make_employee, test_actor_id):
        employee = make_employee()
        kept = reward_service.grant_reward(employee.id, MONDAY, "Kept", test_actor_id)
        revoked = reward_service.grant_reward(employee.id, TUESDAY, "Withdrawn", test_actor_id)
        reward_service.revoke_reward(revoked.id)

        assert [r.id for r in reward_service.get_all_rewards(2026, 2)] == [kept.id]
        assert [r.id for r in reward_service.get_all_rewards(2026)] == [kept.id]
