"""
Reward Summary Engine (``payroll_engines.reward``).

Pure reduction of reward records to the monthly ``RewardSummary``: the
count of APPROVED reward days dated in the month and the sum of their
bonuses, rounded half-up to 2 decimals.
"""

from __future__ import annotations

from decimal import Decimal
from uuid import UUID

from payroll_engines.tracer import traced_engine
from payroll_kernel.db.types import round_money
from payroll_modules.rewards.models import RewardRecord, RewardStatus, RewardSummary


@traced_engine("reward_summary", "1.0", fingerprint_fields=("employee_id", "year", "month"))
def summarize_rewards(
    *,
    employee_id: UUID,
    rewards: list[RewardRecord] | tuple[RewardRecord, ...],
    year: int,
    month: int,
) -> RewardSummary:
    counted = tuple(
        r for r in rewards
        if r.status == RewardStatus.APPROVED
        and r.employee_id == employee_id
        and r.reward_date.year == year
        and r.reward_date.month == month
    )
    total_bonus = sum((r.bonus for r in counted), Decimal("0"))
    return RewardSummary(
        employee_id=employee_id,
        year=year,
        month=month,
        total_days=len(counted),
        total_bonus=round_money(total_bonus),
        records=counted,
    )
