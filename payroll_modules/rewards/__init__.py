"""
Rewards Module (``payroll_modules.rewards``).

Administratively granted reward days: each counts as a fully worked day
and may carry a bonus added to gross salary.
"""

from payroll_modules.rewards.models import RewardRecord, RewardStatus, RewardSummary

__all__ = ["RewardRecord", "RewardStatus", "RewardSummary"]
