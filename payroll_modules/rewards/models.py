"""
Reward Domain Models (``payroll_modules.rewards.models``).

A reward day counts as fully worked and may carry a bonus.  One reward
per (employee, date), whatever its status.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from uuid import UUID


class RewardStatus(Enum):
    """Reward lifecycle states."""
    APPROVED = "APPROVED"
    REVOKED = "REVOKED"


@dataclass(frozen=True)
class RewardRecord:
    """One granted reward day."""
    id: UUID
    employee_id: UUID
    reward_date: date
    reason: str
    granted_by_id: UUID
    bonus: Decimal = Decimal("0")
    status: RewardStatus = RewardStatus.APPROVED
    revoked_at: datetime | None = None


@dataclass(frozen=True)
class RewardSummary:
    """APPROVED rewards of one employee/month."""
    employee_id: UUID
    year: int
    month: int
    total_days: int = 0
    total_bonus: Decimal = Decimal("0")
    records: tuple[RewardRecord, ...] = field(default_factory=tuple)
