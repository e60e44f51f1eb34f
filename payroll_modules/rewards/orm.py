"""
Reward ORM Persistence Model (``payroll_modules.rewards.orm``).

Invariants enforced:
    - One row per (employee_id, reward_date) (uq_reward_employee_date),
      revoked rows included.
    - ``bonus`` is Decimal (Numeric(38,9)) -- NEVER float.
"""

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from sqlalchemy import Date, ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from payroll_kernel.db.base import TrackedBase


class RewardModel(TrackedBase):
    """ORM model for ``RewardRecord``."""

    __tablename__ = "payroll_rewards"

    employee_id: Mapped[UUID] = mapped_column(ForeignKey("payroll_employees.id"), nullable=False)
    reward_date: Mapped[date] = mapped_column(Date, nullable=False)
    reason: Mapped[str] = mapped_column(String(4000), nullable=False)
    granted_by_id: Mapped[UUID] = mapped_column(nullable=False)
    bonus: Mapped[Decimal] = mapped_column(nullable=False, default=Decimal("0"))
    status: Mapped[str] = mapped_column(String(50), nullable=False, default="APPROVED")
    revoked_at: Mapped[datetime | None] = mapped_column(nullable=True)

    __table_args__ = (
        UniqueConstraint("employee_id", "reward_date", name="uq_reward_employee_date"),
        Index("idx_reward_date", "reward_date"),
    )

    def to_dto(self):
        from payroll_modules.rewards.models import RewardRecord, RewardStatus
        return RewardRecord(
            id=self.id,
            employee_id=self.employee_id,
            reward_date=self.reward_date,
            reason=self.reason,
            granted_by_id=self.granted_by_id,
            bonus=self.bonus,
            status=RewardStatus(self.status),
            revoked_at=self.revoked_at,
        )

    @classmethod
    def from_dto(cls, dto) -> "RewardModel":
        return cls(
            id=dto.id,
            employee_id=dto.employee_id,
            reward_date=dto.reward_date,
            reason=dto.reason,
            granted_by_id=dto.granted_by_id,
            bonus=dto.bonus,
            status=dto.status.value if hasattr(dto.status, "value") else dto.status,
            revoked_at=dto.revoked_at,
        )

    def __repr__(self) -> str:
        return f"<RewardModel {self.employee_id} {self.reward_date}: {self.status}>"
