"""
Reward Module Service (``payroll_modules.rewards.service``).

Responsibility
--------------
Grant and revoke reward days, and summarize APPROVED rewards per month
for salary computation.  Granting publishes ``RewardGranted`` and
revoking publishes ``RewardRevoked`` to the session materializer inside
the same transaction.

Invariants enforced
-------------------
* One reward per (employee, date), whatever its status.
* Bonuses are non-negative Decimals.
* Each public write method owns the transaction boundary.

Failure modes
-------------
* ``DuplicateRewardError`` -- carries the existing reward id.
* ``RewardValidationError`` -- malformed or negative bonus, or an empty reason.
* ``InvalidStatusTransitionError`` -- revoking a REVOKED reward.
* ``EmployeeNotFoundError`` / ``RewardNotFoundError`` -- unknown ids.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal, InvalidOperation
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from payroll_engines.reward import summarize_rewards
from payroll_kernel.db.types import to_decimal
from payroll_kernel.domain.calendar import DEFAULT_POLICY, WorkCalendarPolicy, month_bounds, validate_period
from payroll_kernel.domain.clock import Clock, SystemClock
from payroll_kernel.domain.events import RewardGranted, RewardRevoked
from payroll_kernel.exceptions import (
    DuplicateRewardError,
    InvalidStatusTransitionError,
    RewardNotFoundError,
    RewardValidationError,
)
from payroll_kernel.logging_config import get_logger
from payroll_modules.attendance.materializer import AttendanceSessionMaterializer
from payroll_modules.employees.service import EmployeeDirectory
from payroll_modules.rewards.models import RewardRecord, RewardStatus, RewardSummary
from payroll_modules.rewards.orm import RewardModel

logger = get_logger("modules.rewards.service")


class RewardService:
    """Reward days: grant, revoke, summarize."""

    def __init__(
        self,
        session: Session,
        policy: WorkCalendarPolicy = DEFAULT_POLICY,
        clock: Clock | None = None,
        materializer: AttendanceSessionMaterializer | None = None,
    ):
        self._session = session
        self._policy = policy
        self._clock = clock or SystemClock()
        self._employees = EmployeeDirectory(session)
        self._materializer = materializer or AttendanceSessionMaterializer(session, policy)

    def grant_reward(
        self,
        employee_id: UUID,
        reward_date: date,
        reason: str,
        granted_by_id: UUID,
        bonus: Decimal = Decimal("0"),
    ) -> RewardRecord:
        self._employees.get_profile(employee_id)
        try:
            bonus = to_decimal(bonus)
        except (TypeError, InvalidOperation) as exc:
            raise RewardValidationError(f"bonus is not a decimal amount: {bonus!r}") from exc
        if bonus < 0:
            raise RewardValidationError(f"bonus cannot be negative ({bonus})")
        if not reason or not reason.strip():
            raise RewardValidationError("a reason is required")

        existing = self._session.scalars(
            select(RewardModel).where(
                RewardModel.employee_id == employee_id,
                RewardModel.reward_date == reward_date,
            )
        ).first()
        if existing is not None:
            raise DuplicateRewardError(
                str(employee_id), reward_date.isoformat(), str(existing.id),
            )

        try:
            model = RewardModel(
                employee_id=employee_id,
                reward_date=reward_date,
                reason=reason,
                granted_by_id=granted_by_id,
                bonus=Decimal(bonus),
                status=RewardStatus.APPROVED.value,
            )
            self._session.add(model)
            self._session.flush()
            touched = self._materializer.handle(
                RewardGranted(employee_id=employee_id, reward_date=reward_date)
            )
            record = model.to_dto()
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise

        logger.info(
            "reward_granted",
            extra={
                "reward_id": str(record.id),
                "employee_id": str(employee_id),
                "reward_date": reward_date.isoformat(),
                "bonus": str(bonus),
                "granted_by_id": str(granted_by_id),
                "sessions_touched": touched,
            },
        )
        return record

    def revoke_reward(self, reward_id: UUID) -> RewardRecord:
        model = self._session.get(RewardModel, reward_id)
        if model is None:
            raise RewardNotFoundError(str(reward_id))
        if model.status == RewardStatus.REVOKED.value:
            raise InvalidStatusTransitionError(
                "reward", str(reward_id), model.status, RewardStatus.REVOKED.value,
            )

        try:
            model.status = RewardStatus.REVOKED.value
            model.revoked_at = self._clock.now()
            removed = self._materializer.handle(
                RewardRevoked(employee_id=model.employee_id, reward_date=model.reward_date)
            )
            self._session.flush()
            record = model.to_dto()
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise

        logger.info(
            "reward_revoked",
            extra={
                "reward_id": str(reward_id),
                "employee_id": str(record.employee_id),
                "sessions_removed": removed,
            },
        )
        return record

    def get_monthly_summary(self, employee_id: UUID, year: int, month: int) -> RewardSummary:
        validate_period(year, month)
        self._employees.get_profile(employee_id)
        first, last = month_bounds(year, month)
        rows = self._session.scalars(
            select(RewardModel)
            .where(
                RewardModel.employee_id == employee_id,
                RewardModel.status == RewardStatus.APPROVED.value,
                RewardModel.reward_date >= first,
                RewardModel.reward_date <= last,
            )
            .order_by(RewardModel.reward_date)
        ).all()
        return summarize_rewards(
            employee_id=employee_id,
            rewards=[row.to_dto() for row in rows],
            year=year,
            month=month,
        )

    def get_employee_rewards(
        self, employee_id: UUID, year: int | None = None,
    ) -> tuple[RewardRecord, ...]:
        """All rewards of one employee, newest first."""
        stmt = select(RewardModel).where(RewardModel.employee_id == employee_id)
        if year is not None:
            stmt = stmt.where(
                RewardModel.reward_date >= date(year, 1, 1),
                RewardModel.reward_date <= date(year, 12, 31),
            )
        rows = self._session.scalars(stmt.order_by(RewardModel.reward_date.desc())).all()
        return tuple(row.to_dto() for row in rows)

    def get_all_rewards(self, year: int, month: int | None = None) -> tuple[RewardRecord, ...]:
        """Every approved reward in a year (or one month of it), newest first."""
        if month is None:
            first, last = date(year, 1, 1), date(year, 12, 31)
        else:
            first, last = month_bounds(year, month)
        rows = self._session.scalars(
            select(RewardModel)
            .where(
                RewardModel.status == RewardStatus.APPROVED.value,
                RewardModel.reward_date >= first,
                RewardModel.reward_date <= last,
            )
            .order_by(RewardModel.reward_date.desc())
        ).all()
        return tuple(row.to_dto() for row in rows)
