"""
Attendance Session Materializer (``payroll_modules.attendance.materializer``).

Responsibility:
    Consume ``LeaveApproved``, ``RewardGranted`` and ``RewardRevoked``
    domain events and write the synthetic attendance sessions they imply,
    so leave and reward days are visible to attendance aggregation.

Architecture position:
    **Modules layer** -- the only writer of synthetic sessions.  Called by
    ``LeaveService`` and ``RewardService`` inside their own transaction;
    it flushes but never commits.

Invariants enforced:
    - Every write is an upsert keyed on (employee, date, slot); handling
      the same event twice leaves the same rows.
    - A synthetic session replaces whatever the slot held, so a slot never
      carries a leave/reward status and a raw FULL/PARTIAL status at once.
    - Only work days receive synthetic sessions.
    - Each synthetic slot is credited LEAVE_CREDIT_MINUTES_PER_SLOT,
      independent of the calendar policy's session hours.

Failure modes:
    - ``TypeError`` for an event type with no handler.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from payroll_kernel.domain.calendar import DEFAULT_POLICY, WorkCalendarPolicy
from payroll_kernel.domain.events import LeaveApproved, RewardGranted, RewardRevoked
from payroll_kernel.logging_config import get_logger
from payroll_modules.attendance.models import SessionSlot, SessionStatus
from payroll_modules.attendance.orm import AttendanceSessionModel

logger = get_logger("modules.attendance.materializer")

# TODO: derive from policy.morning/afternoon_session_hours once payroll
# confirms that reports generated under the 4h convention may change.
LEAVE_CREDIT_MINUTES_PER_SLOT = 240


class AttendanceSessionMaterializer:
    """Turns leave/reward domain events into attendance session rows."""

    def __init__(self, session: Session, policy: WorkCalendarPolicy = DEFAULT_POLICY):
        self._session = session
        self._policy = policy
        self._handlers: dict[type, Callable] = {
            LeaveApproved: self._on_leave_approved,
            RewardGranted: self._on_reward_granted,
            RewardRevoked: self._on_reward_revoked,
        }

    def handle(self, event) -> int:
        """Apply one event.  Returns the number of session rows touched."""
        handler = self._handlers.get(type(event))
        if handler is None:
            raise TypeError(f"No session materializer handler for {type(event).__name__}")
        touched = handler(event)
        self._session.flush()
        logger.info(
            "sessions_materialized",
            extra={
                "event_type": type(event).__name__,
                "employee_id": str(event.employee_id),
                "rows": touched,
            },
        )
        return touched

    def _on_leave_approved(self, event: LeaveApproved) -> int:
        if event.half_day_slot is not None:
            slots = (SessionSlot(event.half_day_slot),)
            status = SessionStatus.LEAVE_HALF
        else:
            slots = (SessionSlot.MORNING, SessionSlot.AFTERNOON)
            status = SessionStatus.LEAVE_FULL

        touched = 0
        for day in self._policy.work_dates_between(event.start_date, event.end_date):
            for slot in slots:
                self._upsert(event.employee_id, day, slot, status)
                touched += 1
        return touched

    def _on_reward_granted(self, event: RewardGranted) -> int:
        if not self._policy.is_work_day(event.reward_date):
            return 0
        for slot in (SessionSlot.MORNING, SessionSlot.AFTERNOON):
            self._upsert(event.employee_id, event.reward_date, slot, SessionStatus.REWARD)
        return 2

    def _on_reward_revoked(self, event: RewardRevoked) -> int:
        result = self._session.execute(
            delete(AttendanceSessionModel).where(
                AttendanceSessionModel.employee_id == event.employee_id,
                AttendanceSessionModel.session_date == event.reward_date,
                AttendanceSessionModel.status == SessionStatus.REWARD.value,
            )
        )
        return result.rowcount or 0

    def _upsert(
        self,
        employee_id: UUID,
        day: date,
        slot: SessionSlot,
        status: SessionStatus,
    ) -> None:
        model = self._session.scalars(
            select(AttendanceSessionModel).where(
                AttendanceSessionModel.employee_id == employee_id,
                AttendanceSessionModel.session_date == day,
                AttendanceSessionModel.slot == slot.value,
            )
        ).one_or_none()
        if model is None:
            model = AttendanceSessionModel(
                employee_id=employee_id,
                session_date=day,
                slot=slot.value,
            )
            self._session.add(model)
        model.status = status.value
        model.check_in = None
        model.check_out = None
        model.duration_minutes = LEAVE_CREDIT_MINUTES_PER_SLOT
        model.flagged_for_review = False
