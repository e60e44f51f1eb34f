"""
Attendance Module Service (``payroll_modules.attendance.service``).

Responsibility
--------------
Reads one employee's session records for a month and hands them to the
pure ``aggregate_attendance`` engine.  Also records raw check-in/out
sessions for the attendance-capture collaborator, and quarantines
corrupt rows.

Architecture position
---------------------
**Modules layer** -- thin glue between the session table and
``payroll_engines.attendance``.

Invariants enforced
-------------------
* The period is validated before any query runs.
* A corrupt session is flagged for review, never silently skipped.
* Each public method that writes owns the transaction boundary
  (``commit`` on success, ``rollback`` on failure).

Failure modes
-------------
* ``InvalidPeriodError`` -- month/year outside the accepted range.
* ``EmployeeNotFoundError`` -- unknown employee id.
* ``CorruptSessionRecordError`` -- check-out before check-in; the row is
  flagged (committed) and the error re-raised.
"""

from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from payroll_engines.attendance import aggregate_attendance
from payroll_kernel.domain.calendar import DEFAULT_POLICY, WorkCalendarPolicy, month_bounds, validate_period
from payroll_kernel.exceptions import CorruptSessionRecordError
from payroll_kernel.logging_config import get_logger
from payroll_modules.attendance.models import (
    AttendanceCalculation,
    AttendanceSessionRecord,
    SessionSlot,
    SessionStatus,
)
from payroll_modules.attendance.orm import AttendanceSessionModel
from payroll_modules.employees.service import EmployeeDirectory

logger = get_logger("modules.attendance.service")


class AttendanceService:
    """
    Monthly attendance aggregation for one employee.

    ``aggregate`` is the side-effect-free read used inside batch
    savepoints; ``calculate_attendance`` is the standalone entry point
    that also quarantines corrupt rows.
    """

    def __init__(self, session: Session, policy: WorkCalendarPolicy = DEFAULT_POLICY):
        self._session = session
        self._policy = policy
        self._employees = EmployeeDirectory(session)

    def get_month_sessions(
        self, employee_id: UUID, year: int, month: int,
    ) -> tuple[AttendanceSessionRecord, ...]:
        first, last = month_bounds(year, month)
        rows = self._session.scalars(
            select(AttendanceSessionModel)
            .where(
                AttendanceSessionModel.employee_id == employee_id,
                AttendanceSessionModel.session_date >= first,
                AttendanceSessionModel.session_date <= last,
            )
            .order_by(AttendanceSessionModel.session_date, AttendanceSessionModel.slot)
        ).all()
        return tuple(row.to_dto() for row in rows)

    def aggregate(self, employee_id: UUID, year: int, month: int) -> AttendanceCalculation:
        """Run the engine over the stored sessions.  No writes."""
        validate_period(year, month)
        sessions = self.get_month_sessions(employee_id, year, month)
        return aggregate_attendance(
            employee_id=employee_id,
            year=year,
            month=month,
            sessions=sessions,
            policy=self._policy,
        )

    def calculate_attendance(
        self, employee_id: UUID, year: int, month: int,
    ) -> AttendanceCalculation:
        validate_period(year, month)
        self._employees.get_profile(employee_id)
        try:
            return self.aggregate(employee_id, year, month)
        except CorruptSessionRecordError as exc:
            logger.error(
                "corrupt_session_record",
                exc_info=True,
                extra={
                    "employee_id": str(employee_id),
                    "session_id": exc.session_id,
                    "period": f"{year}-{month:02d}",
                    "reason": exc.reason,
                },
            )
            try:
                self.flag_for_review(UUID(exc.session_id))
                self._session.commit()
            except Exception:
                self._session.rollback()
                raise
            raise

    def flag_for_review(self, session_id: UUID) -> None:
        """Mark one session row for manual review (flush only)."""
        self._session.execute(
            update(AttendanceSessionModel)
            .where(AttendanceSessionModel.id == session_id)
            .values(flagged_for_review=True)
        )
        self._session.flush()
        logger.warning("session_flagged_for_review", extra={"session_id": str(session_id)})

    def record_session(
        self,
        employee_id: UUID,
        session_date: date,
        slot: SessionSlot,
        check_in: datetime | None = None,
        check_out: datetime | None = None,
        status: SessionStatus = SessionStatus.FULL,
        duration_minutes: int | None = None,
    ) -> AttendanceSessionRecord:
        """Upsert a raw session keyed on (employee, date, slot)."""
        self._employees.get_profile(employee_id)
        if duration_minutes is None:
            if check_in is not None and check_out is not None:
                duration_minutes = max(int((check_out - check_in).total_seconds() // 60), 0)
            else:
                duration_minutes = 0
        try:
            model = self._session.scalars(
                select(AttendanceSessionModel).where(
                    AttendanceSessionModel.employee_id == employee_id,
                    AttendanceSessionModel.session_date == session_date,
                    AttendanceSessionModel.slot == slot.value,
                )
            ).one_or_none()
            if model is None:
                model = AttendanceSessionModel(
                    employee_id=employee_id,
                    session_date=session_date,
                    slot=slot.value,
                )
                self._session.add(model)
            model.status = status.value
            model.check_in = check_in
            model.check_out = check_out
            model.duration_minutes = duration_minutes
            self._session.flush()
            record = model.to_dto()
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise

        logger.info(
            "attendance_session_recorded",
            extra={
                "employee_id": str(employee_id),
                "session_date": session_date.isoformat(),
                "slot": slot.value,
                "status": status.value,
                "duration_minutes": duration_minutes,
            },
        )
        return record
