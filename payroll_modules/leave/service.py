"""
Leave Module Service (``payroll_modules.leave.service``).

Responsibility
--------------
Leave request lifecycle (create, approve, reject), the yearly balance,
the monthly summary consumed by salary computation, and the calendar
view of a month.  Arithmetic is delegated to ``payroll_engines.leave``.

Architecture position
---------------------
**Modules layer** -- thin glue.  Approval publishes ``LeaveApproved`` to
the ``AttendanceSessionMaterializer`` inside the same transaction.

Invariants enforced
-------------------
* The creation chain short-circuits in a fixed order: half-day shape,
  date order, non-zero duration, no overlap, sufficient balance.
* No two PENDING/APPROVED requests of one employee overlap.
* ``impact_on_salary`` is derived from the type.
* Rejection never touches attendance sessions already materialized.
* Each public write method owns the transaction boundary
  (``commit`` on success, ``rollback`` on failure).

Failure modes
-------------
* ``LeaveValidationError`` / ``NoWorkingDayError`` -- malformed request.
* ``OverlappingLeaveError`` -- carries the conflicting request id.
* ``InsufficientLeaveBalanceError`` -- carries remaining and requested.
* ``InvalidStatusTransitionError`` -- e.g. approving a REJECTED request.
* ``EmployeeNotFoundError`` / ``LeaveNotFoundError`` -- unknown ids.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from payroll_engines.leave import compute_leave_balance, leave_duration, summarize_month_leaves
from payroll_kernel.domain.calendar import (
    DEFAULT_POLICY,
    WorkCalendarPolicy,
    month_bounds,
    validate_period,
)
from payroll_kernel.domain.clock import Clock, SystemClock
from payroll_kernel.domain.events import LeaveApproved
from payroll_kernel.exceptions import (
    InsufficientLeaveBalanceError,
    InvalidStatusTransitionError,
    LeaveNotFoundError,
    LeaveValidationError,
    NoWorkingDayError,
    OverlappingLeaveError,
)
from payroll_kernel.logging_config import get_logger
from payroll_modules.attendance.materializer import AttendanceSessionMaterializer
from payroll_modules.attendance.models import SessionSlot
from payroll_modules.employees.service import EmployeeDirectory
from payroll_modules.leave.models import (
    ACTIVE_LEAVE_STATUSES,
    ANNUAL_LEAVE_TYPES,
    LeaveBalance,
    LeaveRecord,
    LeaveStatus,
    LeaveSummary,
    LeaveType,
    impacts_salary,
)
from payroll_modules.leave.orm import LeaveRequestModel

logger = get_logger("modules.leave.service")


class LeaveService:
    """
    Leave requests for all employees.

    Usage::

        service = LeaveService(session, policy=policy, clock=clock)
        leave = service.create_leave_request(
            employee_id, LeaveType.PAID, date(2026, 3, 2), date(2026, 3, 6),
        )
        service.approve_leave(leave.id, approver_id)
    """

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

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def create_leave_request(
        self,
        employee_id: UUID,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        is_half_day: bool = False,
        half_day_slot: SessionSlot | str | None = None,
        reason: str | None = None,
    ) -> LeaveRecord:
        """Validate and persist a PENDING leave request."""
        self._employees.get_profile(employee_id)

        slot_value: str | None = None
        if is_half_day:
            if start_date != end_date:
                raise LeaveValidationError("a half-day leave must start and end on the same date")
            if half_day_slot is None:
                raise LeaveValidationError("a half-day leave must specify the slot")
            try:
                slot_value = SessionSlot(
                    half_day_slot.value if isinstance(half_day_slot, SessionSlot) else half_day_slot
                ).value
            except ValueError as exc:
                raise LeaveValidationError(f"unknown half-day slot {half_day_slot!r}") from exc

        if start_date > end_date:
            raise LeaveValidationError("start_date must not be after end_date")

        duration = leave_duration(start_date, end_date, is_half_day, self._policy)
        if duration <= 0:
            raise NoWorkingDayError(start_date.isoformat(), end_date.isoformat())

        conflict = self._find_overlap(employee_id, start_date, end_date)
        if conflict is not None:
            logger.info(
                "leave_overlap_rejected",
                extra={
                    "employee_id": str(employee_id),
                    "conflicting_leave_id": str(conflict.id),
                },
            )
            raise OverlappingLeaveError(str(employee_id), str(conflict.id))

        if leave_type in ANNUAL_LEAVE_TYPES:
            balance = self.get_leave_balance(employee_id, start_date.year)
            if balance.remaining < duration:
                raise InsufficientLeaveBalanceError(balance.remaining, duration)

        try:
            model = LeaveRequestModel(
                employee_id=employee_id,
                leave_type=leave_type.value,
                start_date=start_date,
                end_date=end_date,
                status=LeaveStatus.PENDING.value,
                duration_days=duration,
                is_half_day=is_half_day,
                half_day_slot=slot_value,
                impact_on_salary=impacts_salary(leave_type),
                reason=reason,
            )
            self._session.add(model)
            self._session.flush()
            record = model.to_dto()
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise

        logger.info(
            "leave_request_created",
            extra={
                "leave_id": str(record.id),
                "employee_id": str(employee_id),
                "leave_type": leave_type.value,
                "start_date": start_date.isoformat(),
                "end_date": end_date.isoformat(),
                "duration_days": str(duration),
            },
        )
        return record

    def approve_leave(self, leave_id: UUID, approver_id: UUID) -> LeaveRecord:
        """PENDING -> APPROVED and materialize the leave sessions.

        Approving an already APPROVED request keeps the original stamps and
        re-publishes the event, which upserts the same sessions.
        """
        model = self._get_model(leave_id)
        current = LeaveStatus(model.status)
        if current == LeaveStatus.REJECTED:
            raise InvalidStatusTransitionError(
                "leave", str(leave_id), current.value, LeaveStatus.APPROVED.value,
            )

        try:
            if current == LeaveStatus.PENDING:
                model.status = LeaveStatus.APPROVED.value
                model.approved_by_id = approver_id
                model.approved_at = self._clock.now()
            touched = self._materializer.handle(
                LeaveApproved(
                    employee_id=model.employee_id,
                    start_date=model.start_date,
                    end_date=model.end_date,
                    half_day_slot=model.half_day_slot if model.is_half_day else None,
                )
            )
            self._session.flush()
            record = model.to_dto()
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise

        logger.info(
            "leave_approved",
            extra={
                "leave_id": str(leave_id),
                "employee_id": str(record.employee_id),
                "approver_id": str(approver_id),
                "previous_status": current.value,
                "sessions_touched": touched,
            },
        )
        return record

    def reject_leave(self, leave_id: UUID, reason: str | None = None) -> LeaveRecord:
        """PENDING/APPROVED -> REJECTED.  Sessions already created stay."""
        model = self._get_model(leave_id)
        current = LeaveStatus(model.status)
        if current == LeaveStatus.REJECTED:
            raise InvalidStatusTransitionError(
                "leave", str(leave_id), current.value, LeaveStatus.REJECTED.value,
            )

        try:
            model.status = LeaveStatus.REJECTED.value
            model.rejection_reason = reason
            self._session.flush()
            record = model.to_dto()
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise

        logger.info(
            "leave_rejected",
            extra={
                "leave_id": str(leave_id),
                "employee_id": str(record.employee_id),
                "previous_status": current.value,
            },
        )
        return record

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_leave(self, leave_id: UUID) -> LeaveRecord:
        return self._get_model(leave_id).to_dto()

    def get_leave_balance(self, employee_id: UUID, year: int) -> LeaveBalance:
        profile = self._employees.get_profile(employee_id)
        allowance = (
            profile.annual_leave_days
            if profile.annual_leave_days is not None
            else self._policy.default_annual_leave_days
        )
        rows = self._session.scalars(
            select(LeaveRequestModel).where(
                LeaveRequestModel.employee_id == employee_id,
                LeaveRequestModel.start_date >= date(year, 1, 1),
                LeaveRequestModel.start_date <= date(year, 12, 31),
            )
        ).all()
        return compute_leave_balance(
            employee_id=employee_id,
            annual_allowance=Decimal(allowance),
            leaves=[row.to_dto() for row in rows],
            year=year,
        )

    def get_monthly_summary(self, employee_id: UUID, year: int, month: int) -> LeaveSummary:
        validate_period(year, month)
        self._employees.get_profile(employee_id)
        leaves = self._month_leaves(
            year, month, statuses=(LeaveStatus.APPROVED,), employee_id=employee_id,
        )
        return summarize_month_leaves(
            employee_id=employee_id,
            leaves=leaves,
            year=year,
            month=month,
            policy=self._policy,
        )

    def get_calendar_view(
        self, year: int, month: int, employee_id: UUID | None = None,
    ) -> tuple[LeaveRecord, ...]:
        """PENDING and APPROVED leaves intersecting the month, by start date."""
        validate_period(year, month)
        return self._month_leaves(
            year, month, statuses=tuple(ACTIVE_LEAVE_STATUSES), employee_id=employee_id,
        )

    def list_employee_leaves(
        self, employee_id: UUID, year: int | None = None,
    ) -> tuple[LeaveRecord, ...]:
        """All requests of one employee, newest start first."""
        stmt = select(LeaveRequestModel).where(LeaveRequestModel.employee_id == employee_id)
        if year is not None:
            stmt = stmt.where(
                LeaveRequestModel.start_date >= date(year, 1, 1),
                LeaveRequestModel.start_date <= date(year, 12, 31),
            )
        rows = self._session.scalars(stmt.order_by(LeaveRequestModel.start_date.desc())).all()
        return tuple(row.to_dto() for row in rows)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _get_model(self, leave_id: UUID) -> LeaveRequestModel:
        model = self._session.get(LeaveRequestModel, leave_id)
        if model is None:
            raise LeaveNotFoundError(str(leave_id))
        return model

    def _find_overlap(self, employee_id: UUID, start: date, end: date) -> LeaveRequestModel | None:
        return self._session.scalars(
            select(LeaveRequestModel)
            .where(
                LeaveRequestModel.employee_id == employee_id,
                LeaveRequestModel.status.in_([s.value for s in ACTIVE_LEAVE_STATUSES]),
                LeaveRequestModel.start_date <= end,
                LeaveRequestModel.end_date >= start,
            )
            .order_by(LeaveRequestModel.start_date)
            .limit(1)
        ).first()

    def _month_leaves(
        self,
        year: int,
        month: int,
        statuses: tuple[LeaveStatus, ...],
        employee_id: UUID | None = None,
    ) -> tuple[LeaveRecord, ...]:
        first, last = month_bounds(year, month)
        stmt = select(LeaveRequestModel).where(
            LeaveRequestModel.status.in_([s.value for s in statuses]),
            LeaveRequestModel.start_date <= last,
            LeaveRequestModel.end_date >= first,
        )
        if employee_id is not None:
            stmt = stmt.where(LeaveRequestModel.employee_id == employee_id)
        rows = self._session.scalars(
            stmt.order_by(LeaveRequestModel.start_date, LeaveRequestModel.created_at)
        ).all()
        return tuple(row.to_dto() for row in rows)
