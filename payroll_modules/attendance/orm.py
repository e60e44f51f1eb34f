"""
Attendance ORM Persistence Model (``payroll_modules.attendance.orm``).

Responsibility:
    SQLAlchemy model persisting ``AttendanceSessionRecord`` with
    ``to_dto()`` / ``from_dto()`` conversion.

Invariants enforced:
    - At most one row per (employee_id, session_date, slot)
      (uq_attendance_session_slot).  Every upsert is keyed on that triple.
    - ``slot`` and ``status`` stored as String(50) enum values.
"""

from datetime import date, datetime
from uuid import UUID

from sqlalchemy import Boolean, Date, ForeignKey, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from payroll_kernel.db.base import TrackedBase


class AttendanceSessionModel(TrackedBase):
    """ORM model for ``AttendanceSessionRecord``."""

    __tablename__ = "payroll_attendance_sessions"

    employee_id: Mapped[UUID] = mapped_column(ForeignKey("payroll_employees.id"), nullable=False)
    session_date: Mapped[date] = mapped_column(Date, nullable=False)
    slot: Mapped[str] = mapped_column(String(50), nullable=False)
    status: Mapped[str] = mapped_column(String(50), nullable=False)
    check_in: Mapped[datetime | None] = mapped_column(nullable=True)
    check_out: Mapped[datetime | None] = mapped_column(nullable=True)
    duration_minutes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    flagged_for_review: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    __table_args__ = (
        UniqueConstraint("employee_id", "session_date", "slot", name="uq_attendance_session_slot"),
        Index("idx_attendance_employee_date", "employee_id", "session_date"),
    )

    def to_dto(self):
        from payroll_modules.attendance.models import (
            AttendanceSessionRecord,
            SessionSlot,
            SessionStatus,
        )
        return AttendanceSessionRecord(
            id=self.id,
            employee_id=self.employee_id,
            session_date=self.session_date,
            slot=SessionSlot(self.slot),
            status=SessionStatus(self.status),
            check_in=self.check_in,
            check_out=self.check_out,
            duration_minutes=self.duration_minutes,
            flagged_for_review=self.flagged_for_review,
        )

    @classmethod
    def from_dto(cls, dto) -> "AttendanceSessionModel":
        return cls(
            id=dto.id,
            employee_id=dto.employee_id,
            session_date=dto.session_date,
            slot=dto.slot.value if hasattr(dto.slot, "value") else dto.slot,
            status=dto.status.value if hasattr(dto.status, "value") else dto.status,
            check_in=dto.check_in,
            check_out=dto.check_out,
            duration_minutes=dto.duration_minutes,
            flagged_for_review=dto.flagged_for_review,
        )

    def __repr__(self) -> str:
        return (
            f"<AttendanceSessionModel {self.employee_id} "
            f"{self.session_date} {self.slot}: {self.status}>"
        )
