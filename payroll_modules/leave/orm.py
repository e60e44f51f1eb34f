"""
Leave ORM Persistence Model (``payroll_modules.leave.orm``).

Responsibility:
    SQLAlchemy model persisting ``LeaveRecord`` with ``to_dto()`` /
    ``from_dto()`` conversion.

Invariants enforced:
    - ``leave_type`` and ``status`` stored as String(50) enum values.
    - ``duration_days`` is Decimal (Numeric(12,2)), 0.5 for half days.
    - No overlapping PENDING/APPROVED rows per employee; enforced by
      ``LeaveService`` before insert.
"""

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from sqlalchemy import Boolean, Date, ForeignKey, Index, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from payroll_kernel.db.base import TrackedBase


class LeaveRequestModel(TrackedBase):
    """ORM model for ``LeaveRecord``."""

    __tablename__ = "payroll_leave_requests"

    employee_id: Mapped[UUID] = mapped_column(ForeignKey("payroll_employees.id"), nullable=False)
    leave_type: Mapped[str] = mapped_column(String(50), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[str] = mapped_column(String(50), nullable=False, default="PENDING")
    duration_days: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    is_half_day: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    half_day_slot: Mapped[str | None] = mapped_column(String(50), nullable=True)
    impact_on_salary: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    reason: Mapped[str | None] = mapped_column(String(4000), nullable=True)
    approved_by_id: Mapped[UUID | None] = mapped_column(nullable=True)
    approved_at: Mapped[datetime | None] = mapped_column(nullable=True)
    rejection_reason: Mapped[str | None] = mapped_column(String(4000), nullable=True)

    __table_args__ = (
        Index("idx_leave_employee_dates", "employee_id", "start_date", "end_date"),
        Index("idx_leave_status", "status"),
    )

    def to_dto(self):
        from payroll_modules.leave.models import LeaveRecord, LeaveStatus, LeaveType
        return LeaveRecord(
            id=self.id,
            employee_id=self.employee_id,
            leave_type=LeaveType(self.leave_type),
            start_date=self.start_date,
            end_date=self.end_date,
            status=LeaveStatus(self.status),
            duration_days=self.duration_days,
            is_half_day=self.is_half_day,
            half_day_slot=self.half_day_slot,
            impact_on_salary=self.impact_on_salary,
            reason=self.reason,
            approved_by_id=self.approved_by_id,
            approved_at=self.approved_at,
            rejection_reason=self.rejection_reason,
        )

    @classmethod
    def from_dto(cls, dto) -> "LeaveRequestModel":
        return cls(
            id=dto.id,
            employee_id=dto.employee_id,
            leave_type=dto.leave_type.value if hasattr(dto.leave_type, "value") else dto.leave_type,
            start_date=dto.start_date,
            end_date=dto.end_date,
            status=dto.status.value if hasattr(dto.status, "value") else dto.status,
            duration_days=dto.duration_days,
            is_half_day=dto.is_half_day,
            half_day_slot=dto.half_day_slot,
            impact_on_salary=dto.impact_on_salary,
            reason=dto.reason,
            approved_by_id=dto.approved_by_id,
            approved_at=dto.approved_at,
            rejection_reason=dto.rejection_reason,
        )

    def __repr__(self) -> str:
        return (
            f"<LeaveRequestModel {self.employee_id} {self.leave_type} "
            f"{self.start_date}..{self.end_date}: {self.status}>"
        )
