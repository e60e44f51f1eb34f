"""
Salary Report ORM Persistence Model (``payroll_modules.payroll.orm``).

Responsibility:
    SQLAlchemy model persisting ``SalaryReport``: the headline figures as
    columns for querying, and the full computation as a JSON payload.

Invariants enforced:
    - One row per (employee_id, year, month) (uq_salary_report_period);
      regeneration overwrites the row instead of inserting a second one.
    - Monetary columns are Decimal (Numeric(38,9)) -- NEVER float.
    - ``status`` stored as String(50) enum value.

Audit relevance:
    ``payload`` holds the ``MonthlySalaryResult`` exactly as computed,
    decimals as strings, so the report reproduces bit-identically.
"""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from sqlalchemy import JSON, ForeignKey, Index, Integer, Numeric, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from payroll_kernel.db.base import TrackedBase


class SalaryReportModel(TrackedBase):
    """ORM model for ``SalaryReport``."""

    __tablename__ = "payroll_salary_reports"

    employee_id: Mapped[UUID] = mapped_column(ForeignKey("payroll_employees.id"), nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    month: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(String(50), nullable=False, default="DRAFT")
    base_salary: Mapped[Decimal] = mapped_column(nullable=False)
    gross_salary: Mapped[Decimal] = mapped_column(nullable=False)
    net_salary: Mapped[Decimal] = mapped_column(nullable=False)
    total_deductions: Mapped[Decimal] = mapped_column(nullable=False)
    overtime_pay: Mapped[Decimal] = mapped_column(nullable=False)
    reward_bonus: Mapped[Decimal] = mapped_column(nullable=False)
    worked_days: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    absent_days: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    payload: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    calculated_at: Mapped[datetime | None] = mapped_column(nullable=True)
    generated_by_id: Mapped[UUID | None] = mapped_column(nullable=True)
    approved_by_id: Mapped[UUID | None] = mapped_column(nullable=True)
    approved_at: Mapped[datetime | None] = mapped_column(nullable=True)
    paid_at: Mapped[datetime | None] = mapped_column(nullable=True)

    __table_args__ = (
        UniqueConstraint("employee_id", "year", "month", name="uq_salary_report_period"),
        Index("idx_salary_report_period", "year", "month"),
    )

    def to_dto(self):
        from payroll_modules.payroll.models import SalaryReport, SalaryReportStatus
        return SalaryReport(
            id=self.id,
            employee_id=self.employee_id,
            year=self.year,
            month=self.month,
            status=SalaryReportStatus(self.status),
            base_salary=self.base_salary,
            gross_salary=self.gross_salary,
            net_salary=self.net_salary,
            total_deductions=self.total_deductions,
            overtime_pay=self.overtime_pay,
            reward_bonus=self.reward_bonus,
            worked_days=self.worked_days,
            absent_days=self.absent_days,
            payload=dict(self.payload or {}),
            calculated_at=self.calculated_at,
            generated_by_id=self.generated_by_id,
            approved_by_id=self.approved_by_id,
            approved_at=self.approved_at,
            paid_at=self.paid_at,
        )

    def __repr__(self) -> str:
        return (
            f"<SalaryReportModel {self.employee_id} "
            f"{self.year}-{self.month:02d}: {self.status} net={self.net_salary}>"
        )
