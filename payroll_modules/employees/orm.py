"""
Employee ORM Persistence Model (``payroll_modules.employees.orm``).

Responsibility:
    SQLAlchemy model persisting ``EmployeeProfile`` with ``to_dto()`` /
    ``from_dto()`` round-trip conversion.

Invariants enforced:
    - ``employee_number`` is unique.
    - Monetary fields are Decimal (Numeric(38,9)) -- NEVER float.
    - ``contract_type`` stored as String(50) containing the enum value.
    - ``annual_leave_days`` NULL means "use the calendar policy default".
"""

from datetime import date
from decimal import Decimal

from sqlalchemy import Boolean, Date, Index, Numeric, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from payroll_kernel.db.base import TrackedBase


class EmployeeModel(TrackedBase):
    """ORM model for ``EmployeeProfile``."""

    __tablename__ = "payroll_employees"

    employee_number: Mapped[str] = mapped_column(String(50), nullable=False)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    base_salary: Mapped[Decimal] = mapped_column(nullable=False)
    hourly_rate: Mapped[Decimal] = mapped_column(nullable=False, default=Decimal("0"))
    contract_type: Mapped[str] = mapped_column(String(50), nullable=False, default="CDI")
    annual_leave_days: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    department: Mapped[str | None] = mapped_column(String(100), nullable=True)
    position: Mapped[str | None] = mapped_column(String(100), nullable=True)
    hire_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    __table_args__ = (
        UniqueConstraint("employee_number", name="uq_payroll_employee_number"),
        Index("idx_payroll_employee_active", "is_active"),
    )

    def to_dto(self):
        from payroll_modules.employees.models import ContractType, EmployeeProfile
        return EmployeeProfile(
            id=self.id,
            employee_number=self.employee_number,
            first_name=self.first_name,
            last_name=self.last_name,
            base_salary=self.base_salary,
            hourly_rate=self.hourly_rate,
            contract_type=ContractType(self.contract_type),
            annual_leave_days=self.annual_leave_days,
            department=self.department,
            position=self.position,
            hire_date=self.hire_date,
            is_active=self.is_active,
        )

    @classmethod
    def from_dto(cls, dto) -> "EmployeeModel":
        return cls(
            id=dto.id,
            employee_number=dto.employee_number,
            first_name=dto.first_name,
            last_name=dto.last_name,
            base_salary=dto.base_salary,
            hourly_rate=dto.hourly_rate,
            contract_type=dto.contract_type.value if hasattr(dto.contract_type, "value") else dto.contract_type,
            annual_leave_days=dto.annual_leave_days,
            department=dto.department,
            position=dto.position,
            hire_date=dto.hire_date,
            is_active=dto.is_active,
        )

    def __repr__(self) -> str:
        return (
            f"<EmployeeModel {self.employee_number}: "
            f"{self.first_name} {self.last_name} ({self.contract_type})>"
        )
