"""
Employee Domain Models (``payroll_modules.employees.models``).

Responsibility
--------------
Frozen dataclass value objects for the employee-profile store: the
profile itself and the ``EmploymentTerms`` snapshot consumed by the
salary calculator.

Architecture position
---------------------
**Modules layer** -- pure data definitions with ZERO I/O.

Invariants enforced
-------------------
* All models are ``frozen=True``.
* All monetary fields use ``Decimal`` -- NEVER ``float``.
* ``hourly_rate == 0`` means "not set, derive from the daily rate".
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from uuid import UUID


class ContractType(Enum):
    """Employment contract types."""
    CDI = "CDI"
    CDD = "CDD"
    STAGE = "STAGE"
    ALTERNANCE = "ALTERNANCE"
    FREELANCE = "FREELANCE"


@dataclass(frozen=True)
class EmploymentTerms:
    """Per-employee contract snapshot used for one salary computation."""
    base_salary: Decimal
    hourly_rate: Decimal = Decimal("0")
    contract_type: ContractType = ContractType.CDI

    def __post_init__(self):
        if self.base_salary < 0:
            raise ValueError("base_salary cannot be negative")
        if self.hourly_rate < 0:
            raise ValueError("hourly_rate cannot be negative")


@dataclass(frozen=True)
class EmployeeProfile:
    """An employee as seen by payroll."""
    id: UUID
    employee_number: str
    first_name: str
    last_name: str
    base_salary: Decimal
    hourly_rate: Decimal = Decimal("0")
    contract_type: ContractType = ContractType.CDI
    annual_leave_days: Decimal | None = None
    department: str | None = None
    position: str | None = None
    hire_date: date | None = None
    is_active: bool = True

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def terms(self) -> EmploymentTerms:
        return EmploymentTerms(
            base_salary=self.base_salary,
            hourly_rate=self.hourly_rate,
            contract_type=self.contract_type,
        )
