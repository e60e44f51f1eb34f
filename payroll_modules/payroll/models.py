"""
Payroll Domain Models (``payroll_modules.payroll.models``).

Responsibility
--------------
Frozen dataclass value objects for the salary computation output
(``SalaryBreakdown``), the orchestrator result (``MonthlySalaryResult``),
batch outcomes, and persisted salary reports.

Architecture position
---------------------
**Modules layer** -- pure data definitions with ZERO I/O.

Invariants enforced
-------------------
* All models are ``frozen=True``.
* All monetary fields are ``Decimal`` with two decimal places.
* ``SalaryBreakdown.absence_deduction`` already includes
  ``partial_day_deduction``; ``unpaid_leave_deduction`` is reported on
  its own.  Report consumers depend on this split.

Audit relevance
---------------
* A persisted report stores the full ``MonthlySalaryResult`` payload so
  a later recomputation can be compared field by field.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from uuid import UUID

from payroll_modules.attendance.models import AttendanceCalculation
from payroll_modules.employees.models import ContractType
from payroll_modules.leave.models import LeaveSummary
from payroll_modules.rewards.models import RewardSummary


class SalaryReportStatus(Enum):
    """Salary report lifecycle states."""
    DRAFT = "DRAFT"
    CALCULATED = "CALCULATED"
    APPROVED = "APPROVED"
    PAID = "PAID"


@dataclass(frozen=True)
class SalaryBreakdown:
    """Final salary figures for one employee/month."""
    base_salary: Decimal
    daily_rate: Decimal
    hourly_rate: Decimal
    worked_days_pay: Decimal
    overtime_pay: Decimal
    reward_bonus: Decimal
    absence_deduction: Decimal
    partial_day_deduction: Decimal
    unpaid_leave_deduction: Decimal
    total_deductions: Decimal
    paid_leave_days: Decimal
    unpaid_leave_days: Decimal
    sick_leave_days: Decimal
    other_leave_days: Decimal
    reward_days: int
    gross_salary: Decimal
    net_salary: Decimal
    requires_review: bool = False


@dataclass(frozen=True)
class MonthlySalaryResult:
    """Salary computation for one employee/month, with its inputs."""
    employee_id: UUID
    employee_name: str
    employee_number: str
    contract_type: ContractType
    year: int
    month: int
    attendance: AttendanceCalculation
    leaves: LeaveSummary
    rewards: RewardSummary
    salary: SalaryBreakdown
    calculated_at: datetime
    is_estimate: bool = False
    department: str | None = None
    position: str | None = None


@dataclass(frozen=True)
class PayrollFailure:
    """One employee whose computation failed inside a batch."""
    employee_id: UUID
    error_code: str
    message: str


@dataclass(frozen=True)
class PayrollBatchResult:
    """Outcome of a whole-company run: successes and collected failures."""
    year: int
    month: int
    results: tuple = field(default_factory=tuple)
    failures: tuple[PayrollFailure, ...] = field(default_factory=tuple)

    @property
    def success_count(self) -> int:
        return len(self.results)

    @property
    def failure_count(self) -> int:
        return len(self.failures)


@dataclass(frozen=True)
class SalaryReport:
    """A persisted salary report keyed by (employee, year, month)."""
    id: UUID
    employee_id: UUID
    year: int
    month: int
    status: SalaryReportStatus
    base_salary: Decimal
    gross_salary: Decimal
    net_salary: Decimal
    total_deductions: Decimal
    overtime_pay: Decimal
    reward_bonus: Decimal
    worked_days: Decimal
    absent_days: Decimal
    payload: dict = field(default_factory=dict)
    calculated_at: datetime | None = None
    generated_by_id: UUID | None = None
    approved_by_id: UUID | None = None
    approved_at: datetime | None = None
    paid_at: datetime | None = None


@dataclass(frozen=True)
class PayrollTotals:
    """Company totals over the salary reports of one month."""
    year: int
    month: int
    employee_count: int
    total_gross: Decimal
    total_net: Decimal
    total_deductions: Decimal
    total_overtime: Decimal
    total_rewards: Decimal
    average_net: Decimal
    by_status: dict[str, int] = field(default_factory=dict)
