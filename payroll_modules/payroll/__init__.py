"""
Payroll Module (``payroll_modules.payroll``).

Salary breakdowns, monthly results, batch outcomes and persisted salary
reports (DRAFT -> CALCULATED -> APPROVED -> PAID).  Orchestration lives in
``payroll_services``.
"""

from payroll_modules.payroll.models import (
    MonthlySalaryResult,
    PayrollBatchResult,
    PayrollFailure,
    PayrollTotals,
    SalaryBreakdown,
    SalaryReport,
    SalaryReportStatus,
)

__all__ = [
    "MonthlySalaryResult",
    "PayrollBatchResult",
    "PayrollFailure",
    "PayrollTotals",
    "SalaryBreakdown",
    "SalaryReport",
    "SalaryReportStatus",
]
