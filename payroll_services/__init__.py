"""
Payroll Services -- stateful orchestration over modules and engines.

- ``MonthlyPayrollEngine``: per-employee and whole-company salary
  computation (single, estimate, batch).
- ``SalaryReportService``: persisted salary reports and their lifecycle.
- ``KeyedLockRegistry``: per-key serialization of report generation.
"""

from payroll_services.locks import KeyedLockRegistry
from payroll_services.monthly_engine import MonthlyPayrollEngine
from payroll_services.salary_report_service import SalaryReportService

__all__ = ["KeyedLockRegistry", "MonthlyPayrollEngine", "SalaryReportService"]
