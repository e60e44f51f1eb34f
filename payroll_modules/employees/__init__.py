"""
Employees Module (``payroll_modules.employees``).

Employee profiles and the ``EmploymentTerms`` snapshot read by the
salary calculator.  The HR system owns writes to this table; payroll
only reads it (``EmployeeDirectory``).
"""

from payroll_modules.employees.models import ContractType, EmployeeProfile, EmploymentTerms

__all__ = ["ContractType", "EmployeeProfile", "EmploymentTerms"]
