"""
Employee directory (``payroll_modules.employees.service``).

Read-only access to the employee-profile store.  Writes (hiring,
contract changes) belong to the HR system that owns the table.
"""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from payroll_kernel.exceptions import EmployeeNotFoundError
from payroll_kernel.logging_config import get_logger
from payroll_modules.employees.models import EmployeeProfile, EmploymentTerms
from payroll_modules.employees.orm import EmployeeModel

logger = get_logger("modules.employees.service")


class EmployeeDirectory:
    """Employee profile lookups used by every payroll service."""

    def __init__(self, session: Session):
        self._session = session

    def get_profile(self, employee_id: UUID) -> EmployeeProfile:
        """Raises EmployeeNotFoundError for an unknown id."""
        model = self._session.get(EmployeeModel, employee_id)
        if model is None:
            logger.info("employee_not_found", extra={"employee_id": str(employee_id)})
            raise EmployeeNotFoundError(str(employee_id))
        return model.to_dto()

    def get_terms(self, employee_id: UUID) -> EmploymentTerms:
        return self.get_profile(employee_id).terms

    def list_active(self) -> list[EmployeeProfile]:
        """Active employees ordered by employee number."""
        rows = self._session.scalars(
            select(EmployeeModel)
            .where(EmployeeModel.is_active.is_(True))
            .order_by(EmployeeModel.employee_number)
        ).all()
        return [row.to_dto() for row in rows]

    def add(self, profile: EmployeeProfile) -> EmployeeProfile:
        """Insert a profile (flush only; the caller owns the transaction)."""
        model = EmployeeModel.from_dto(profile)
        self._session.add(model)
        self._session.flush()
        return model.to_dto()
