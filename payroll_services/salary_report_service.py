"""
SalaryReportService -- persisted monthly salary reports.

Responsibility:
    Generates (computes and upserts) the salary report of one employee or
    of every active employee for a month, moves reports through their
    lifecycle (CALCULATED -> APPROVED -> PAID), and answers report
    queries and monthly totals.

Architecture position:
    Services -- owns the transaction boundary for report writes.
    Computation is delegated to ``MonthlyPayrollEngine``.

Invariants enforced:
    - One report per (employee, year, month); regeneration overwrites the
      row in place, so generating twice yields one row and the same
      figures.
    - Generation for one key is serialized through the injected
      ``KeyedLockRegistry`` and the row is read FOR UPDATE.
    - A PAID report is locked and never regenerated.
    - The stored payload is the computed ``MonthlySalaryResult`` with
      decimals as strings, so it reproduces bit-identically.

Failure modes:
    - ReportLockedError: regenerating a PAID report.
    - ReportNotFoundError: unknown report id.
    - InvalidStatusTransitionError: approve/pay out of order.
    - Everything ``MonthlyPayrollEngine`` raises for a single employee.
"""

from __future__ import annotations

import dataclasses
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from payroll_kernel.db.types import round_money
from payroll_kernel.domain.calendar import DEFAULT_POLICY, WorkCalendarPolicy, validate_period
from payroll_kernel.domain.clock import Clock, SystemClock
from payroll_kernel.exceptions import (
    InvalidStatusTransitionError,
    ReportLockedError,
    ReportNotFoundError,
)
from payroll_kernel.logging_config import get_logger
from payroll_modules.employees.models import EmployeeProfile
from payroll_modules.payroll.models import (
    MonthlySalaryResult,
    PayrollBatchResult,
    PayrollTotals,
    SalaryReport,
    SalaryReportStatus,
)
from payroll_modules.payroll.orm import SalaryReportModel
from payroll_services.locks import KeyedLockRegistry
from payroll_services.monthly_engine import MonthlyPayrollEngine

logger = get_logger("services.salary_report")


def to_payload(value: Any) -> Any:
    """JSON-safe rendering of a result tree: decimals and dates as strings."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_payload(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, dict):
        return {str(to_payload(k)): to_payload(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, frozenset, set)):
        return [to_payload(v) for v in value]
    return value


class SalaryReportService:
    """
    Salary report generation and lifecycle.

    Usage::

        reports = SalaryReportService(session, policy=policy, clock=clock)
        report = reports.generate_report(employee_id, 2026, 2, actor_id)
        reports.approve_report(report.id, approver_id)
        reports.mark_as_paid(report.id)
    """

    def __init__(
        self,
        session: Session,
        policy: WorkCalendarPolicy = DEFAULT_POLICY,
        clock: Clock | None = None,
        lock_registry: KeyedLockRegistry | None = None,
        payroll_engine: MonthlyPayrollEngine | None = None,
    ):
        self._session = session
        self._clock = clock or SystemClock()
        self._locks = lock_registry or KeyedLockRegistry()
        self._engine = payroll_engine or MonthlyPayrollEngine(session, policy, self._clock)

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------

    def generate_report(
        self, employee_id: UUID, year: int, month: int, actor_id: UUID,
    ) -> SalaryReport:
        validate_period(year, month)
        with self._locks.hold((employee_id, year, month)):
            existing = self._find(employee_id, year, month)
            if existing is not None and existing.status == SalaryReportStatus.PAID.value:
                raise ReportLockedError(str(existing.id), existing.status)

            result = self._engine.calculate_monthly_salary(employee_id, year, month)
            try:
                report = self._upsert(result, actor_id)
                self._session.commit()
            except Exception:
                self._session.rollback()
                raise

        logger.info(
            "salary_report_generated",
            extra={
                "report_id": str(report.id),
                "employee_id": str(employee_id),
                "period": f"{year}-{month:02d}",
                "net_salary": str(report.net_salary),
            },
        )
        return report

    def generate_all_reports(self, year: int, month: int, actor_id: UUID) -> PayrollBatchResult:
        """Generate every active employee's report; failures are collected."""

        def work(profile: EmployeeProfile) -> SalaryReport:
            with self._locks.hold((profile.id, year, month)):
                existing = self._find(profile.id, year, month)
                if existing is not None and existing.status == SalaryReportStatus.PAID.value:
                    raise ReportLockedError(str(existing.id), existing.status)
                result = self._engine.calculate_in_batch(profile, year, month)
                return self._upsert(result, actor_id)

        return self._engine.for_each_active_employee(year, month, work)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def approve_report(self, report_id: UUID, approver_id: UUID) -> SalaryReport:
        """CALCULATED -> APPROVED."""
        return self._transition(
            report_id,
            SalaryReportStatus.CALCULATED,
            SalaryReportStatus.APPROVED,
            approved_by_id=approver_id,
            approved_at=self._clock.now(),
        )

    def mark_as_paid(self, report_id: UUID) -> SalaryReport:
        """APPROVED -> PAID.  The report is locked afterwards."""
        return self._transition(
            report_id,
            SalaryReportStatus.APPROVED,
            SalaryReportStatus.PAID,
            paid_at=self._clock.now(),
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_report(self, report_id: UUID) -> SalaryReport:
        model = self._session.get(SalaryReportModel, report_id)
        if model is None:
            raise ReportNotFoundError(str(report_id))
        return model.to_dto()

    def get_employee_report(self, employee_id: UUID, year: int, month: int) -> SalaryReport | None:
        model = self._find(employee_id, year, month, for_update=False)
        return model.to_dto() if model is not None else None

    def get_monthly_reports(self, year: int, month: int) -> tuple[SalaryReport, ...]:
        """All reports of a month, highest net salary first."""
        validate_period(year, month)
        rows = self._session.scalars(
            select(SalaryReportModel)
            .where(SalaryReportModel.year == year, SalaryReportModel.month == month)
            .order_by(SalaryReportModel.net_salary.desc())
        ).all()
        return tuple(row.to_dto() for row in rows)

    def get_employee_history(self, employee_id: UUID, limit: int = 12) -> tuple[SalaryReport, ...]:
        """Most recent reports of one employee, newest period first."""
        rows = self._session.scalars(
            select(SalaryReportModel)
            .where(SalaryReportModel.employee_id == employee_id)
            .order_by(SalaryReportModel.year.desc(), SalaryReportModel.month.desc())
            .limit(limit)
        ).all()
        return tuple(row.to_dto() for row in rows)

    def get_payroll_totals(self, year: int, month: int) -> PayrollTotals:
        reports = self.get_monthly_reports(year, month)
        zero = Decimal("0")
        total_net = sum((r.net_salary for r in reports), zero)

        by_status = dict(
            self._session.execute(
                select(SalaryReportModel.status, func.count())
                .where(SalaryReportModel.year == year, SalaryReportModel.month == month)
                .group_by(SalaryReportModel.status)
            ).all()
        )
        return PayrollTotals(
            year=year,
            month=month,
            employee_count=len(reports),
            total_gross=round_money(sum((r.gross_salary for r in reports), zero)),
            total_net=round_money(total_net),
            total_deductions=round_money(sum((r.total_deductions for r in reports), zero)),
            total_overtime=round_money(sum((r.overtime_pay for r in reports), zero)),
            total_rewards=round_money(sum((r.reward_bonus for r in reports), zero)),
            average_net=round_money(total_net / len(reports)) if reports else round_money(zero),
            by_status=by_status,
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _find(
        self, employee_id: UUID, year: int, month: int, for_update: bool = True,
    ) -> SalaryReportModel | None:
        stmt = select(SalaryReportModel).where(
            SalaryReportModel.employee_id == employee_id,
            SalaryReportModel.year == year,
            SalaryReportModel.month == month,
        )
        if for_update:
            stmt = stmt.with_for_update()
        return self._session.execute(stmt).scalar_one_or_none()

    def _upsert(self, result: MonthlySalaryResult, actor_id: UUID) -> SalaryReport:
        """Insert or overwrite the report row (flush only)."""
        model = self._find(result.employee_id, result.year, result.month)
        if model is None:
            model = SalaryReportModel(
                employee_id=result.employee_id,
                year=result.year,
                month=result.month,
            )
            self._session.add(model)
        elif model.status == SalaryReportStatus.PAID.value:
            raise ReportLockedError(str(model.id), model.status)

        salary = result.salary
        model.status = SalaryReportStatus.CALCULATED.value
        model.base_salary = salary.base_salary
        model.gross_salary = salary.gross_salary
        model.net_salary = salary.net_salary
        model.total_deductions = salary.total_deductions
        model.overtime_pay = salary.overtime_pay
        model.reward_bonus = salary.reward_bonus
        model.worked_days = result.attendance.total_worked_days
        model.absent_days = result.attendance.absent_days
        model.payload = to_payload(result)
        model.calculated_at = result.calculated_at
        model.generated_by_id = actor_id
        model.approved_by_id = None
        model.approved_at = None
        self._session.flush()
        return model.to_dto()

    def _transition(
        self,
        report_id: UUID,
        expected: SalaryReportStatus,
        target: SalaryReportStatus,
        **stamps: Any,
    ) -> SalaryReport:
        model = self._session.get(SalaryReportModel, report_id)
        if model is None:
            raise ReportNotFoundError(str(report_id))
        if model.status != expected.value:
            raise InvalidStatusTransitionError(
                "salary_report", str(report_id), model.status, target.value,
            )

        try:
            model.status = target.value
            for name, value in stamps.items():
                setattr(model, name, value)
            self._session.flush()
            report = model.to_dto()
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise

        logger.info(
            "salary_report_status_changed",
            extra={
                "report_id": str(report_id),
                "from_status": expected.value,
                "to_status": target.value,
            },
        )
        return report
