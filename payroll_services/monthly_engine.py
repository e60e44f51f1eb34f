"""
MonthlyPayrollEngine -- per-employee and whole-company salary computation.

Responsibility:
    Fetches the employee's terms and the three monthly aggregates
    (attendance, leave, rewards), runs the pure salary engine, and returns
    a ``MonthlySalaryResult``.  The batch entry point runs every active
    employee in its own SAVEPOINT and collects failures instead of
    aborting.

Architecture position:
    Services -- stateful orchestration over modules and engines.
    Does not persist results; ``SalaryReportService`` does.

Invariants enforced:
    - The period is validated before any aggregation.
    - The three aggregates are independent; the salary engine sees only
      frozen values.
    - Batch isolation: one employee's failure rolls back only that
      employee's SAVEPOINT; successes are still returned.
    - ``calculated_at`` comes from the injected clock.

Failure modes:
    - Single-employee calls propagate typed errors (InvalidPeriodError,
      EmployeeNotFoundError, CorruptSessionRecordError,
      SalaryComputationError).
    - Batch calls never raise for per-employee errors; each becomes a
      ``PayrollFailure(employee_id, error_code, message)``.

Audit relevance:
    Every per-employee computation runs inside a LogContext carrying the
    employee id and period, so engine traces can be tied to the result.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any
from uuid import UUID

from sqlalchemy.orm import Session

from payroll_engines.salary import compute_salary
from payroll_kernel.domain.calendar import DEFAULT_POLICY, WorkCalendarPolicy, validate_period
from payroll_kernel.domain.clock import Clock, SystemClock
from payroll_kernel.exceptions import CorruptSessionRecordError
from payroll_kernel.logging_config import LogContext, get_logger
from payroll_modules.attendance.models import AttendanceCalculation
from payroll_modules.attendance.service import AttendanceService
from payroll_modules.employees.models import EmployeeProfile
from payroll_modules.employees.service import EmployeeDirectory
from payroll_modules.leave.service import LeaveService
from payroll_modules.payroll.models import MonthlySalaryResult, PayrollBatchResult, PayrollFailure
from payroll_modules.rewards.service import RewardService

logger = get_logger("services.monthly_engine")


class MonthlyPayrollEngine:
    """
    Orchestrates the monthly salary computation.

    Usage::

        engine = MonthlyPayrollEngine(session, policy=policy, clock=clock)
        result = engine.calculate_monthly_salary(employee_id, 2026, 2)
        batch = engine.calculate_all_salaries(2026, 2)
    """

    def __init__(
        self,
        session: Session,
        policy: WorkCalendarPolicy = DEFAULT_POLICY,
        clock: Clock | None = None,
    ):
        self._session = session
        self._policy = policy
        self._clock = clock or SystemClock()
        self._employees = EmployeeDirectory(session)
        self._attendance = AttendanceService(session, policy)
        self._leaves = LeaveService(session, policy, self._clock)
        self._rewards = RewardService(session, policy, self._clock)

    def calculate_monthly_salary(
        self, employee_id: UUID, year: int, month: int,
    ) -> MonthlySalaryResult:
        return self._calculate(employee_id, year, month, is_estimate=False)

    def estimate_salary(
        self, employee_id: UUID, year: int, month: int,
    ) -> MonthlySalaryResult:
        """Same computation for a month still in progress; never persisted."""
        return self._calculate(employee_id, year, month, is_estimate=True)

    def calculate_all_salaries(self, year: int, month: int) -> PayrollBatchResult:
        return self.for_each_active_employee(
            year, month, lambda profile: self.calculate_in_batch(profile, year, month),
        )

    def calculate_in_batch(
        self, profile: EmployeeProfile, year: int, month: int,
    ) -> MonthlySalaryResult:
        """Compute inside a caller-owned SAVEPOINT: no commit, no flagging."""
        with LogContext.payslip(profile.id, year, month):
            attendance = self._attendance.aggregate(profile.id, year, month)
            return self._build_result(profile, year, month, attendance, is_estimate=False)

    def for_each_active_employee(
        self,
        year: int,
        month: int,
        work: Callable[[EmployeeProfile], Any],
    ) -> PayrollBatchResult:
        """
        Run ``work`` for every active employee, one SAVEPOINT each.

        Corrupt session rows met along the way are flagged for review after
        their employee's SAVEPOINT is rolled back, then the whole batch is
        committed.
        """
        validate_period(year, month)
        employees = self._employees.list_active()
        logger.info(
            "payroll_batch_started",
            extra={"period": f"{year}-{month:02d}", "employee_count": len(employees)},
        )

        results: list[Any] = []
        failures: list[PayrollFailure] = []
        corrupt_sessions: list[str] = []

        for profile in employees:
            savepoint = self._session.begin_nested()
            try:
                result = work(profile)
                savepoint.commit()
                results.append(result)
            except Exception as exc:
                savepoint.rollback()
                code = getattr(exc, "code", "UNHANDLED_EXCEPTION")
                failures.append(PayrollFailure(profile.id, code, str(exc)))
                logger.warning(
                    "payroll_employee_failed",
                    exc_info=True,
                    extra={
                        "employee_id": str(profile.id),
                        "period": f"{year}-{month:02d}",
                        "error_code": code,
                        "error_message": str(exc),
                    },
                )
                if isinstance(exc, CorruptSessionRecordError):
                    corrupt_sessions.append(exc.session_id)

        try:
            for session_id in corrupt_sessions:
                self._attendance.flag_for_review(UUID(session_id))
            self._session.commit()
        except Exception:
            self._session.rollback()
            raise

        logger.info(
            "payroll_batch_completed",
            extra={
                "period": f"{year}-{month:02d}",
                "succeeded": len(results),
                "failed": len(failures),
            },
        )
        return PayrollBatchResult(
            year=year,
            month=month,
            results=tuple(results),
            failures=tuple(failures),
        )

    def _calculate(
        self, employee_id: UUID, year: int, month: int, is_estimate: bool,
    ) -> MonthlySalaryResult:
        validate_period(year, month)
        profile = self._employees.get_profile(employee_id)
        with LogContext.payslip(employee_id, year, month):
            attendance = self._attendance.calculate_attendance(employee_id, year, month)
            return self._build_result(profile, year, month, attendance, is_estimate)

    def _build_result(
        self,
        profile: EmployeeProfile,
        year: int,
        month: int,
        attendance: AttendanceCalculation,
        is_estimate: bool,
    ) -> MonthlySalaryResult:
        leaves = self._leaves.get_monthly_summary(profile.id, year, month)
        rewards = self._rewards.get_monthly_summary(profile.id, year, month)
        salary = compute_salary(
            terms=profile.terms,
            attendance=attendance,
            leaves=leaves,
            rewards=rewards,
            year=year,
            month=month,
            policy=self._policy,
        )

        logger.info(
            "salary_calculated",
            extra={
                "employee_id": str(profile.id),
                "period": f"{year}-{month:02d}",
                "gross_salary": str(salary.gross_salary),
                "net_salary": str(salary.net_salary),
                "is_estimate": is_estimate,
            },
        )
        return MonthlySalaryResult(
            employee_id=profile.id,
            employee_name=profile.full_name,
            employee_number=profile.employee_number,
            contract_type=profile.contract_type,
            year=year,
            month=month,
            attendance=attendance,
            leaves=leaves,
            rewards=rewards,
            salary=salary,
            calculated_at=self._clock.now(),
            is_estimate=is_estimate,
            department=profile.department,
            position=profile.position,
        )
