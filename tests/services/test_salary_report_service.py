"""
Tests for SalaryReportService: idempotent generation, the
CALCULATED -> APPROVED -> PAID lifecycle, the paid-report lock, and the
report queries.
"""

from datetime import date, datetime
from decimal import Decimal
from uuid import uuid4

import pytest

from payroll_kernel.exceptions import (
    EmployeeNotFoundError,
    InvalidPeriodError,
    InvalidStatusTransitionError,
    ReportLockedError,
    ReportNotFoundError,
)
from payroll_modules.attendance.models import SessionSlot
from payroll_modules.payroll.models import SalaryReportStatus
from payroll_services.locks import KeyedLockRegistry
from payroll_services.salary_report_service import SalaryReportService, to_payload

FEBRUARY = (2026, 2)


@pytest.fixture
def lock_registry():
    return KeyedLockRegistry()


@pytest.fixture
def reports(session, policy, deterministic_clock, lock_registry):
    return SalaryReportService(session, policy, deterministic_clock, lock_registry)


@pytest.fixture
def february_employee(make_employee, work_full_days, add_session, policy):
    employee = make_employee(base_salary=Decimal("1500"))
    work_dates = policy.work_dates_in_month(*FEBRUARY)
    work_full_days(employee.id, work_dates[:18])
    add_session(employee.id, work_dates[18], SessionSlot.MORNING)
    return employee


class TestGenerateReport:

    def test_generates_calculated_report(
        self, reports, february_employee, test_actor_id, deterministic_clock,
    ):
        report = reports.generate_report(february_employee.id, *FEBRUARY, test_actor_id)

        assert report.status == SalaryReportStatus.CALCULATED
        assert report.net_salary == Decimal("1387.50")
        assert report.total_deductions == Decimal("112.50")
        assert report.worked_days == Decimal("18.5")
        assert report.absent_days == Decimal("1")
        assert report.generated_by_id == test_actor_id
        assert report.calculated_at == deterministic_clock.now()
        assert report.payload["salary"]["net_salary"] == "1387.50"
        assert report.payload["attendance"]["expected_work_days"] == 20

    def test_generation_is_idempotent(self, reports, february_employee, test_actor_id, lock_registry):
        first = reports.generate_report(february_employee.id, *FEBRUARY, test_actor_id)
        second = reports.generate_report(february_employee.id, *FEBRUARY, test_actor_id)

        assert second.id == first.id
        assert second.net_salary == first.net_salary
        assert second.payload == first.payload
        assert len(reports.get_monthly_reports(*FEBRUARY)) == 1
        assert lock_registry.active_keys() == frozenset()

    def test_regeneration_picks_up_new_attendance(
        self, reports, february_employee, add_session, policy, test_actor_id,
    ):
        first = reports.generate_report(february_employee.id, *FEBRUARY, test_actor_id)
        work_dates = policy.work_dates_in_month(*FEBRUARY)
        add_session(february_employee.id, work_dates[18], SessionSlot.AFTERNOON)

        second = reports.generate_report(february_employee.id, *FEBRUARY, test_actor_id)

        assert second.id == first.id
        assert second.net_salary == Decimal("1425.00")

    def test_unknown_employee(self, reports, test_actor_id):
        with pytest.raises(EmployeeNotFoundError):
            reports.generate_report(uuid4(), *FEBRUARY, test_actor_id)

    def test_invalid_period(self, reports, february_employee, test_actor_id):
        with pytest.raises(InvalidPeriodError):
            reports.generate_report(february_employee.id, 2026, 13, test_actor_id)


class TestReportLifecycle:

    def test_approve_then_pay(self, reports, february_employee, test_actor_id, deterministic_clock):
        report = reports.generate_report(february_employee.id, *FEBRUARY, test_actor_id)
        approver = uuid4()

        approved = reports.approve_report(report.id, approver)
        assert approved.status == SalaryReportStatus.APPROVED
        assert approved.approved_by_id == approver
        assert approved.approved_at == deterministic_clock.now()

        deterministic_clock.advance(60)
        paid = reports.mark_as_paid(report.id)
        assert paid.status == SalaryReportStatus.PAID
        assert paid.paid_at == deterministic_clock.now()

    def test_paid_report_is_locked(self, reports, february_employee, test_actor_id):
        report = reports.generate_report(february_employee.id, *FEBRUARY, test_actor_id)
        reports.approve_report(report.id, test_actor_id)
        reports.mark_as_paid(report.id)

        with pytest.raises(ReportLockedError) as exc_info:
            reports.generate_report(february_employee.id, *FEBRUARY, test_actor_id)
        assert exc_info.value.code == "REPORT_LOCKED"
        assert reports.get_report(report.id).status == SalaryReportStatus.PAID

    def test_regenerating_approved_report_resets_approval(
        self, reports, february_employee, test_actor_id,
    ):
        report = reports.generate_report(february_employee.id, *FEBRUARY, test_actor_id)
        reports.approve_report(report.id, test_actor_id)

        regenerated = reports.generate_report(february_employee.id, *FEBRUARY, test_actor_id)

        assert regenerated.status == SalaryReportStatus.CALCULATED
        assert regenerated.approved_by_id is None
        assert regenerated.approved_at is None

    def test_pay_before_approval_fails(self, reports, february_employee, test_actor_id):
        report = reports.generate_report(february_employee.id, *FEBRUARY, test_actor_id)
        with pytest.raises(InvalidStatusTransitionError) as exc_info:
            reports.mark_as_paid(report.id)
        assert exc_info.value.from_status == "CALCULATED"

    def test_approve_twice_fails(self, reports, february_employee, test_actor_id):
        report = reports.generate_report(february_employee.id, *FEBRUARY, test_actor_id)
        reports.approve_report(report.id, test_actor_id)
        with pytest.raises(InvalidStatusTransitionError):
            reports.approve_report(report.id, test_actor_id)

    def test_unknown_report(self, reports, test_actor_id):
        with pytest.raises(ReportNotFoundError):
            reports.get_report(uuid4())
        with pytest.raises(ReportNotFoundError):
            reports.approve_report(uuid4(), test_actor_id)


class TestGenerateAllReports:

    def test_batch_generation_collects_failures(
        self, reports, february_employee, make_employee, add_session, test_actor_id,
    ):
        broken = make_employee()
        add_session(
            broken.id, date(2026, 2, 9), SessionSlot.MORNING,
            check_in=datetime(2026, 2, 9, 12, 0),
            check_out=datetime(2026, 2, 9, 8, 0),
        )

        batch = reports.generate_all_reports(*FEBRUARY, test_actor_id)

        assert batch.success_count == 1
        assert batch.results[0].employee_id == february_employee.id
        assert batch.failures[0].employee_id == broken.id
        assert reports.get_employee_report(broken.id, *FEBRUARY) is None
        assert reports.get_employee_report(february_employee.id, *FEBRUARY).net_salary == Decimal("1387.50")

    def test_paid_report_fails_inside_batch(
        self, reports, february_employee, make_employee, test_actor_id,
    ):
        other = make_employee()
        report = reports.generate_report(february_employee.id, *FEBRUARY, test_actor_id)
        reports.approve_report(report.id, test_actor_id)
        reports.mark_as_paid(report.id)

        batch = reports.generate_all_reports(*FEBRUARY, test_actor_id)

        assert [f.error_code for f in batch.failures] == ["REPORT_LOCKED"]
        assert [r.employee_id for r in batch.results] == [other.id]


class TestReportQueries:

    def test_monthly_reports_by_net_desc_and_totals(
        self, reports, february_employee, make_employee, work_full_days, policy, test_actor_id,
    ):
        senior = make_employee(base_salary=Decimal("3000"))
        work_full_days(senior.id, policy.work_dates_in_month(*FEBRUARY))
        reports.generate_all_reports(*FEBRUARY, test_actor_id)

        monthly = reports.get_monthly_reports(*FEBRUARY)
        assert [r.employee_id for r in monthly] == [senior.id, february_employee.id]

        reports.approve_report(monthly[0].id, test_actor_id)
        totals = reports.get_payroll_totals(*FEBRUARY)
        assert totals.employee_count == 2
        assert totals.total_gross == Decimal("4500.00")
        assert totals.total_net == Decimal("4387.50")
        assert totals.total_deductions == Decimal("112.50")
        assert totals.average_net == Decimal("2193.75")
        assert totals.by_status == {"APPROVED": 1, "CALCULATED": 1}

    def test_totals_for_empty_month(self, reports):
        totals = reports.get_payroll_totals(*FEBRUARY)
        assert totals.employee_count == 0
        assert totals.total_net == Decimal("0.00")
        assert totals.average_net == Decimal("0.00")

    def test_employee_history_newest_first(self, reports, make_employee, test_actor_id):
        employee = make_employee()
        for month in (1, 3, 2):
            reports.generate_report(employee.id, 2026, month, test_actor_id)

        history = reports.get_employee_history(employee.id)
        assert [(r.year, r.month) for r in history] == [(2026, 3), (2026, 2), (2026, 1)]
        assert len(reports.get_employee_history(employee.id, limit=2)) == 2


class TestPayload:

    def test_payload_is_json_safe(self):
        payload = to_payload({
            "amount": Decimal("1.50"),
            "day": date(2026, 2, 9),
            "status": SalaryReportStatus.PAID,
            "items": (1, 2),
        })
        assert payload == {
            "amount": "1.50",
            "day": "2026-02-09",
            "status": "PAID",
            "items": [1, 2],
        }
