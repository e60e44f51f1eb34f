"""Tests for the PAYROLL_ENGINE_TRACE decorator and input fingerprinting."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from uuid import UUID

from payroll_engines.reward import summarize_rewards
from payroll_engines.tracer import compute_input_fingerprint, traced_engine
from payroll_modules.attendance.models import SessionStatus


@dataclass(frozen=True)
class _Sample:
    amount: Decimal
    status: SessionStatus


class TestInputFingerprint:

    def test_same_inputs_same_fingerprint(self):
        kwargs = {"year": 2026, "month": 2, "amount": Decimal("1500")}
        fields = ("year", "month", "amount")
        assert compute_input_fingerprint(fields, kwargs) == compute_input_fingerprint(fields, dict(kwargs))

    def test_decimal_scale_does_not_change_fingerprint(self):
        fields = ("amount",)
        assert compute_input_fingerprint(fields, {"amount": Decimal("1500")}) == (
            compute_input_fingerprint(fields, {"amount": Decimal("1500.000000000")})
        )

    def test_different_values_differ(self):
        fields = ("sample",)
        a = compute_input_fingerprint(fields, {"sample": _Sample(Decimal("1"), SessionStatus.FULL)})
        b = compute_input_fingerprint(fields, {"sample": _Sample(Decimal("1"), SessionStatus.PARTIAL)})
        assert a != b
        assert len(a) == 16

    def test_missing_field_is_null(self):
        fields = ("absent",)
        assert compute_input_fingerprint(fields, {}) == compute_input_fingerprint(fields, {"absent": None})

    def test_dict_order_is_irrelevant(self):
        fields = ("mapping",)
        assert compute_input_fingerprint(fields, {"mapping": {"a": 1, "b": 2}}) == (
            compute_input_fingerprint(fields, {"mapping": {"b": 2, "a": 1}})
        )


class TestTracedEngine:

    def test_trace_record_emitted(self, captured_logs):
        @traced_engine("demo", "2.1", fingerprint_fields=("day",))
        def engine(*, day: date) -> str:
            return day.isoformat()

        assert engine(day=date(2026, 2, 9)) == "2026-02-09"

        traces = [r for r in captured_logs() if r["message"] == "PAYROLL_ENGINE_TRACE"]
        assert len(traces) == 1
        assert traces[0]["engine_name"] == "demo"
        assert traces[0]["engine_version"] == "2.1"
        assert traces[0]["input_fingerprint"] == compute_input_fingerprint(
            ("day",), {"day": date(2026, 2, 9)},
        )
        assert traces[0]["logger"] == "payroll_kernel.engines.tracer"

    def test_wrapped_engine_keeps_name(self):
        assert summarize_rewards.__name__ == "summarize_rewards"

    def test_real_engine_traced(self, captured_logs):
        employee_id = UUID("00000000-0000-0000-0000-0000000000aa")
        summarize_rewards(employee_id=employee_id, rewards=[], year=2026, month=2)
        traces = [r for r in captured_logs() if r.get("engine_name") == "reward_summary"]
        assert len(traces) == 1
