"""Property-based tests for deduction invariants.

These tests use hypothesis to generate check-in times, deduction
sequences and organizations, and verify that the invariants hold
regardless of the inputs.
"""

from __future__ import annotations

import asyncio
from datetime import date, time, timedelta
from decimal import Decimal
from uuid import UUID, uuid4

from hypothesis import given, settings, strategies as st

from attendance_engine.calculators.aggregator import HierarchicalAggregator
from attendance_engine.calculators.allowance_ledger import AllowanceLedger
from attendance_engine.calculators.daily_rule import DailyDeductionRule
from attendance_engine.calculators.types import (
    DeductionClassification,
    DeductionOutcome,
    ManagerSummary,
    Role,
)
from attendance_engine.stores import InMemoryAttendanceStore

RAW_FRACTIONS = [Decimal("0"), Decimal("0.25"), Decimal("0.5"), Decimal("1.0")]

raw_sequences = st.lists(st.sampled_from(RAW_FRACTIONS), min_size=1, max_size=120)
roles = st.sampled_from(list(Role))
optional_check_ins = st.one_of(st.none(), st.times())


def outcomes_from(raws: list[Decimal], start: date = date(2024, 3, 1)) -> list[DeductionOutcome]:
    employee_id = uuid4()
    return [
        DeductionOutcome(
            employee_id=employee_id,
            work_date=start + timedelta(days=i),
            raw_deduction_days=raw,
            lateness_minutes=0,
            classification=DeductionClassification.SEVERE,
        )
        for i, raw in enumerate(raws)
    ]


# =============================================================================
# Daily Rule
# =============================================================================


class TestDailyRuleInvariants:
    """Invariants of the band classification."""

    @given(check_in=optional_check_ins)
    @settings(max_examples=200)
    def test_raw_deduction_is_a_known_fraction(self, check_in: time | None):
        raw, _ = DailyDeductionRule.classify(check_in)

        assert raw in RAW_FRACTIONS

    @given(check_in=st.times())
    @settings(max_examples=200)
    def test_on_time_iff_not_later_than_boundary(self, check_in: time):
        _, classification = DailyDeductionRule.classify(check_in)

        on_time = classification == DeductionClassification.ON_TIME
        assert on_time == (check_in <= time(8, 30))
        assert (DailyDeductionRule.lateness_minutes(check_in) == 0) or not on_time

    @given(a=st.times(), b=st.times())
    @settings(max_examples=200)
    def test_later_check_in_never_deducts_less(self, a: time, b: time):
        earlier, later = sorted((a, b))

        assert DailyDeductionRule.classify(earlier)[0] <= DailyDeductionRule.classify(later)[0]


# =============================================================================
# Allowance Ledger
# =============================================================================


class TestLedgerInvariants:
    """Invariants of the running allowance fold."""

    @given(raws=raw_sequences, role=roles)
    @settings(max_examples=100)
    def test_net_bounded_by_raw(self, raws: list[Decimal], role: Role):
        for outcome in AllowanceLedger(role).apply(outcomes_from(raws)):
            assert Decimal("0") <= outcome.net_deduction_days <= outcome.raw_deduction_days

    @given(raws=raw_sequences, role=roles)
    @settings(max_examples=100)
    def test_consumption_is_monotone_and_capped(self, raws: list[Decimal], role: Role):
        ledger = AllowanceLedger(role)
        previous = Decimal("0")

        for outcome in ledger.apply(outcomes_from(raws)):
            assert previous <= outcome.allowance_consumed_days <= ledger.allowance
            previous = outcome.allowance_consumed_days

    @given(raws=raw_sequences, role=roles)
    @settings(max_examples=100)
    def test_total_net_is_excess_over_allowance(self, raws: list[Decimal], role: Role):
        """Within one allowance year, net totals are whatever the allowance missed."""
        ledger = AllowanceLedger(role)

        result = ledger.apply(outcomes_from(raws))

        total_net = sum((o.net_deduction_days for o in result), Decimal("0"))
        assert total_net == max(Decimal("0"), sum(raws, Decimal("0")) - ledger.allowance)


# =============================================================================
# Aggregation
# =============================================================================


def build_team(report_check_ins: list[list[time | None]]) -> tuple[InMemoryAttendanceStore, UUID]:
    store = InMemoryAttendanceStore()
    manager_id = uuid4()
    store.add_employee(manager_id, Role.LINE_MANAGER)
    for check_ins in report_check_ins:
        employee_id = uuid4()
        store.add_employee(employee_id, Role.EMPLOYEE, manager_id)
        for offset, check_in in enumerate(check_ins):
            store.add_record(employee_id, date(2024, 3, 1) + timedelta(days=offset), check_in)
    return store, manager_id


class TestAggregationInvariants:
    """Invariants of team summaries."""

    @given(
        teams=st.lists(
            st.lists(optional_check_ins, min_size=0, max_size=40),
            min_size=0,
            max_size=6,
        ),
        concurrency=st.integers(min_value=1, max_value=4),
    )
    @settings(max_examples=30, deadline=None)
    def test_aggregate_is_sum_of_reports(
        self, teams: list[list[time | None]], concurrency: int
    ):
        store, manager_id = build_team(teams)
        aggregator = HierarchicalAggregator(store, store, concurrency=concurrency)

        summary: ManagerSummary = asyncio.run(
            aggregator.line_manager_summary(manager_id, date(2024, 3, 10), date(2024, 4, 5))
        )

        children = list(summary.subordinates.values())
        assert list(summary.subordinates) == sorted(summary.subordinates)
        assert summary.aggregate_net_deduction_days == sum(
            (c.total_net_deduction_days for c in children), Decimal("0")
        )
        assert summary.aggregate_raw_deduction_days == sum(
            (c.total_raw_deduction_days for c in children), Decimal("0")
        )
        assert summary.aggregate_net_deduction_days <= summary.aggregate_raw_deduction_days
