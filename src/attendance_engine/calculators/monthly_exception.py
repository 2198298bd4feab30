"""Per-month forgiveness of net deductions."""

from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal
from itertools import groupby
from typing import Iterable

from attendance_engine.calculators.types import (
    DeductionClassification,
    DeductionOutcome,
    ZERO,
)

SECONDS_PER_HOUR = 3600


@dataclass(frozen=True)
class MonthStatistics:
    """Absence count and time worked for one calendar month."""

    year: int
    month: int
    absence_count: int
    worked_seconds: int

    @property
    def hours_worked(self) -> Decimal:
        return Decimal(self.worked_seconds) / Decimal(SECONDS_PER_HOUR)


class MonthlyExceptionRule:
    """Forces a month's net deductions to zero under the forgiveness threshold.

    Applied after the allowance ledger. Allowance consumption recorded on
    the outcomes is left untouched: forgiving a month's deduction never
    refunds allowance already counted against it.
    """

    MAX_ABSENCES = 2
    MAX_WORKED_SECONDS = 4 * SECONDS_PER_HOUR

    @staticmethod
    def month_statistics(outcomes: Iterable[DeductionOutcome]) -> MonthStatistics:
        """Collect statistics for outcomes that all fall in one month."""
        absences = 0
        worked = 0
        year = month = 0
        for outcome in outcomes:
            year, month = outcome.work_date.year, outcome.work_date.month
            if outcome.classification is DeductionClassification.ABSENT:
                absences += 1
            worked += outcome.worked_seconds
        return MonthStatistics(
            year=year, month=month, absence_count=absences, worked_seconds=worked
        )

    @classmethod
    def is_forgiven(cls, stats: MonthStatistics) -> bool:
        return (
            stats.absence_count <= cls.MAX_ABSENCES
            and stats.worked_seconds <= cls.MAX_WORKED_SECONDS
        )

    @classmethod
    def apply(cls, outcomes: Iterable[DeductionOutcome]) -> list[DeductionOutcome]:
        """Apply the rule to date-ordered outcomes, month by month."""
        result: list[DeductionOutcome] = []

        def month_key(outcome: DeductionOutcome) -> tuple[int, int]:
            return outcome.work_date.year, outcome.work_date.month

        for _, month_outcomes in groupby(outcomes, key=month_key):
            days = list(month_outcomes)
            if cls.is_forgiven(cls.month_statistics(days)):
                days = [
                    replace(day, net_deduction_days=ZERO, exception_applied=True)
                    for day in days
                ]
            result.extend(days)

        return result
