"""Yearly allowance bookkeeping.

Allowance consumption is never stored. It is a running total folded over
the raw deductions of every day since the allowance year began (March 1),
so re-running the fold over the same days always yields the same result.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Iterable

from attendance_engine.calculators.types import DeductionOutcome, Role, ZERO

ALLOWANCE_YEAR_START_MONTH = 3

MANAGER_TIER_ALLOWANCE_DAYS = Decimal("35.0")
EMPLOYEE_TIER_ALLOWANCE_DAYS = Decimal("21.0")


def allowance_year_start(day: date) -> date:
    """Return March 1 of the allowance year containing ``day``."""
    if day.month >= ALLOWANCE_YEAR_START_MONTH:
        return date(day.year, ALLOWANCE_YEAR_START_MONTH, 1)
    return date(day.year - 1, ALLOWANCE_YEAR_START_MONTH, 1)


def role_allowance_days(role: Role) -> Decimal:
    """Yearly allowance for a role's tier."""
    if role.is_manager_tier:
        return MANAGER_TIER_ALLOWANCE_DAYS
    return EMPLOYEE_TIER_ALLOWANCE_DAYS


class AllowanceLedger:
    """Converts raw daily deductions into net deductions for one employee.

    Days are absorbed by the allowance until it is exhausted. On the day it
    runs out only the portion exceeding the allowance is charged; every
    later day in the same allowance year is charged in full.
    """

    def __init__(self, role: Role):
        self.role = role
        self.allowance = role_allowance_days(role)

    def apply(self, outcomes: Iterable[DeductionOutcome]) -> list[DeductionOutcome]:
        """Return the outcomes with net deduction and running consumption set.

        ``outcomes`` must be in ascending date order. The running total
        restarts whenever a day falls in a later allowance year than the
        previous one.
        """
        result: list[DeductionOutcome] = []
        consumed = ZERO
        current_year: date | None = None

        for outcome in outcomes:
            year_start = allowance_year_start(outcome.work_date)
            if year_start != current_year:
                current_year = year_start
                consumed = ZERO

            net, consumed = self.charge(consumed, outcome.raw_deduction_days)
            result.append(
                replace(
                    outcome,
                    net_deduction_days=net,
                    allowance_consumed_days=consumed,
                )
            )

        return result

    def charge(self, consumed: Decimal, raw: Decimal) -> tuple[Decimal, Decimal]:
        """Charge one day's raw deduction against the allowance.

        Returns (net deduction, consumed after this day).
        """
        total = consumed + raw
        if total <= self.allowance:
            return ZERO, total
        return max(ZERO, total - self.allowance), self.allowance
