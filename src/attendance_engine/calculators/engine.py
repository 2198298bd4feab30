"""Attendance calculator - per-employee orchestrator."""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import TYPE_CHECKING, Iterator, Sequence
from uuid import UUID

from attendance_engine.calculators.allowance_ledger import (
    AllowanceLedger,
    allowance_year_start,
    role_allowance_days,
)
from attendance_engine.calculators.daily_rule import DailyDeductionRule
from attendance_engine.calculators.errors import InvalidRangeError, UnknownEmployeeError
from attendance_engine.calculators.monthly_exception import MonthlyExceptionRule
from attendance_engine.calculators.types import (
    AllowanceAccount,
    AttendanceEntry,
    DeductionOutcome,
    EmployeeAttendanceSummary,
    Role,
    ZERO,
)

if TYPE_CHECKING:
    from attendance_engine.stores.base import AttendanceRecordStore, OrganizationStore

logger = logging.getLogger(__name__)


def validate_range(start_date: date, end_date: date) -> None:
    """Raise InvalidRangeError when end_date precedes start_date."""
    if end_date < start_date:
        raise InvalidRangeError(start_date, end_date)


def iter_days(start_date: date, end_date: date) -> Iterator[date]:
    """Every calendar day in [start_date, end_date]."""
    day = start_date
    while day <= end_date:
        yield day
        day += timedelta(days=1)


class AttendanceCalculator:
    """Computes one employee's deductions over a date range.

    Calculation pipeline:
    1) Fetch records from the allowance-year start through end_date
    2) Apply the daily rule to every calendar day of that span
    3) Run the allowance ledger over the full span
    4) Apply the monthly exception rule per calendar month
    5) Slice to [start_date, end_date] and sum totals

    The span before start_date is computed only so that allowance
    exhaustion is reflected correctly inside the requested range.
    """

    def __init__(self, records: AttendanceRecordStore, organization: OrganizationStore):
        self.records = records
        self.organization = organization

    async def calculate(
        self,
        employee_id: UUID,
        start_date: date,
        end_date: date,
        role: Role | None = None,
    ) -> EmployeeAttendanceSummary:
        """Build the attendance summary for one employee.

        Raises:
            InvalidRangeError: If end_date is before start_date
            UnknownEmployeeError: If the organizational store has no such employee
        """
        validate_range(start_date, end_date)

        if role is None:
            role = await self.organization.get_employee_role(employee_id)
            if role is None:
                raise UnknownEmployeeError(employee_id)

        span_start = allowance_year_start(start_date)
        entries = await self.records.get_attendance_records(employee_id, span_start, end_date)

        summary = self.summarize(employee_id, role, start_date, end_date, entries)
        logger.debug(
            "Computed attendance for %s (%s) %s..%s: raw=%s net=%s",
            employee_id,
            role.value,
            start_date,
            end_date,
            summary.total_raw_deduction_days,
            summary.total_net_deduction_days,
        )
        return summary

    def summarize(
        self,
        employee_id: UUID,
        role: Role,
        start_date: date,
        end_date: date,
        entries: Sequence[AttendanceEntry],
    ) -> EmployeeAttendanceSummary:
        """Pure part of the calculation, given already-fetched records.

        The span stops at end_date, so the monthly exception for the last
        month sees only that month's days up to end_date. A day's net
        deduction can therefore differ between a report ending mid-month
        and one ending on the last day of the month: two absences so far
        are forgiven, a full month of absences is not.
        """
        validate_range(start_date, end_date)
        span_start = allowance_year_start(start_date)

        by_date = {e.work_date: e for e in entries if span_start <= e.work_date <= end_date}
        outcomes = [
            DailyDeductionRule.evaluate(employee_id, day, by_date.get(day))
            for day in iter_days(span_start, end_date)
        ]

        outcomes = AllowanceLedger(role).apply(outcomes)
        outcomes = MonthlyExceptionRule.apply(outcomes)

        breakdown = tuple(o for o in outcomes if o.work_date >= start_date)

        return EmployeeAttendanceSummary(
            employee_id=employee_id,
            role=role,
            start_date=start_date,
            end_date=end_date,
            total_raw_deduction_days=sum((o.raw_deduction_days for o in breakdown), ZERO),
            total_net_deduction_days=sum((o.net_deduction_days for o in breakdown), ZERO),
            daily_breakdown=breakdown,
            allowance=self._allowance_account(employee_id, role, end_date, outcomes),
        )

    @staticmethod
    def _allowance_account(
        employee_id: UUID,
        role: Role,
        as_of: date,
        outcomes: list[DeductionOutcome],
    ) -> AllowanceAccount:
        return AllowanceAccount(
            employee_id=employee_id,
            allowance_year_start=allowance_year_start(as_of),
            role_allowance_days=role_allowance_days(role),
            consumed_days=outcomes[-1].allowance_consumed_days if outcomes else ZERO,
        )

