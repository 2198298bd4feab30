"""Type definitions for the deduction and aggregation pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, time
from decimal import Decimal
from enum import Enum
from typing import Iterator, Union
from uuid import UUID

ZERO = Decimal("0")


class Role(str, Enum):
    """Organizational roles."""

    EMPLOYEE = "employee"
    LINE_MANAGER = "line_manager"
    DEPARTMENT_MANAGER = "department_manager"
    CEO = "ceo"

    @property
    def is_manager_tier(self) -> bool:
        return self is not Role.EMPLOYEE


class DeductionClassification(str, Enum):
    """Lateness classification of a single day."""

    ON_TIME = "on_time"
    MINOR = "minor"
    MODERATE = "moderate"
    SEVERE = "severe"
    ABSENT = "absent"
    NON_WORKING = "non_working"


class ReportLevel(str, Enum):
    """Level of a manager summary in the hierarchy."""

    LINE_MANAGER = "line_manager"
    DEPARTMENT = "department"
    COMPANY = "company"


@dataclass(frozen=True)
class AttendanceEntry:
    """A single day's attendance as supplied by the record store."""

    employee_id: UUID
    work_date: date
    check_in: time | None = None
    check_out: time | None = None
    is_working_day: bool = True


@dataclass(frozen=True)
class DeductionOutcome:
    """Deduction result for one employee on one day."""

    employee_id: UUID
    work_date: date
    raw_deduction_days: Decimal
    lateness_minutes: int
    classification: DeductionClassification
    net_deduction_days: Decimal = ZERO
    worked_seconds: int = 0
    allowance_consumed_days: Decimal = ZERO  # running total after this day
    exception_applied: bool = False


@dataclass(frozen=True)
class AllowanceAccount:
    """Allowance consumption for one employee in one allowance year."""

    employee_id: UUID
    allowance_year_start: date
    role_allowance_days: Decimal
    consumed_days: Decimal

    @property
    def remaining_days(self) -> Decimal:
        return self.role_allowance_days - self.consumed_days


@dataclass(frozen=True)
class EmployeeAttendanceSummary:
    """One employee's deductions over a date range."""

    employee_id: UUID
    role: Role
    start_date: date
    end_date: date
    total_raw_deduction_days: Decimal
    total_net_deduction_days: Decimal
    daily_breakdown: tuple[DeductionOutcome, ...]
    allowance: AllowanceAccount

    @property
    def aggregate_net_deduction_days(self) -> Decimal:
        return self.total_net_deduction_days

    @property
    def aggregate_raw_deduction_days(self) -> Decimal:
        return self.total_raw_deduction_days


SubordinateSummary = Union[EmployeeAttendanceSummary, "ManagerSummary"]


@dataclass(frozen=True)
class ManagerSummary:
    """Summary over a manager's subordinates.

    ``scope_id`` identifies what was summarized: the line manager for team
    reports, the department for department reports, the company for CEO
    reports. Subordinates are keyed in ascending identifier order.
    """

    level: ReportLevel
    manager_id: UUID | None
    scope_id: UUID
    start_date: date
    end_date: date
    subordinates: dict[UUID, SubordinateSummary] = field(default_factory=dict)
    aggregate_raw_deduction_days: Decimal = ZERO
    aggregate_net_deduction_days: Decimal = ZERO

    def iter_employee_summaries(self) -> Iterator[EmployeeAttendanceSummary]:
        """Yield every leaf employee summary reachable under this node."""
        for child in self.subordinates.values():
            if isinstance(child, ManagerSummary):
                yield from child.iter_employee_summaries()
            else:
                yield child

    @property
    def employee_count(self) -> int:
        return sum(1 for _ in self.iter_employee_summaries())
