"""Pydantic schemas for API response models."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Literal, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from attendance_engine.calculators.types import (
    AllowanceAccount,
    DeductionClassification,
    DeductionOutcome,
    EmployeeAttendanceSummary,
    ManagerSummary,
    ReportLevel,
    Role,
)


# ============================================================================
# Employee schemas
# ============================================================================


class DailyDeductionResponse(BaseModel):
    """One day of an employee's breakdown."""

    model_config = ConfigDict(from_attributes=True)

    work_date: date
    classification: DeductionClassification
    lateness_minutes: int
    raw_deduction_days: Decimal
    net_deduction_days: Decimal
    worked_seconds: int
    allowance_consumed_days: Decimal
    exception_applied: bool

    @classmethod
    def from_outcome(cls, outcome: DeductionOutcome) -> DailyDeductionResponse:
        return cls.model_validate(outcome)


class AllowanceResponse(BaseModel):
    """Allowance consumption as of the report's end date."""

    model_config = ConfigDict(from_attributes=True)

    allowance_year_start: date
    role_allowance_days: Decimal
    consumed_days: Decimal
    remaining_days: Decimal

    @classmethod
    def from_account(cls, account: AllowanceAccount) -> AllowanceResponse:
        return cls.model_validate(account)


class EmployeeSummaryResponse(BaseModel):
    """Attendance summary for one employee."""

    kind: Literal["employee"] = "employee"
    employee_id: UUID
    role: Role
    start_date: date
    end_date: date
    total_raw_deduction_days: Decimal
    total_net_deduction_days: Decimal
    allowance: AllowanceResponse
    daily_breakdown: list[DailyDeductionResponse]

    @classmethod
    def from_summary(cls, summary: EmployeeAttendanceSummary) -> EmployeeSummaryResponse:
        return cls(
            employee_id=summary.employee_id,
            role=summary.role,
            start_date=summary.start_date,
            end_date=summary.end_date,
            total_raw_deduction_days=summary.total_raw_deduction_days,
            total_net_deduction_days=summary.total_net_deduction_days,
            allowance=AllowanceResponse.from_account(summary.allowance),
            daily_breakdown=[
                DailyDeductionResponse.from_outcome(o) for o in summary.daily_breakdown
            ],
        )


# ============================================================================
# Manager schemas
# ============================================================================


class ManagerSummaryResponse(BaseModel):
    """Summary over a manager's subordinates (nested for departments and companies)."""

    kind: Literal["manager"] = "manager"
    level: ReportLevel
    manager_id: UUID | None
    scope_id: UUID
    start_date: date
    end_date: date
    employee_count: int
    aggregate_raw_deduction_days: Decimal
    aggregate_net_deduction_days: Decimal
    subordinates: dict[
        UUID,
        Union[EmployeeSummaryResponse, ManagerSummaryResponse],
    ] = Field(default_factory=dict)

    @classmethod
    def from_summary(cls, summary: ManagerSummary) -> ManagerSummaryResponse:
        subordinates: dict[UUID, EmployeeSummaryResponse | ManagerSummaryResponse] = {}
        for child_id, child in summary.subordinates.items():
            if isinstance(child, ManagerSummary):
                subordinates[child_id] = cls.from_summary(child)
            else:
                subordinates[child_id] = EmployeeSummaryResponse.from_summary(child)

        return cls(
            level=summary.level,
            manager_id=summary.manager_id,
            scope_id=summary.scope_id,
            start_date=summary.start_date,
            end_date=summary.end_date,
            employee_count=summary.employee_count,
            aggregate_raw_deduction_days=summary.aggregate_raw_deduction_days,
            aggregate_net_deduction_days=summary.aggregate_net_deduction_days,
            subordinates=subordinates,
        )


ManagerSummaryResponse.model_rebuild()


# ============================================================================
# Error schemas
# ============================================================================


class ErrorResponse(BaseModel):
    """Error body returned for engine failures and unexpected errors."""

    detail: str
    code: str
