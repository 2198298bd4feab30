"""Attendance report endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Path, status
from fastapi.responses import JSONResponse

from attendance_engine.api.dependencies import Aggregator, Calculator, ReportRange
from attendance_engine.api.schemas import (
    EmployeeSummaryResponse,
    ErrorResponse,
    ManagerSummaryResponse,
)
from attendance_engine.calculators.errors import (
    AttendanceEngineError,
    CollaboratorUnavailableError,
    InvalidRangeError,
    UnknownEmployeeError,
    UnknownManagerError,
)

router = APIRouter(prefix="/reports", tags=["reports"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    503: {"model": ErrorResponse},
}


def _error_response(exc: AttendanceEngineError) -> JSONResponse:
    """Translate an engine error into the matching HTTP error."""
    if isinstance(exc, InvalidRangeError):
        status_code = status.HTTP_400_BAD_REQUEST
    elif isinstance(exc, (UnknownEmployeeError, UnknownManagerError)):
        status_code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, CollaboratorUnavailableError):
        status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    else:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(detail=str(exc), code=exc.code).model_dump(),
    )


@router.get(
    "/employees/{employee_id}",
    response_model=EmployeeSummaryResponse,
    responses=ERROR_RESPONSES,
)
async def employee_report(
    calculator: Calculator,
    date_range: ReportRange,
    employee_id: Annotated[UUID, Path()],
) -> EmployeeSummaryResponse | JSONResponse:
    """Daily deductions and totals for one employee."""
    try:
        summary = await calculator.calculate(
            employee_id, date_range.start_date, date_range.end_date
        )
    except AttendanceEngineError as e:
        return _error_response(e)
    return EmployeeSummaryResponse.from_summary(summary)


@router.get(
    "/line-managers/{manager_id}",
    response_model=ManagerSummaryResponse,
    responses=ERROR_RESPONSES,
)
async def line_manager_report(
    aggregator: Aggregator,
    date_range: ReportRange,
    manager_id: Annotated[UUID, Path()],
) -> ManagerSummaryResponse | JSONResponse:
    """Team report over a line manager's direct reports."""
    try:
        summary = await aggregator.line_manager_summary(
            manager_id, date_range.start_date, date_range.end_date
        )
    except AttendanceEngineError as e:
        return _error_response(e)
    return ManagerSummaryResponse.from_summary(summary)


@router.get(
    "/department-managers/{manager_id}",
    response_model=ManagerSummaryResponse,
    responses=ERROR_RESPONSES,
)
async def department_report(
    aggregator: Aggregator,
    date_range: ReportRange,
    manager_id: Annotated[UUID, Path()],
) -> ManagerSummaryResponse | JSONResponse:
    """Department report, nested by line manager."""
    try:
        summary = await aggregator.department_summary(
            manager_id, date_range.start_date, date_range.end_date
        )
    except AttendanceEngineError as e:
        return _error_response(e)
    return ManagerSummaryResponse.from_summary(summary)


@router.get(
    "/ceos/{ceo_id}",
    response_model=ManagerSummaryResponse,
    responses=ERROR_RESPONSES,
)
async def company_report(
    aggregator: Aggregator,
    date_range: ReportRange,
    ceo_id: Annotated[UUID, Path()],
) -> ManagerSummaryResponse | JSONResponse:
    """Company report, nested by department and line manager."""
    try:
        summary = await aggregator.company_summary(
            ceo_id, date_range.start_date, date_range.end_date
        )
    except AttendanceEngineError as e:
        return _error_response(e)
    return ManagerSummaryResponse.from_summary(summary)
