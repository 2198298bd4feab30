"""Errors raised by the attendance engine."""

from __future__ import annotations

from datetime import date
from uuid import UUID


class AttendanceEngineError(Exception):
    """Base class for engine errors."""

    code = "ATTENDANCE_ERROR"


class InvalidRangeError(AttendanceEngineError):
    """Raised when a report's end date precedes its start date."""

    code = "INVALID_RANGE"

    def __init__(self, start_date: date, end_date: date):
        self.start_date = start_date
        self.end_date = end_date
        super().__init__(
            f"Invalid date range: end date {end_date} is before start date {start_date}"
        )


class UnknownEmployeeError(AttendanceEngineError):
    """Raised when the organizational store has no such employee."""

    code = "EMPLOYEE_NOT_FOUND"

    def __init__(self, employee_id: UUID):
        self.employee_id = employee_id
        super().__init__(f"Employee {employee_id} not found")


class UnknownManagerError(AttendanceEngineError):
    """Raised when a manager identity does not resolve for the requested report."""

    code = "MANAGER_NOT_FOUND"

    def __init__(self, manager_id: UUID, expected_role: str, reason: str | None = None):
        self.manager_id = manager_id
        self.expected_role = expected_role
        self.reason = reason
        msg = f"No {expected_role} found for {manager_id}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class CollaboratorUnavailableError(AttendanceEngineError):
    """Raised by a store that failed to answer.

    The engine never retries; retry policy belongs to the caller.
    """

    code = "STORE_UNAVAILABLE"

    def __init__(self, operation: str, detail: str | None = None):
        self.operation = operation
        self.detail = detail
        msg = f"Store operation '{operation}' failed"
        if detail:
            msg += f": {detail}"
        super().__init__(msg)
