"""Protocols for the read-only stores the engine consumes.

The engine never writes through these. Each store owns its own
consistency model; implementations raise CollaboratorUnavailableError
when they cannot answer.
"""

from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence
from uuid import UUID

from attendance_engine.calculators.types import AttendanceEntry, Role


class AttendanceRecordStore(Protocol):
    """Supplies attendance records."""

    async def get_attendance_records(
        self, employee_id: UUID, from_date: date, to_date: date
    ) -> Sequence[AttendanceEntry]:
        """Return the employee's records in [from_date, to_date], ordered by date.

        Days without a record are simply missing from the result.
        """
        ...


class OrganizationStore(Protocol):
    """Supplies the reporting hierarchy."""

    async def get_employee_role(self, employee_id: UUID) -> Role | None:
        """Return the employee's role, or None if there is no such employee."""
        ...

    async def get_direct_reports(self, manager_id: UUID) -> set[UUID]:
        """Active employees whose line manager is ``manager_id``."""
        ...

    async def get_managed_department(self, manager_id: UUID) -> UUID | None:
        """Department run by a department manager."""
        ...

    async def get_line_managers_in_department(self, department_id: UUID) -> set[UUID]:
        """Active line managers assigned to the department."""
        ...

    async def get_department_manager(self, department_id: UUID) -> UUID | None:
        ...

    async def get_led_company(self, ceo_id: UUID) -> UUID | None:
        """Company led by a CEO."""
        ...

    async def get_departments_in_company(self, company_id: UUID) -> set[UUID]:
        ...
