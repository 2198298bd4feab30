"""In-memory store for fixtures, demos and tests.

Holds an immutable-by-convention snapshot of the organization and its
attendance records. Implements both AttendanceRecordStore and
OrganizationStore.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Sequence
from uuid import UUID

from attendance_engine.calculators.types import AttendanceEntry, Role


@dataclass(frozen=True)
class EmployeeNode:
    employee_id: UUID
    role: Role
    line_manager_id: UUID | None = None
    department_id: UUID | None = None
    active: bool = True


@dataclass(frozen=True)
class DepartmentNode:
    department_id: UUID
    company_id: UUID
    manager_id: UUID | None = None


@dataclass(frozen=True)
class CompanyNode:
    company_id: UUID
    ceo_id: UUID | None = None


class InMemoryAttendanceStore:
    """Dictionary-backed record and organizational store."""

    def __init__(self) -> None:
        self._employees: dict[UUID, EmployeeNode] = {}
        self._departments: dict[UUID, DepartmentNode] = {}
        self._companies: dict[UUID, CompanyNode] = {}
        self._records: dict[tuple[UUID, date], AttendanceEntry] = {}

    # === Loading ===

    def add_company(self, company_id: UUID, ceo_id: UUID | None = None) -> None:
        self._companies[company_id] = CompanyNode(company_id, ceo_id)

    def add_department(
        self, department_id: UUID, company_id: UUID, manager_id: UUID | None = None
    ) -> None:
        self._departments[department_id] = DepartmentNode(
            department_id, company_id, manager_id
        )

    def add_employee(
        self,
        employee_id: UUID,
        role: Role = Role.EMPLOYEE,
        line_manager_id: UUID | None = None,
        department_id: UUID | None = None,
        active: bool = True,
    ) -> None:
        """Add an employee; inactive employees are left out of the hierarchy."""
        self._employees[employee_id] = EmployeeNode(
            employee_id, role, line_manager_id, department_id, active
        )

    def add_record(
        self,
        employee_id: UUID,
        work_date: date,
        check_in: time | None = None,
        check_out: time | None = None,
        is_working_day: bool = True,
    ) -> None:
        """Add or replace the record for (employee_id, work_date)."""
        self._records[(employee_id, work_date)] = AttendanceEntry(
            employee_id=employee_id,
            work_date=work_date,
            check_in=check_in,
            check_out=check_out,
            is_working_day=is_working_day,
        )

    # === AttendanceRecordStore ===

    async def get_attendance_records(
        self, employee_id: UUID, from_date: date, to_date: date
    ) -> Sequence[AttendanceEntry]:
        return sorted(
            (
                entry
                for (emp_id, work_date), entry in self._records.items()
                if emp_id == employee_id and from_date <= work_date <= to_date
            ),
            key=lambda e: e.work_date,
        )

    # === OrganizationStore ===

    async def get_employee_role(self, employee_id: UUID) -> Role | None:
        node = self._employees.get(employee_id)
        return node.role if node else None

    async def get_direct_reports(self, manager_id: UUID) -> set[UUID]:
        return {
            e.employee_id
            for e in self._employees.values()
            if e.line_manager_id == manager_id and e.active
        }

    async def get_managed_department(self, manager_id: UUID) -> UUID | None:
        for dept in self._departments.values():
            if dept.manager_id == manager_id:
                return dept.department_id
        return None

    async def get_line_managers_in_department(self, department_id: UUID) -> set[UUID]:
        return {
            e.employee_id
            for e in self._employees.values()
            if e.department_id == department_id
            and e.role is Role.LINE_MANAGER
            and e.active
        }

    async def get_department_manager(self, department_id: UUID) -> UUID | None:
        dept = self._departments.get(department_id)
        return dept.manager_id if dept else None

    async def get_led_company(self, ceo_id: UUID) -> UUID | None:
        for company in self._companies.values():
            if company.ceo_id == ceo_id:
                return company.company_id
        return None

    async def get_departments_in_company(self, company_id: UUID) -> set[UUID]:
        return {
            d.department_id
            for d in self._departments.values()
            if d.company_id == company_id
        }
