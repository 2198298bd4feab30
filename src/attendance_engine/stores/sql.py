"""SQLAlchemy-backed record and organizational store."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import date
from typing import AsyncGenerator, Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from attendance_engine.calculators.errors import CollaboratorUnavailableError
from attendance_engine.calculators.types import AttendanceEntry, Role
from attendance_engine.models import AttendanceRecord, Company, Department, Employee
from attendance_engine.models.employee import ACTIVE_STATUS

logger = logging.getLogger(__name__)


class SqlAttendanceStore:
    """Reads attendance and hierarchy from the database.

    Every call opens its own session, so the aggregator can fan out
    subordinate computations concurrently without sharing a session.
    Terminated and on-leave employees are left out of the hierarchy.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    @asynccontextmanager
    async def _session(self, operation: str) -> AsyncGenerator[AsyncSession, None]:
        try:
            async with self.session_factory() as session:
                yield session
        except SQLAlchemyError as e:
            logger.exception("Store operation %s failed", operation)
            raise CollaboratorUnavailableError(operation, str(e)) from e

    # === AttendanceRecordStore ===

    async def get_attendance_records(
        self, employee_id: UUID, from_date: date, to_date: date
    ) -> Sequence[AttendanceEntry]:
        async with self._session("get_attendance_records") as session:
            result = await session.execute(
                select(AttendanceRecord)
                .where(
                    AttendanceRecord.employee_id == employee_id,
                    AttendanceRecord.work_date >= from_date,
                    AttendanceRecord.work_date <= to_date,
                )
                .order_by(AttendanceRecord.work_date)
            )
            return [
                AttendanceEntry(
                    employee_id=row.employee_id,
                    work_date=row.work_date,
                    check_in=row.check_in,
                    check_out=row.check_out,
                    is_working_day=row.is_working_day,
                )
                for row in result.scalars().all()
            ]

    # === OrganizationStore ===

    async def get_employee_role(self, employee_id: UUID) -> Role | None:
        async with self._session("get_employee_role") as session:
            role = await session.scalar(
                select(Employee.role).where(Employee.employee_id == employee_id)
            )
            return Role(role) if role is not None else None

    async def get_direct_reports(self, manager_id: UUID) -> set[UUID]:
        async with self._session("get_direct_reports") as session:
            result = await session.execute(
                select(Employee.employee_id).where(
                    Employee.line_manager_id == manager_id,
                    Employee.status == ACTIVE_STATUS,
                )
            )
            return set(result.scalars().all())

    async def get_managed_department(self, manager_id: UUID) -> UUID | None:
        async with self._session("get_managed_department") as session:
            result = await session.execute(
                select(Department.department_id)
                .where(Department.manager_employee_id == manager_id)
                .order_by(Department.department_id)
                .limit(1)
            )
            return result.scalar_one_or_none()

    async def get_line_managers_in_department(self, department_id: UUID) -> set[UUID]:
        async with self._session("get_line_managers_in_department") as session:
            result = await session.execute(
                select(Employee.employee_id).where(
                    Employee.department_id == department_id,
                    Employee.role == Role.LINE_MANAGER.value,
                    Employee.status == ACTIVE_STATUS,
                )
            )
            return set(result.scalars().all())

    async def get_department_manager(self, department_id: UUID) -> UUID | None:
        async with self._session("get_department_manager") as session:
            return await session.scalar(
                select(Department.manager_employee_id).where(
                    Department.department_id == department_id
                )
            )

    async def get_led_company(self, ceo_id: UUID) -> UUID | None:
        async with self._session("get_led_company") as session:
            result = await session.execute(
                select(Company.company_id)
                .where(Company.ceo_employee_id == ceo_id)
                .order_by(Company.company_id)
                .limit(1)
            )
            return result.scalar_one_or_none()

    async def get_departments_in_company(self, company_id: UUID) -> set[UUID]:
        async with self._session("get_departments_in_company") as session:
            result = await session.execute(
                select(Department.department_id).where(Department.company_id == company_id)
            )
            return set(result.scalars().all())
