"""Hierarchical aggregation of attendance summaries.

Team (line manager), department and company (CEO) reports share one
recursive fold: fetch the subordinate identifiers, build every child
summary concurrently, re-join them in ascending identifier order and sum
the children's aggregates. Aggregates are never recomputed from leaves,
so every level equals the exact sum of the level below it.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import date
from typing import TYPE_CHECKING, Awaitable, Callable, Iterable, Sequence, TypeVar
from uuid import UUID

from attendance_engine.calculators.engine import AttendanceCalculator, validate_range
from attendance_engine.calculators.errors import UnknownManagerError
from attendance_engine.calculators.types import (
    EmployeeAttendanceSummary,
    ManagerSummary,
    ReportLevel,
    Role,
    SubordinateSummary,
    ZERO,
)

if TYPE_CHECKING:
    from attendance_engine.stores.base import AttendanceRecordStore, OrganizationStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_CONCURRENCY = 8


class HierarchicalAggregator:
    """Builds manager summaries by walking the organizational store.

    ``concurrency`` bounds how many employee summaries are computed at
    once. Only leaf computations take a slot, so nested levels waiting on
    their children never starve each other.
    """

    def __init__(
        self,
        records: AttendanceRecordStore,
        organization: OrganizationStore,
        concurrency: int = DEFAULT_CONCURRENCY,
    ):
        self.organization = organization
        self.calculator = AttendanceCalculator(records, organization)
        self._slots = asyncio.Semaphore(max(1, concurrency))

    # === Public reports ===

    async def line_manager_summary(
        self, manager_id: UUID, start_date: date, end_date: date
    ) -> ManagerSummary:
        """Summary over a line manager's direct reports."""
        validate_range(start_date, end_date)
        await self._require_role(manager_id, Role.LINE_MANAGER)
        return await self._line_manager_tree(manager_id, start_date, end_date)

    async def department_summary(
        self, manager_id: UUID, start_date: date, end_date: date
    ) -> ManagerSummary:
        """Summary over every line manager in the department this manager runs."""
        validate_range(start_date, end_date)
        await self._require_role(manager_id, Role.DEPARTMENT_MANAGER)

        department_id = await self.organization.get_managed_department(manager_id)
        if department_id is None:
            raise UnknownManagerError(
                manager_id, Role.DEPARTMENT_MANAGER.value, "manages no department"
            )
        return await self._department_tree(department_id, manager_id, start_date, end_date)

    async def company_summary(
        self, ceo_id: UUID, start_date: date, end_date: date
    ) -> ManagerSummary:
        """Summary over every department in the company this CEO leads."""
        validate_range(start_date, end_date)
        await self._require_role(ceo_id, Role.CEO)

        company_id = await self.organization.get_led_company(ceo_id)
        if company_id is None:
            raise UnknownManagerError(ceo_id, Role.CEO.value, "leads no company")

        department_ids = await self.organization.get_departments_in_company(company_id)

        async def build(department_id: UUID) -> SubordinateSummary:
            manager_id = await self.organization.get_department_manager(department_id)
            return await self._department_tree(department_id, manager_id, start_date, end_date)

        summary = await self._fold(
            ReportLevel.COMPANY, ceo_id, company_id, start_date, end_date, department_ids, build
        )
        logger.info(
            "Company summary %s: %d departments, %d employees, net=%s",
            company_id,
            len(summary.subordinates),
            summary.employee_count,
            summary.aggregate_net_deduction_days,
        )
        return summary

    # === Tree builders ===

    async def _line_manager_tree(
        self, manager_id: UUID, start_date: date, end_date: date
    ) -> ManagerSummary:
        report_ids = await self.organization.get_direct_reports(manager_id)

        async def build(employee_id: UUID) -> SubordinateSummary:
            return await self._employee_summary(employee_id, start_date, end_date)

        return await self._fold(
            ReportLevel.LINE_MANAGER, manager_id, manager_id, start_date, end_date, report_ids, build
        )

    async def _department_tree(
        self,
        department_id: UUID,
        manager_id: UUID | None,
        start_date: date,
        end_date: date,
    ) -> ManagerSummary:
        line_manager_ids = await self.organization.get_line_managers_in_department(department_id)

        async def build(line_manager_id: UUID) -> SubordinateSummary:
            return await self._line_manager_tree(line_manager_id, start_date, end_date)

        return await self._fold(
            ReportLevel.DEPARTMENT,
            manager_id,
            department_id,
            start_date,
            end_date,
            line_manager_ids,
            build,
        )

    async def _employee_summary(
        self, employee_id: UUID, start_date: date, end_date: date
    ) -> EmployeeAttendanceSummary:
        async with self._slots:
            return await self.calculator.calculate(employee_id, start_date, end_date)

    # === Shared fold ===

    async def _fold(
        self,
        level: ReportLevel,
        manager_id: UUID | None,
        scope_id: UUID,
        start_date: date,
        end_date: date,
        child_ids: Iterable[UUID],
        build_child: Callable[[UUID], Awaitable[SubordinateSummary]],
    ) -> ManagerSummary:
        ordered = sorted(child_ids)
        children = await _gather_ordered(ordered, build_child)

        raw = ZERO
        net = ZERO
        subordinates: dict[UUID, SubordinateSummary] = {}
        for child_id, child in zip(ordered, children):
            subordinates[child_id] = child
            raw += child.aggregate_raw_deduction_days
            net += child.aggregate_net_deduction_days

        logger.debug(
            "Built %s summary for %s: %d subordinates, net=%s",
            level.value,
            scope_id,
            len(subordinates),
            net,
        )
        return ManagerSummary(
            level=level,
            manager_id=manager_id,
            scope_id=scope_id,
            start_date=start_date,
            end_date=end_date,
            subordinates=subordinates,
            aggregate_raw_deduction_days=raw,
            aggregate_net_deduction_days=net,
        )

    async def _require_role(self, manager_id: UUID, expected: Role) -> None:
        role = await self.organization.get_employee_role(manager_id)
        if role is None:
            raise UnknownManagerError(manager_id, expected.value)
        if role is not expected:
            raise UnknownManagerError(manager_id, expected.value, f"role is {role.value}")


async def _gather_ordered(
    ids: Sequence[UUID], build: Callable[[UUID], Awaitable[T]]
) -> list[T]:
    """Run ``build`` for every id concurrently; results follow ``ids`` order.

    If any child fails, the siblings still running are cancelled.
    """
    tasks = [asyncio.ensure_future(build(child_id)) for child_id in ids]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        raise
