"""Pytest fixtures for attendance engine tests."""

from __future__ import annotations

from datetime import date, time, timedelta
from uuid import UUID

import pytest

from attendance_engine.calculators.types import Role
from attendance_engine.stores import InMemoryAttendanceStore

# Fixed identifiers so ordering assertions are predictable.
COMPANY_ID = UUID(int=0x100)
CEO_ID = UUID(int=0x101)

DEPT_ONE_ID = UUID(int=0x200)
DEPT_TWO_ID = UUID(int=0x201)
DEPT_MANAGER_ID = UUID(int=0x210)

LINE_MANAGER_ONE_ID = UUID(int=0x300)
LINE_MANAGER_TWO_ID = UUID(int=0x301)
LINE_MANAGER_THREE_ID = UUID(int=0x302)
LONE_LINE_MANAGER_ID = UUID(int=0x3FF)

ALICE_ID = UUID(int=0x400)  # reports to line manager one, net 1.25 on the report range
BOB_ID = UUID(int=0x401)  # reports to line manager one, always on time
CAROL_ID = UUID(int=0x402)  # reports to line manager two, no records
DAVE_ID = UUID(int=0x403)  # reports to line manager three, no records

# Allowance year 2024 starts March 1; by March 21 an employee with no
# records has consumed the whole 21-day allowance.
REPORT_START = date(2024, 3, 22)
REPORT_END = date(2024, 3, 23)

ON_TIME = time(8, 0)
END_OF_DAY = time(17, 0)


def add_daily_records(
    store: InMemoryAttendanceStore,
    employee_id: UUID,
    start: date,
    end: date,
    check_in: time | None = ON_TIME,
    check_out: time | None = END_OF_DAY,
) -> None:
    """Add one record per calendar day in [start, end]."""
    day = start
    while day <= end:
        store.add_record(employee_id, day, check_in, check_out)
        day += timedelta(days=1)


@pytest.fixture
def store() -> InMemoryAttendanceStore:
    """An empty in-memory store."""
    return InMemoryAttendanceStore()


@pytest.fixture
def org_store() -> InMemoryAttendanceStore:
    """A small company.

    CEO
    └── company
        ├── department one (department manager)
        │   ├── line manager one: Alice, Bob
        │   └── line manager two: Carol
        └── department two (no manager)
            └── line manager three: Dave

    Added in reverse identifier order so tests can check the output is sorted.
    """
    store = InMemoryAttendanceStore()

    store.add_employee(DAVE_ID, Role.EMPLOYEE, LINE_MANAGER_THREE_ID, DEPT_TWO_ID)
    store.add_employee(CAROL_ID, Role.EMPLOYEE, LINE_MANAGER_TWO_ID, DEPT_ONE_ID)
    store.add_employee(BOB_ID, Role.EMPLOYEE, LINE_MANAGER_ONE_ID, DEPT_ONE_ID)
    store.add_employee(ALICE_ID, Role.EMPLOYEE, LINE_MANAGER_ONE_ID, DEPT_ONE_ID)
    store.add_employee(LONE_LINE_MANAGER_ID, Role.LINE_MANAGER)
    store.add_employee(LINE_MANAGER_THREE_ID, Role.LINE_MANAGER, DEPT_MANAGER_ID, DEPT_TWO_ID)
    store.add_employee(LINE_MANAGER_TWO_ID, Role.LINE_MANAGER, DEPT_MANAGER_ID, DEPT_ONE_ID)
    store.add_employee(LINE_MANAGER_ONE_ID, Role.LINE_MANAGER, DEPT_MANAGER_ID, DEPT_ONE_ID)
    store.add_employee(DEPT_MANAGER_ID, Role.DEPARTMENT_MANAGER, CEO_ID, DEPT_ONE_ID)
    store.add_employee(CEO_ID, Role.CEO)

    store.add_department(DEPT_TWO_ID, COMPANY_ID)
    store.add_department(DEPT_ONE_ID, COMPANY_ID, DEPT_MANAGER_ID)
    store.add_company(COMPANY_ID, CEO_ID)

    # Alice: absent March 1-21 (allowance used up), then 09:00 and 10:00.
    store.add_record(ALICE_ID, date(2024, 3, 22), time(9, 0), END_OF_DAY)
    store.add_record(ALICE_ID, date(2024, 3, 23), time(10, 0), END_OF_DAY)

    # Bob: on time every day.
    add_daily_records(store, BOB_ID, date(2024, 3, 1), REPORT_END)

    return store
