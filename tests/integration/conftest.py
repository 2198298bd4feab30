"""Integration test fixtures with a real database.

Uses a file-backed SQLite database per test through aiosqlite, so the
SQL store runs the same queries it runs against PostgreSQL.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import date, time, timedelta

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from attendance_engine.api.app import create_app
from attendance_engine.api.dependencies import get_store
from attendance_engine.api.routes import health
from attendance_engine.database import get_engine, make_session_factory
from attendance_engine.models import AttendanceRecord, Base, Company, Department, Employee
from attendance_engine.stores import SqlAttendanceStore

from tests.conftest import (
    ALICE_ID,
    BOB_ID,
    CAROL_ID,
    CEO_ID,
    COMPANY_ID,
    DAVE_ID,
    DEPT_MANAGER_ID,
    DEPT_ONE_ID,
    DEPT_TWO_ID,
    END_OF_DAY,
    LINE_MANAGER_ONE_ID,
    LINE_MANAGER_THREE_ID,
    LINE_MANAGER_TWO_ID,
    LONE_LINE_MANAGER_ID,
    ON_TIME,
    REPORT_END,
)


@pytest_asyncio.fixture
async def test_engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """Create a test database engine with the schema in place."""
    engine = get_engine(f"sqlite+aiosqlite:///{tmp_path / 'attendance.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(test_engine) -> async_sessionmaker[AsyncSession]:
    return make_session_factory(test_engine)


def employee_row(
    employee_id, number, role, line_manager_id=None, department_id=None, status="active"
):
    return Employee(
        employee_id=employee_id,
        company_id=COMPANY_ID,
        department_id=department_id,
        line_manager_id=line_manager_id,
        employee_number=number,
        first_name="Test",
        last_name=number,
        role=role,
        status=status,
    )


@pytest_asyncio.fixture
async def seeded_factory(session_factory) -> async_sessionmaker[AsyncSession]:
    """Database holding the same company as the in-memory ``org_store`` fixture."""
    async with session_factory() as session:
        session.add(Company(company_id=COMPANY_ID, name="Acme", ceo_employee_id=CEO_ID))
        await session.flush()
        session.add_all(
            [
                Department(
                    department_id=DEPT_ONE_ID,
                    company_id=COMPANY_ID,
                    name="Engineering",
                    manager_employee_id=DEPT_MANAGER_ID,
                ),
                Department(department_id=DEPT_TWO_ID, company_id=COMPANY_ID, name="Support"),
            ]
        )
        await session.flush()
        session.add_all(
            [
                employee_row(CEO_ID, "E001", "ceo"),
                employee_row(DEPT_MANAGER_ID, "E002", "department_manager", CEO_ID, DEPT_ONE_ID),
            ]
        )
        await session.flush()
        session.add_all(
            [
                employee_row(
                    LINE_MANAGER_ONE_ID, "E003", "line_manager", DEPT_MANAGER_ID, DEPT_ONE_ID
                ),
                employee_row(
                    LINE_MANAGER_TWO_ID, "E004", "line_manager", DEPT_MANAGER_ID, DEPT_ONE_ID
                ),
                employee_row(
                    LINE_MANAGER_THREE_ID, "E005", "line_manager", DEPT_MANAGER_ID, DEPT_TWO_ID
                ),
                employee_row(LONE_LINE_MANAGER_ID, "E006", "line_manager"),
            ]
        )
        await session.flush()
        session.add_all(
            [
                employee_row(ALICE_ID, "E007", "employee", LINE_MANAGER_ONE_ID, DEPT_ONE_ID),
                employee_row(BOB_ID, "E008", "employee", LINE_MANAGER_ONE_ID, DEPT_ONE_ID),
                employee_row(CAROL_ID, "E009", "employee", LINE_MANAGER_TWO_ID, DEPT_ONE_ID),
                employee_row(DAVE_ID, "E010", "employee", LINE_MANAGER_THREE_ID, DEPT_TWO_ID),
            ]
        )
        await session.flush()

        session.add_all(
            [
                AttendanceRecord(
                    employee_id=ALICE_ID,
                    work_date=date(2024, 3, 22),
                    check_in=time(9, 0),
                    check_out=END_OF_DAY,
                ),
                AttendanceRecord(
                    employee_id=ALICE_ID,
                    work_date=date(2024, 3, 23),
                    check_in=time(10, 0),
                    check_out=END_OF_DAY,
                ),
            ]
        )
        day = date(2024, 3, 1)
        while day <= REPORT_END:
            session.add(
                AttendanceRecord(
                    employee_id=BOB_ID, work_date=day, check_in=ON_TIME, check_out=END_OF_DAY
                )
            )
            day += timedelta(days=1)

        await session.commit()
    return session_factory


@pytest_asyncio.fixture
async def sql_store(seeded_factory) -> SqlAttendanceStore:
    return SqlAttendanceStore(seeded_factory)


@pytest_asyncio.fixture
async def client(org_store) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client for the app, backed by the in-memory company."""
    app = create_app()
    app.dependency_overrides[get_store] = lambda: org_store
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def sql_client(sql_store) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client for the app, backed by the seeded database."""
    app = create_app()
    app.dependency_overrides[get_store] = lambda: sql_store
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


def _sessions_from(factory: async_sessionmaker[AsyncSession]):
    @asynccontextmanager
    async def get_session() -> AsyncGenerator[AsyncSession, None]:
        async with factory() as session:
            yield session

    return get_session


@pytest.fixture
def database_up(monkeypatch, session_factory) -> None:
    """Health checks run against the test database."""
    monkeypatch.setattr(health, "get_session", _sessions_from(session_factory))


@pytest_asyncio.fixture
async def database_down(monkeypatch, tmp_path) -> AsyncGenerator[None, None]:
    """Health checks run against a database file that cannot be opened."""
    engine = get_engine(f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'attendance.db'}")
    monkeypatch.setattr(health, "get_session", _sessions_from(make_session_factory(engine)))
    yield
    await engine.dispose()
