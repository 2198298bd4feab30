"""FastAPI dependencies for dependency injection."""

from datetime import date
from typing import Annotated

from fastapi import Depends, Query

from attendance_engine.calculators import AttendanceCalculator, HierarchicalAggregator
from attendance_engine.config import get_settings
from attendance_engine.database import init_db
from attendance_engine.stores import SqlAttendanceStore


def get_store() -> SqlAttendanceStore:
    """Get the store backing the reports.

    Tests override this dependency with an in-memory store.
    """
    _, factory = init_db()
    return SqlAttendanceStore(factory)


def get_calculator(
    store: Annotated[SqlAttendanceStore, Depends(get_store)],
) -> AttendanceCalculator:
    return AttendanceCalculator(store, store)


def get_aggregator(
    store: Annotated[SqlAttendanceStore, Depends(get_store)],
) -> HierarchicalAggregator:
    return HierarchicalAggregator(
        store, store, concurrency=get_settings().report_concurrency
    )


class DateRange:
    """Report date range from query parameters."""

    def __init__(
        self,
        start_date: Annotated[date, Query(description="First day of the report")],
        end_date: Annotated[date, Query(description="Last day of the report")],
    ):
        self.start_date = start_date
        self.end_date = end_date


# Type aliases for cleaner dependency injection
Calculator = Annotated[AttendanceCalculator, Depends(get_calculator)]
Aggregator = Annotated[HierarchicalAggregator, Depends(get_aggregator)]
ReportRange = Annotated[DateRange, Depends(DateRange)]
