"""Record and organizational store adapters."""

from attendance_engine.stores.base import AttendanceRecordStore, OrganizationStore
from attendance_engine.stores.memory import InMemoryAttendanceStore
from attendance_engine.stores.sql import SqlAttendanceStore

__all__ = [
    "AttendanceRecordStore",
    "InMemoryAttendanceStore",
    "OrganizationStore",
    "SqlAttendanceStore",
]
