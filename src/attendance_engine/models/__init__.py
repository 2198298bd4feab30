"""ORM models for the attendance record and organizational stores."""

from attendance_engine.models.attendance import AttendanceRecord
from attendance_engine.models.base import Base, TimestampMixin
from attendance_engine.models.company import Company, Department
from attendance_engine.models.employee import Employee

__all__ = [
    "AttendanceRecord",
    "Base",
    "Company",
    "Department",
    "Employee",
    "TimestampMixin",
]
