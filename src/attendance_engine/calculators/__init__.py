"""Attendance deduction and aggregation engine."""

from attendance_engine.calculators.aggregator import HierarchicalAggregator
from attendance_engine.calculators.allowance_ledger import (
    AllowanceLedger,
    allowance_year_start,
    role_allowance_days,
)
from attendance_engine.calculators.daily_rule import DailyDeductionRule
from attendance_engine.calculators.engine import AttendanceCalculator
from attendance_engine.calculators.errors import (
    AttendanceEngineError,
    CollaboratorUnavailableError,
    InvalidRangeError,
    UnknownEmployeeError,
    UnknownManagerError,
)
from attendance_engine.calculators.monthly_exception import MonthlyExceptionRule

__all__ = [
    "AllowanceLedger",
    "AttendanceCalculator",
    "AttendanceEngineError",
    "CollaboratorUnavailableError",
    "DailyDeductionRule",
    "HierarchicalAggregator",
    "InvalidRangeError",
    "MonthlyExceptionRule",
    "UnknownEmployeeError",
    "UnknownManagerError",
    "allowance_year_start",
    "role_allowance_days",
]
