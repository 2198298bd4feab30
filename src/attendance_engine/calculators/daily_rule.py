"""Daily lateness classification and raw deduction."""

from __future__ import annotations

from datetime import date, time
from decimal import Decimal
from uuid import UUID

from attendance_engine.calculators.types import (
    AttendanceEntry,
    DeductionClassification,
    DeductionOutcome,
)


class DailyDeductionRule:
    """Turns one day's check-in into a raw deduction.

    Bands (upper bound inclusive, so ties go to the lower deduction):
    - no check-in      -> ABSENT,   1.0
    - <= 08:30         -> ON_TIME,  0.0
    - <= 09:00         -> MINOR,    0.25
    - <= 09:30         -> MODERATE, 0.5
    - later            -> SEVERE,   1.0
    """

    ON_TIME_BOUNDARY = time(8, 30)

    BANDS: tuple[tuple[time, DeductionClassification, Decimal], ...] = (
        (time(8, 30), DeductionClassification.ON_TIME, Decimal("0")),
        (time(9, 0), DeductionClassification.MINOR, Decimal("0.25")),
        (time(9, 30), DeductionClassification.MODERATE, Decimal("0.5")),
    )
    SEVERE_DEDUCTION = Decimal("1.0")
    ABSENT_DEDUCTION = Decimal("1.0")
    NON_WORKING_DEDUCTION = Decimal("0")

    @classmethod
    def classify(cls, check_in: time | None) -> tuple[Decimal, DeductionClassification]:
        """Return (raw deduction days, classification) for a check-in time."""
        if check_in is None:
            return cls.ABSENT_DEDUCTION, DeductionClassification.ABSENT

        for upper, classification, deduction in cls.BANDS:
            if check_in <= upper:
                return deduction, classification

        return cls.SEVERE_DEDUCTION, DeductionClassification.SEVERE

    @classmethod
    def lateness_minutes(cls, check_in: time | None) -> int:
        """Whole minutes past the on-time boundary, 0 when absent or on time."""
        if check_in is None or check_in <= cls.ON_TIME_BOUNDARY:
            return 0
        delta = _seconds_of_day(check_in) - _seconds_of_day(cls.ON_TIME_BOUNDARY)
        return delta // 60

    @staticmethod
    def worked_seconds(check_in: time | None, check_out: time | None) -> int:
        """Seconds between check-in and check-out, clamped at zero."""
        if check_in is None or check_out is None:
            return 0
        return max(0, _seconds_of_day(check_out) - _seconds_of_day(check_in))

    @classmethod
    def evaluate(
        cls,
        employee_id: UUID,
        work_date: date,
        entry: AttendanceEntry | None,
    ) -> DeductionOutcome:
        """Evaluate one calendar day; a missing entry is an absent working day."""
        if entry is None:
            raw, classification = cls.classify(None)
            return DeductionOutcome(
                employee_id=employee_id,
                work_date=work_date,
                raw_deduction_days=raw,
                lateness_minutes=0,
                classification=classification,
                net_deduction_days=raw,
            )

        worked = cls.worked_seconds(entry.check_in, entry.check_out)

        if not entry.is_working_day:
            return DeductionOutcome(
                employee_id=employee_id,
                work_date=work_date,
                raw_deduction_days=cls.NON_WORKING_DEDUCTION,
                lateness_minutes=0,
                classification=DeductionClassification.NON_WORKING,
                net_deduction_days=cls.NON_WORKING_DEDUCTION,
                worked_seconds=worked,
            )

        raw, classification = cls.classify(entry.check_in)
        return DeductionOutcome(
            employee_id=employee_id,
            work_date=work_date,
            raw_deduction_days=raw,
            lateness_minutes=cls.lateness_minutes(entry.check_in),
            classification=classification,
            net_deduction_days=raw,
            worked_seconds=worked,
        )


def _seconds_of_day(value: time) -> int:
    return value.hour * 3600 + value.minute * 60 + value.second
