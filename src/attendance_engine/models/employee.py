"""Employee model."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from attendance_engine.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from attendance_engine.models.attendance import AttendanceRecord
    from attendance_engine.models.company import Department

# Only active employees appear in reports.
ACTIVE_STATUS = "active"


class Employee(Base, TimestampMixin):
    """Employee record, including their place in the reporting hierarchy."""

    __tablename__ = "employee"

    employee_id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    company_id: Mapped[UUID] = mapped_column(
        ForeignKey("company.company_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    department_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("department.department_id"),
        nullable=True,
        index=True,
    )
    line_manager_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("employee.employee_id"),
        nullable=True,
        index=True,
    )
    employee_number: Mapped[str] = mapped_column(String, nullable=False)
    first_name: Mapped[str] = mapped_column(String, nullable=False)
    last_name: Mapped[str] = mapped_column(String, nullable=False)
    role: Mapped[str] = mapped_column(String, nullable=False, default="employee")
    status: Mapped[str] = mapped_column(String, nullable=False, default=ACTIVE_STATUS)

    __table_args__ = (
        UniqueConstraint("company_id", "employee_number", name="employee_company_number_unique"),
        CheckConstraint(
            "role IN ('employee', 'line_manager', 'department_manager', 'ceo')",
            name="employee_role_check",
        ),
        CheckConstraint(
            "status IN ('active', 'terminated', 'on_leave')",
            name="employee_status_check",
        ),
    )

    # Relationships
    department: Mapped[Department | None] = relationship(back_populates="employees")
    line_manager: Mapped[Employee | None] = relationship(
        remote_side="Employee.employee_id", back_populates="direct_reports"
    )
    direct_reports: Mapped[list[Employee]] = relationship(back_populates="line_manager")
    attendance_records: Mapped[list[AttendanceRecord]] = relationship(
        back_populates="employee"
    )
