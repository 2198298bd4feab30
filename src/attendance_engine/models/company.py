"""Company and organizational structure models."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from sqlalchemy import ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from attendance_engine.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from attendance_engine.models.employee import Employee


class Company(Base, TimestampMixin):
    """Sub-company led by a CEO."""

    __tablename__ = "company"

    company_id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    name: Mapped[str] = mapped_column(String, nullable=False)
    # Not a foreign key: employee rows reference company, so this would be circular.
    ceo_employee_id: Mapped[UUID | None] = mapped_column(nullable=True, index=True)

    # Relationships
    departments: Mapped[list[Department]] = relationship(back_populates="company")


class Department(Base, TimestampMixin):
    """Department within a company, run by a department manager."""

    __tablename__ = "department"

    department_id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    company_id: Mapped[UUID] = mapped_column(
        ForeignKey("company.company_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String, nullable=False)
    manager_employee_id: Mapped[UUID | None] = mapped_column(nullable=True, index=True)

    __table_args__ = (
        UniqueConstraint("company_id", "name", name="department_company_name_unique"),
    )

    # Relationships
    company: Mapped[Company] = relationship(back_populates="departments")
    employees: Mapped[list[Employee]] = relationship(back_populates="department")
