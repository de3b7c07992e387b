"""Payroll record model."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from sqlalchemy import Date, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from payroll_portal.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from payroll_portal.calculators.types import PayrollInputs, PayrollTotals
    from payroll_portal.models.employee import Employee


class Payroll(Base, TimestampMixin):
    """One pay-cycle record for one employee.

    Immutable after creation; the only mutation is deletion. Inputs and
    derived totals are both persisted:

    - gross_salary = basic_salary + overtime + bonus
    - total_deductions = tax + insurance + other_deductions
    - net_salary = gross_salary - total_deductions (may be negative)
    """

    __tablename__ = "payroll"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    # RESTRICT backs the employee deletion guard at the database level
    employee_id: Mapped[UUID] = mapped_column(
        ForeignKey("employee.id", ondelete="RESTRICT"),
        nullable=False,
    )
    employee_name: Mapped[str] = mapped_column(String, nullable=False)
    pay_period: Mapped[str] = mapped_column(String, nullable=False)
    pay_date: Mapped[date] = mapped_column(Date, nullable=False)

    # Earnings
    basic_salary: Mapped[Decimal] = mapped_column(nullable=False)
    overtime: Mapped[Decimal] = mapped_column(nullable=False, default=Decimal("0"))
    bonus: Mapped[Decimal] = mapped_column(nullable=False, default=Decimal("0"))

    # Deductions
    tax: Mapped[Decimal] = mapped_column(nullable=False, default=Decimal("0"))
    insurance: Mapped[Decimal] = mapped_column(nullable=False, default=Decimal("0"))
    other_deductions: Mapped[Decimal] = mapped_column(nullable=False, default=Decimal("0"))

    # Derived
    gross_salary: Mapped[Decimal] = mapped_column(nullable=False)
    total_deductions: Mapped[Decimal] = mapped_column(nullable=False)
    net_salary: Mapped[Decimal] = mapped_column(nullable=False)

    __table_args__ = (Index("ix_payroll_employee_id", "employee_id"),)

    # Relationships
    employee: Mapped[Employee] = relationship(back_populates="payrolls")

    @classmethod
    def from_calculation(
        cls,
        employee: Employee,
        pay_period: str,
        pay_date: date,
        inputs: PayrollInputs,
        totals: PayrollTotals,
    ) -> Payroll:
        """Build a record from calculator output, snapshotting the employee name."""
        return cls(
            employee_id=employee.id,
            employee_name=employee.name,
            pay_period=pay_period,
            pay_date=pay_date,
            basic_salary=inputs.basic_salary,
            overtime=inputs.overtime,
            bonus=inputs.bonus,
            tax=inputs.tax,
            insurance=inputs.insurance,
            other_deductions=inputs.other_deductions,
            gross_salary=totals.gross_salary,
            total_deductions=totals.total_deductions,
            net_salary=totals.net_salary,
        )
