"""Payroll generation, listing, deletion and payslip access."""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from datetime import date
from typing import Any
from uuid import UUID

import segno
from sqlalchemy.ext.asyncio import AsyncSession

from payroll_portal.calculators import PayrollCalculator, PayrollTotals
from payroll_portal.config import get_settings
from payroll_portal.errors import NotFound, Unauthorized, ValidationFailure
from payroll_portal.models import Employee, Payroll
from payroll_portal.services.authorization import Identity, PayslipAccess, PayslipAuthorizer
from payroll_portal.store import RecordStore

logger = logging.getLogger(__name__)


@dataclass
class PayslipView:
    """Outcome of a payslip view request."""

    access: PayslipAccess
    payroll: Payroll | None = None
    employee: Employee | None = None

    @property
    def authorized(self) -> bool:
        return self.access == PayslipAccess.AUTHORIZED


def payslip_url(payroll_id: UUID, base_url: str | None = None) -> str:
    """Public URL of a payslip page, the value clients encode as a QR code."""
    base = (base_url or get_settings().public_base_url).rstrip("/")
    return f"{base}/payslip/{payroll_id}"


def render_qr_png(content: str, scale: int = 8) -> bytes:
    """PNG QR code with high (H) error correction."""
    qr = segno.make_qr(content, error="h")
    out = io.BytesIO()
    qr.save(out, kind="png", scale=scale, border=4)
    return out.getvalue()


class PayrollService:
    """Service for payroll records and payslips.

    Operations:
    - generate_payroll: calculate totals and persist a new record
    - list_payrolls: all records for admins, own records for employees
    - delete_payroll: remove one record
    - view_payslip: load payroll + employee and authorize the viewer
    - payslip_qr: QR image of the payslip link for authorized viewers
    """

    def __init__(self, session: AsyncSession, calculator: type[PayrollCalculator] = PayrollCalculator):
        self.session = session
        self.calculator = calculator
        self.payrolls = RecordStore(session, Payroll)
        self.employees = RecordStore(session, Employee)

    def preview(self, **raw_amounts: Any) -> PayrollTotals:
        """Totals for the given raw inputs without persisting anything."""
        _, totals = self.calculator.calculate_raw(**raw_amounts)
        return totals

    async def generate_payroll(
        self,
        employee_id: UUID,
        pay_period: str,
        pay_date: date,
        **raw_amounts: Any,
    ) -> Payroll:
        """Create a payroll for an employee from raw form amounts."""
        if not pay_period.strip():
            raise ValidationFailure("Pay period is required.")

        employee = await self.employees.get(employee_id)
        if employee is None:
            raise NotFound("Please select an employee")

        # An omitted basic salary is prefilled from the employee record
        if raw_amounts.get("basic_salary") is None:
            raw_amounts["basic_salary"] = employee.salary
        inputs, totals = self.calculator.calculate_raw(**raw_amounts)
        payroll = Payroll.from_calculation(employee, pay_period.strip(), pay_date, inputs, totals)
        await self.payrolls.insert(payroll)

        if totals.is_negative:
            logger.warning("Payroll %s has negative net salary %s", payroll.id, totals.net_salary)
        logger.info(
            "Generated payroll %s for employee %s (%s): net %s",
            payroll.id,
            employee.id,
            payroll.pay_period,
            totals.net_salary,
        )
        return payroll

    async def list_payrolls(self, identity: Identity) -> list[Payroll]:
        """Payrolls visible to the identity, newest first."""
        newest_first = [Payroll.created_at.desc()]
        if PayslipAuthorizer.can_manage(identity):
            return await self.payrolls.list_where(order_by=newest_first)

        employee = await self.employees.first_where(Employee.user_id == identity.id)
        if employee is None:
            return []
        return await self.payrolls.list_where(
            Payroll.employee_id == employee.id,
            order_by=newest_first,
        )

    async def delete_payroll(self, payroll_id: UUID) -> None:
        deleted = await self.payrolls.delete(payroll_id)
        if not deleted:
            raise NotFound("Payroll not found")
        logger.info("Deleted payroll %s", payroll_id)

    async def view_payslip(self, payroll_id: UUID, identity: Identity) -> PayslipView:
        """Load a payslip and decide whether the identity may see it."""
        payroll = await self.payrolls.get(payroll_id)
        employee = None
        if payroll is not None:
            employee = await self.employees.get(payroll.employee_id)

        access = PayslipAuthorizer.decide(identity, payroll, employee)
        if access == PayslipAccess.FORBIDDEN:
            logger.warning("Identity %s denied payslip %s", identity.id, payroll_id)
            return PayslipView(access=access)
        return PayslipView(access=access, payroll=payroll, employee=employee)

    async def get_payslip(self, payroll_id: UUID, identity: Identity) -> PayslipView:
        """Like view_payslip, but raises for the two failure outcomes."""
        view = await self.view_payslip(payroll_id, identity)
        if view.access == PayslipAccess.NOT_FOUND:
            raise NotFound("The requested payslip could not be found.")
        if view.access == PayslipAccess.FORBIDDEN:
            raise Unauthorized("You are not authorized to view this payslip.")
        return view

    async def payslip_link(self, payroll_id: UUID, identity: Identity) -> str:
        """Shareable payslip URL, for viewers allowed to see the payslip."""
        view = await self.get_payslip(payroll_id, identity)
        return payslip_url(view.payroll.id)

    async def payslip_qr(self, payroll_id: UUID, identity: Identity, scale: int = 8) -> bytes:
        """PNG QR code of the payslip link, for viewers allowed to see the payslip."""
        url = await self.payslip_link(payroll_id, identity)
        return render_qr_png(url, scale=scale)
