"""Payroll calculation."""

from payroll_portal.calculators.payroll_calculator import PayrollCalculator
from payroll_portal.calculators.types import (
    AMOUNT_FIELDS,
    DEDUCTION_FIELDS,
    EARNING_FIELDS,
    MAX_AMOUNT,
    PayrollInputs,
    PayrollTotals,
)

__all__ = [
    "PayrollCalculator",
    "PayrollInputs",
    "PayrollTotals",
    "AMOUNT_FIELDS",
    "EARNING_FIELDS",
    "DEDUCTION_FIELDS",
    "MAX_AMOUNT",
]
