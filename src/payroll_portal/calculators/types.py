"""Type definitions for payroll calculation."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from decimal import Decimal
from typing import Any

EARNING_FIELDS = ("basic_salary", "overtime", "bonus")
DEDUCTION_FIELDS = ("tax", "insurance", "other_deductions")
AMOUNT_FIELDS = EARNING_FIELDS + DEDUCTION_FIELDS

# Largest magnitude a Numeric(12, 2) column holds
MAX_AMOUNT = Decimal("9999999999.99")


@dataclass(frozen=True)
class PayrollInputs:
    """Itemized pay inputs after coercion."""

    basic_salary: Decimal = Decimal("0.00")
    overtime: Decimal = Decimal("0.00")
    bonus: Decimal = Decimal("0.00")
    tax: Decimal = Decimal("0.00")
    insurance: Decimal = Decimal("0.00")
    other_deductions: Decimal = Decimal("0.00")

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class PayrollTotals:
    """Derived totals for one payroll."""

    gross_salary: Decimal
    total_deductions: Decimal
    net_salary: Decimal

    @property
    def is_negative(self) -> bool:
        """Deductions exceed earnings. Allowed, but worth surfacing."""
        return self.net_salary < 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
