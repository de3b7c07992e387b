"""Gross/net salary calculation from itemized inputs."""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from payroll_portal.calculators.types import (
    AMOUNT_FIELDS,
    MAX_AMOUNT,
    PayrollInputs,
    PayrollTotals,
)
from payroll_portal.errors import ValidationFailure

# Longest leading decimal literal, the way a browser number parser reads input
_LEADING_NUMBER = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


class PayrollCalculator:
    """Stateless payroll calculator.

    Coercion rules:
    - None, blank, non-numeric, NaN or infinite input becomes 0
    - "12.5abc" reads as 12.5 (leading literal wins)
    - negative values pass through; negative net salary is allowed
    - every amount is rounded half-up to cents before summing, so stored
      inputs and stored totals agree exactly
    - inputs and totals beyond MAX_AMOUNT in magnitude are rejected
    """

    ZERO = Decimal("0.00")
    OUTPUT_PRECISION = Decimal("0.01")
    MAX_AMOUNT = MAX_AMOUNT

    @staticmethod
    def round_to_cents(amount: Decimal) -> Decimal:
        """Round amount to 2 decimal places (cents)."""
        return amount.quantize(PayrollCalculator.OUTPUT_PRECISION, rounding=ROUND_HALF_UP)

    @classmethod
    def check_range(cls, amount: Decimal, label: str) -> Decimal:
        """Reject amounts a Numeric(12, 2) column cannot hold."""
        if abs(amount) > cls.MAX_AMOUNT:
            raise ValidationFailure(
                f"{label} is out of range (max {cls.MAX_AMOUNT}).",
                {"field": label, "max": str(cls.MAX_AMOUNT)},
            )
        return amount

    @classmethod
    def parse_amount(cls, raw: Any, field: str = "amount") -> Decimal:
        """Coerce a raw form value to a Decimal amount.

        Unreadable values become zero. Raises ValidationFailure only for
        readable values too large to store.
        """
        if raw is None or isinstance(raw, bool):
            return cls.ZERO

        if isinstance(raw, Decimal):
            value = raw
        elif isinstance(raw, (int, float)):
            try:
                value = Decimal(str(raw))
            except InvalidOperation:
                return cls.ZERO
        else:
            match = _LEADING_NUMBER.match(str(raw).strip())
            if match is None:
                return cls.ZERO
            try:
                value = Decimal(match.group(0))
            except InvalidOperation:
                return cls.ZERO

        if not value.is_finite():
            return cls.ZERO
        # Checked before rounding so huge exponents never reach quantize
        cls.check_range(value, field)
        return cls.check_range(cls.round_to_cents(value), field)

    @classmethod
    def parse_inputs(cls, **raw: Any) -> PayrollInputs:
        """Coerce all six amount fields; absent fields are zero."""
        unknown = set(raw) - set(AMOUNT_FIELDS)
        if unknown:
            raise TypeError(f"Unknown payroll fields: {', '.join(sorted(unknown))}")
        return PayrollInputs(
            **{name: cls.parse_amount(raw.get(name), field=name) for name in AMOUNT_FIELDS}
        )

    @classmethod
    def calculate(cls, inputs: PayrollInputs) -> PayrollTotals:
        """Derive gross salary, total deductions and net salary."""
        gross_salary = inputs.basic_salary + inputs.overtime + inputs.bonus
        total_deductions = inputs.tax + inputs.insurance + inputs.other_deductions
        net_salary = gross_salary - total_deductions
        return PayrollTotals(
            gross_salary=cls.check_range(gross_salary, "gross_salary"),
            total_deductions=cls.check_range(total_deductions, "total_deductions"),
            net_salary=cls.check_range(net_salary, "net_salary"),
        )

    @classmethod
    def calculate_raw(cls, **raw: Any) -> tuple[PayrollInputs, PayrollTotals]:
        """Parse raw values and calculate totals in one step."""
        inputs = cls.parse_inputs(**raw)
        return inputs, cls.calculate(inputs)
