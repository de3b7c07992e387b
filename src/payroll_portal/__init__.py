"""Payroll portal: employee registry, payroll generation and payslip access."""

__version__ = "0.1.0"
