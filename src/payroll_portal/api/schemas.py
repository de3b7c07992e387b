"""Pydantic schemas for API request/response models."""

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Literal, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from payroll_portal.calculators import AMOUNT_FIELDS, MAX_AMOUNT

# Raw form value: parsed leniently by the calculator, range-checked there
RawAmount = Union[str, int, float, None]

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+$"


# ============================================================================
# Identity schemas
# ============================================================================


class RegisterRequest(BaseModel):
    """Schema for registering a login."""

    name: str = Field(min_length=1)
    email: str = Field(pattern=EMAIL_PATTERN)
    password: str = Field(min_length=1)
    confirm_password: str
    role: Literal["admin", "employee"] = "employee"


class LoginRequest(BaseModel):
    """Schema for logging in."""

    email: str
    password: str


class UserResponse(BaseModel):
    """Schema for a login identity."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    email: str
    role: str
    created_at: datetime


class TokenResponse(BaseModel):
    """Schema for a successful login."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user: UserResponse


# ============================================================================
# Employee schemas
# ============================================================================


class EmployeeCreate(BaseModel):
    """Schema for adding an employee."""

    name: str = Field(min_length=1)
    position: str = Field(min_length=1)
    department: str = Field(min_length=1)
    email: str = Field(pattern=EMAIL_PATTERN)
    salary: Decimal = Field(ge=0, le=MAX_AMOUNT)


class EmployeeResponse(BaseModel):
    """Schema for employee response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID | None = None
    name: str
    position: str
    department: str
    email: str
    salary: Decimal
    created_at: datetime


class EmployeeListResponse(BaseModel):
    """Schema for listing employees."""

    items: list[EmployeeResponse]
    total: int


# ============================================================================
# Payroll schemas
# ============================================================================


class PayrollAmounts(BaseModel):
    """Itemized amounts as typed into the generate form."""

    basic_salary: RawAmount = None
    overtime: RawAmount = None
    bonus: RawAmount = None
    tax: RawAmount = None
    insurance: RawAmount = None
    other_deductions: RawAmount = None

    def raw_amounts(self) -> dict[str, Any]:
        return self.model_dump(include=set(AMOUNT_FIELDS))


class PayrollCreate(PayrollAmounts):
    """Schema for generating a payroll."""

    employee_id: UUID
    pay_period: str = Field(min_length=1)
    pay_date: date


class PayrollTotalsResponse(BaseModel):
    """Schema for calculated totals."""

    model_config = ConfigDict(from_attributes=True)

    gross_salary: Decimal
    total_deductions: Decimal
    net_salary: Decimal


class PayrollResponse(BaseModel):
    """Schema for payroll response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    employee_id: UUID
    employee_name: str
    pay_period: str
    pay_date: date
    basic_salary: Decimal
    overtime: Decimal
    bonus: Decimal
    tax: Decimal
    insurance: Decimal
    other_deductions: Decimal
    gross_salary: Decimal
    total_deductions: Decimal
    net_salary: Decimal
    created_at: datetime


class PayrollListResponse(BaseModel):
    """Schema for listing payrolls."""

    items: list[PayrollResponse]
    total: int


# ============================================================================
# Payslip schemas
# ============================================================================


class PayslipResponse(BaseModel):
    """Schema for an authorized payslip."""

    payroll: PayrollResponse
    employee: EmployeeResponse
    link: str


class PayslipLinkResponse(BaseModel):
    """Schema for the shareable payslip link."""

    payroll_id: UUID
    url: str


# ============================================================================
# Error schemas
# ============================================================================


class ErrorResponse(BaseModel):
    """Schema for error response."""

    detail: str
    code: str | None = None
    context: dict[str, Any] | None = None
