"""Payroll API endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Path, Response, status

from payroll_portal.api.dependencies import AdminIdentity, CurrentIdentity, DbSession
from payroll_portal.api.schemas import (
    ErrorResponse,
    PayrollAmounts,
    PayrollCreate,
    PayrollListResponse,
    PayrollResponse,
    PayrollTotalsResponse,
)
from payroll_portal.services.payroll_service import PayrollService

router = APIRouter(prefix="/payrolls", tags=["payrolls"])


@router.get(
    "",
    response_model=PayrollListResponse,
    responses={401: {"model": ErrorResponse}},
)
async def list_payrolls(db: DbSession, identity: CurrentIdentity) -> PayrollListResponse:
    """Admins see every payroll; employees see their own."""
    payrolls = await PayrollService(db).list_payrolls(identity)
    return PayrollListResponse(
        items=[PayrollResponse.model_validate(p) for p in payrolls],
        total=len(payrolls),
    )


@router.post(
    "/preview",
    response_model=PayrollTotalsResponse,
    responses={403: {"model": ErrorResponse}},
)
async def preview_payroll(
    db: DbSession,
    _admin: AdminIdentity,
    payload: PayrollAmounts,
) -> PayrollTotalsResponse:
    """Calculate totals for the generate form without saving."""
    totals = PayrollService(db).preview(**payload.raw_amounts())
    return PayrollTotalsResponse.model_validate(totals)


@router.post(
    "",
    response_model=PayrollResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
async def generate_payroll(
    db: DbSession,
    _admin: AdminIdentity,
    payload: PayrollCreate,
) -> PayrollResponse:
    """Generate a payroll for an employee."""
    payroll = await PayrollService(db).generate_payroll(
        employee_id=payload.employee_id,
        pay_period=payload.pay_period,
        pay_date=payload.pay_date,
        **payload.raw_amounts(),
    )
    await db.commit()
    return PayrollResponse.model_validate(payroll)


@router.delete(
    "/{payroll_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def delete_payroll(
    db: DbSession,
    _admin: AdminIdentity,
    payroll_id: Annotated[UUID, Path()],
) -> Response:
    """Delete a payroll."""
    await PayrollService(db).delete_payroll(payroll_id)
    await db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
