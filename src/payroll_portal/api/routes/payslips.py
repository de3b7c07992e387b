"""Payslip view, share-link and QR code endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Path, Query, Response

from payroll_portal.api.dependencies import CurrentIdentity, DbSession
from payroll_portal.api.schemas import (
    EmployeeResponse,
    ErrorResponse,
    PayrollResponse,
    PayslipLinkResponse,
    PayslipResponse,
)
from payroll_portal.services.payroll_service import PayrollService, payslip_url

router = APIRouter(prefix="/payslips", tags=["payslips"])


@router.get(
    "/{payroll_id}",
    response_model=PayslipResponse,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def get_payslip(
    db: DbSession,
    identity: CurrentIdentity,
    payroll_id: Annotated[UUID, Path()],
) -> PayslipResponse:
    """Payslip for the payroll owner or an admin.

    404 when the payroll or its employee is missing, 403 when the viewer
    is neither an admin nor the employee's own login.
    """
    view = await PayrollService(db).get_payslip(payroll_id, identity)
    return PayslipResponse(
        payroll=PayrollResponse.model_validate(view.payroll),
        employee=EmployeeResponse.model_validate(view.employee),
        link=payslip_url(view.payroll.id),
    )


@router.get(
    "/{payroll_id}/link",
    response_model=PayslipLinkResponse,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def get_payslip_link(
    db: DbSession,
    identity: CurrentIdentity,
    payroll_id: Annotated[UUID, Path()],
) -> PayslipLinkResponse:
    """Shareable payslip URL, rendered by clients as a QR code."""
    url = await PayrollService(db).payslip_link(payroll_id, identity)
    return PayslipLinkResponse(payroll_id=payroll_id, url=url)


@router.get(
    "/{payroll_id}/qr",
    response_class=Response,
    responses={
        200: {"content": {"image/png": {}}, "description": "QR code of the payslip link"},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
async def get_payslip_qr(
    db: DbSession,
    identity: CurrentIdentity,
    payroll_id: Annotated[UUID, Path()],
    scale: Annotated[int, Query(ge=1, le=40)] = 8,
) -> Response:
    """PNG QR code of the payslip link, with high error correction."""
    image = await PayrollService(db).payslip_qr(payroll_id, identity, scale=scale)
    return Response(content=image, media_type="image/png")
