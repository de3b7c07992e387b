"""Employee API endpoints (admin only)."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Path, Response, status

from payroll_portal.api.dependencies import AdminIdentity, DbSession
from payroll_portal.api.schemas import (
    EmployeeCreate,
    EmployeeListResponse,
    EmployeeResponse,
    ErrorResponse,
)
from payroll_portal.services.employee_service import EmployeeService

router = APIRouter(prefix="/employees", tags=["employees"])


@router.get(
    "",
    response_model=EmployeeListResponse,
    responses={403: {"model": ErrorResponse}},
)
async def list_employees(db: DbSession, _admin: AdminIdentity) -> EmployeeListResponse:
    """List all employees by name."""
    employees = await EmployeeService(db).list_employees()
    return EmployeeListResponse(
        items=[EmployeeResponse.model_validate(e) for e in employees],
        total=len(employees),
    )


@router.post(
    "",
    response_model=EmployeeResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 403: {"model": ErrorResponse}},
)
async def create_employee(
    db: DbSession,
    _admin: AdminIdentity,
    payload: EmployeeCreate,
) -> EmployeeResponse:
    """Add an employee without a linked login."""
    employee = await EmployeeService(db).create_employee(
        name=payload.name,
        position=payload.position,
        department=payload.department,
        email=payload.email,
        salary=payload.salary,
    )
    await db.commit()
    return EmployeeResponse.model_validate(employee)


@router.delete(
    "/{employee_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def delete_employee(
    db: DbSession,
    _admin: AdminIdentity,
    employee_id: Annotated[UUID, Path()],
) -> Response:
    """Delete an employee that has no payrolls."""
    await EmployeeService(db).delete_employee(employee_id)
    await db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
