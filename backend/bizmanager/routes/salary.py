"""
Business Manager Backend — Salary Routes
========================================

What:  /api/salary: list, my-salary, manual entry, allocator payment,
       single-entry payment, delete.

Route order matters: `/my-salary` and `/pay` are declared before the
`/{salary_id}` routes so they are not captured as ids.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from bizmanager.database import get_db_session
from bizmanager.schemas.common import DataResponse, ErrorResponse, MessageResponse
from bizmanager.schemas.salary import (
    SalaryCreate,
    SalaryCreated,
    SalaryPaid,
    SalaryPayRequest,
    SalarySummary,
    SalaryWithEmployee,
)
from bizmanager.services.access import Actor, get_actor
from bizmanager.services.salary_service import salary_service

router = APIRouter(prefix="/api/salary", tags=["Salary"])


@router.get(
    "/",
    response_model=DataResponse[List[SalaryWithEmployee]],
    summary="List salary entries",
    description="Owners see every entry of their shop's users; other roles only their own.",
)
async def list_salaries(
    actor: Actor = Depends(get_actor),
    db: AsyncSession = Depends(get_db_session),
) -> DataResponse[List[SalaryWithEmployee]]:
    return DataResponse(data=await salary_service.list_salaries(db, actor))


@router.get(
    "/my-salary",
    response_model=DataResponse[SalarySummary],
    responses={403: {"description": "Employee belongs to another shop", "model": ErrorResponse}},
    summary="One employee's salary entries and totals",
)
async def my_salary(
    employee_id: Optional[str] = Query(default=None, alias="employeeId"),
    actor: Actor = Depends(get_actor),
    db: AsyncSession = Depends(get_db_session),
) -> DataResponse[SalarySummary]:
    return DataResponse(data=await salary_service.my_salary(db, actor, employee_id))


@router.post(
    "/",
    response_model=SalaryCreated,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"description": "Employee not found", "model": ErrorResponse}},
    summary="Create a manual salary entry",
)
async def create_salary(
    payload: SalaryCreate,
    db: AsyncSession = Depends(get_db_session),
) -> SalaryCreated:
    return await salary_service.create_salary(db, payload)


@router.post(
    "/pay",
    response_model=SalaryPaid,
    responses={
        403: {"description": "Employee belongs to another shop", "model": ErrorResponse},
        404: {"description": "Employee not found", "model": ErrorResponse},
    },
    summary="Pay an employee, oldest unpaid entries first",
    description=(
        "Consumes unpaid entries oldest first, splitting the last one when the amount "
        "does not cover it. Never pays more than is owed; `paidAmount` reports what was applied."
    ),
)
async def pay_salary(
    payload: SalaryPayRequest,
    db: AsyncSession = Depends(get_db_session),
) -> SalaryPaid:
    return await salary_service.pay(db, payload)


@router.put(
    "/{salary_id}/pay",
    response_model=MessageResponse,
    responses={
        400: {"description": "Salary already paid", "model": ErrorResponse},
        404: {"description": "Salary entry not found", "model": ErrorResponse},
    },
    summary="Pay one salary entry in full",
)
async def pay_salary_entry(
    salary_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await salary_service.pay_entry(db, salary_id)
    return MessageResponse(message="Salary paid successfully")


@router.delete(
    "/{salary_id}",
    response_model=MessageResponse,
    responses={404: {"description": "Salary entry not found", "model": ErrorResponse}},
    summary="Delete a salary entry and reverse it on the employee",
)
async def delete_salary(
    salary_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await salary_service.delete_salary(db, salary_id)
    return MessageResponse(message="Salary entry deleted")
