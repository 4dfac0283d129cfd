"""
Business Manager Backend — Editing Project Routes
=================================================

What:  /api/editing: list, create, status update, payment update, delete.
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from bizmanager.database import get_db_session
from bizmanager.schemas.common import DataResponse, ErrorResponse, MessageResponse
from bizmanager.schemas.editing import ProjectCreate, ProjectCreated, ProjectRead
from bizmanager.schemas.orders import ReceivedPaymentUpdate, StatusUpdate
from bizmanager.services.access import Actor, get_actor
from bizmanager.services.editing_service import editing_service

router = APIRouter(prefix="/api/editing", tags=["Editing Projects"])

_NOT_FOUND = {404: {"description": "Project not found", "model": ErrorResponse}}


@router.get("/", response_model=DataResponse[List[ProjectRead]], summary="List editing projects")
async def list_projects(
    actor: Actor = Depends(get_actor),
    db: AsyncSession = Depends(get_db_session),
) -> DataResponse[List[ProjectRead]]:
    return DataResponse(data=await editing_service.list_projects(db, actor))


@router.post(
    "/",
    response_model=ProjectCreated,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"description": "Client or editor not found", "model": ErrorResponse}},
    summary="Create an editing project",
    description="Computes the editor's commission, credits it as a salary entry and charges the client.",
)
async def create_project(
    payload: ProjectCreate,
    db: AsyncSession = Depends(get_db_session),
) -> ProjectCreated:
    project = await editing_service.create_project(db, payload)
    return ProjectCreated(message="Project created successfully", project_id=project.id)


@router.put("/{project_id}/status", response_model=MessageResponse, responses=_NOT_FOUND)
async def update_project_status(
    project_id: str,
    payload: StatusUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await editing_service.update_status(db, project_id, payload.status)
    return MessageResponse(message="Project status updated")


@router.put("/{project_id}/payment", response_model=MessageResponse, responses=_NOT_FOUND)
async def update_project_payment(
    project_id: str,
    payload: ReceivedPaymentUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await editing_service.update_payment(db, project_id, payload.received_payment)
    return MessageResponse(message="Payment updated")


@router.delete("/{project_id}", response_model=MessageResponse, responses=_NOT_FOUND)
async def delete_project(
    project_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await editing_service.delete_project(db, project_id)
    return MessageResponse(message="Project deleted successfully")
