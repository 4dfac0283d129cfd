"""
Business Manager Backend — User Routes
======================================

What:  /api/users: staff listings by role, per-user statistics and
       performance ratings.

`/workers`, `/editors` and `/transporters` are declared before the
`/{target_id}` routes. Path ids are never named `user_id`: that name
belongs to the caller's `userId` query parameter read by `get_actor`.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from bizmanager.database import get_db_session
from bizmanager.models.user import EDITOR_ROLES, TRANSPORTER_ROLES, WORKER_ROLES
from bizmanager.schemas.common import DataResponse, ErrorResponse, MessageResponse
from bizmanager.schemas.users import PerformanceUpdate, StaffRead, UserRead, UserStatistics
from bizmanager.services.access import Actor, clean_identifier, get_actor
from bizmanager.services.user_service import user_service

router = APIRouter(prefix="/api/users", tags=["Users"])

ShopFilter = Query(default=None, alias="shopName")


@router.get("/", response_model=DataResponse[List[UserRead]])
async def list_users(
    actor: Actor = Depends(get_actor),
    db: AsyncSession = Depends(get_db_session),
) -> DataResponse[List[UserRead]]:
    return DataResponse(data=await user_service.list_users(db, actor))


@router.get("/workers", response_model=DataResponse[List[StaffRead]])
async def list_workers(
    shop_name: Optional[str] = ShopFilter,
    db: AsyncSession = Depends(get_db_session),
) -> DataResponse[List[StaffRead]]:
    return DataResponse(
        data=await user_service.list_by_roles(db, WORKER_ROLES, clean_identifier(shop_name))
    )


@router.get("/editors", response_model=DataResponse[List[StaffRead]])
async def list_editors(
    shop_name: Optional[str] = ShopFilter,
    db: AsyncSession = Depends(get_db_session),
) -> DataResponse[List[StaffRead]]:
    return DataResponse(
        data=await user_service.list_by_roles(db, EDITOR_ROLES, clean_identifier(shop_name))
    )


@router.get("/transporters", response_model=DataResponse[List[StaffRead]])
async def list_transporters(
    shop_name: Optional[str] = ShopFilter,
    db: AsyncSession = Depends(get_db_session),
) -> DataResponse[List[StaffRead]]:
    return DataResponse(
        data=await user_service.list_by_roles(db, TRANSPORTER_ROLES, clean_identifier(shop_name))
    )


@router.get(
    "/{target_id}/statistics",
    response_model=DataResponse[UserStatistics],
    responses={
        403: {"description": "User belongs to another shop", "model": ErrorResponse},
        404: {"description": "User not found", "model": ErrorResponse},
    },
    summary="Work and salary statistics for one user",
)
async def user_statistics(
    target_id: str,
    actor: Actor = Depends(get_actor),
    db: AsyncSession = Depends(get_db_session),
) -> DataResponse[UserStatistics]:
    return DataResponse(data=await user_service.statistics(db, actor, target_id))


@router.put(
    "/{target_id}/performance",
    response_model=MessageResponse,
    responses={404: {"description": "User not found", "model": ErrorResponse}},
)
async def update_performance(
    target_id: str,
    payload: PerformanceUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await user_service.update_performance(db, target_id, payload.accuracy_rating)
    return MessageResponse(message="Performance updated")
