"""
Business Manager Backend — Dashboard Routes
===========================================

What:  /api/dashboard/alerts and /api/dashboard/stats. Read-only.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from bizmanager.database import get_db_session
from bizmanager.schemas.common import DataResponse
from bizmanager.schemas.dashboard import Alert, DashboardStats
from bizmanager.services.access import Actor, get_actor
from bizmanager.services.dashboard_service import dashboard_service

router = APIRouter(prefix="/api/dashboard", tags=["Dashboard"])


@router.get(
    "/alerts",
    response_model=DataResponse[List[Alert]],
    summary="Deadlines falling due today",
    description=(
        "One urgent alert per non-empty category (orders due today, projects ending today); "
        "a single `All Good!` info alert when nothing is due."
    ),
)
async def dashboard_alerts(
    actor: Actor = Depends(get_actor),
    db: AsyncSession = Depends(get_db_session),
) -> DataResponse[List[Alert]]:
    return DataResponse(data=await dashboard_service.alerts(db, actor))


@router.get("/stats", response_model=DataResponse[DashboardStats])
async def dashboard_stats(
    actor: Actor = Depends(get_actor),
    db: AsyncSession = Depends(get_db_session),
) -> DataResponse[DashboardStats]:
    return DataResponse(data=await dashboard_service.stats(db, actor))
