"""
Business Manager Backend — User Service
=======================================

What:  Staff listings, per-user work statistics and performance ratings.
"""

import logging
from typing import List, Optional, Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from bizmanager.exceptions import AccessDeniedError, NotFoundError
from bizmanager.models.editing import PROJECT_STATUS_COMPLETED, EditingProject
from bizmanager.models.order import ORDER_STATUS_COMPLETED, Order
from bizmanager.models.user import User
from bizmanager.schemas.users import (
    SalaryTotals,
    StaffRead,
    StatisticsUser,
    UserRead,
    UserStatistics,
    WorkCount,
)
from bizmanager.services.access import Actor, Resource, can_access
from bizmanager.services.ledger import database_errors, lock_one
from bizmanager.services.order_service import orders_assigned_to
from bizmanager.services.salary_service import salary_service

logger = logging.getLogger(__name__)


def _work_count(total: int, completed: int) -> WorkCount:
    return WorkCount(total=total, completed=completed, remaining=total - completed)


class UserService:

    async def list_users(self, db: AsyncSession, actor: Actor) -> List[UserRead]:
        """Owner: everyone in the shop. Others: their colleagues, excluding themselves."""
        if not actor.can_list:
            return []
        query = (
            select(User)
            .where(User.shop_name == actor.shop_name)
            .order_by(User.created_at.desc())
        )
        if not actor.is_owner:
            query = query.where(User.id != actor.user_id)
        with database_errors("Could not retrieve users"):
            users = (await db.execute(query)).scalars().all()
        return [UserRead.model_validate(u) for u in users]

    async def list_by_roles(
        self, db: AsyncSession, roles: Sequence[str], shop_name: Optional[str] = None
    ) -> List[StaffRead]:
        query = select(User).where(User.role.in_(roles)).order_by(User.first_name, User.last_name)
        if shop_name:
            query = query.where(User.shop_name == shop_name)
        with database_errors("Could not retrieve staff"):
            users = (await db.execute(query)).scalars().all()
        return [StaffRead.model_validate(u) for u in users]

    async def statistics(self, db: AsyncSession, actor: Actor, user_id: str) -> UserStatistics:
        with database_errors("Could not retrieve user statistics", user_id=user_id):
            user = await db.get(User, user_id)
            if user is None:
                raise NotFoundError(resource="User", resource_id=user_id)
            if not can_access(actor, Resource.of(user.shop_name)):
                raise AccessDeniedError()

            assigned = Order.id.in_(orders_assigned_to(user_id))
            orders_total = await db.scalar(select(func.count()).select_from(Order).where(assigned))
            orders_done = await db.scalar(
                select(func.count()).select_from(Order)
                .where(assigned, Order.status == ORDER_STATUS_COMPLETED)
            )
            own_projects = EditingProject.editor_id == user_id
            projects_total = await db.scalar(
                select(func.count()).select_from(EditingProject).where(own_projects)
            )
            projects_done = await db.scalar(
                select(func.count()).select_from(EditingProject)
                .where(own_projects, EditingProject.status == PROJECT_STATUS_COMPLETED)
            )
            total, paid, remaining = await salary_service.salary_totals(db, user_id)

        orders = _work_count(orders_total or 0, orders_done or 0)
        projects = _work_count(projects_total or 0, projects_done or 0)
        return UserStatistics(
            user=StatisticsUser(id=user.id, name=user.full_name, role=user.role),
            orders=orders,
            projects=projects,
            work=_work_count(orders.total + projects.total, orders.completed + projects.completed),
            payments=SalaryTotals(total_earnings=total, paid_salary=paid, remaining_salary=remaining),
        )

    async def update_performance(self, db: AsyncSession, user_id: str, rating: float) -> User:
        with database_errors("Could not update performance", user_id=user_id):
            user = await lock_one(db, User, user_id)
            if user is None:
                raise NotFoundError(resource="User", resource_id=user_id)
            user.accuracy_rating = rating
            await db.flush()
        logger.info("User %s accuracy rating set to %s", user_id, rating)
        return user


user_service = UserService()
