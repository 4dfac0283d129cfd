"""
Business Manager Backend — Dashboard Service
============================================

What:  Read-only aggregation for the dashboard: deadline alerts for today
       and headline statistics. Nothing here is persisted.

"Today":
    [local midnight, next local midnight) in settings.business_timezone,
    converted to UTC and compared in SQL against order_date (orders) and
    end_date (editing projects).
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Tuple
from zoneinfo import ZoneInfo

from sqlalchemy import case, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from bizmanager.config import settings
from bizmanager.models.base import money, utcnow
from bizmanager.models.client import Client
from bizmanager.models.editing import PROJECT_STATUS_COMPLETED, EditingProject
from bizmanager.models.order import ORDER_STATUS_COMPLETED, Order
from bizmanager.models.salary import Salary
from bizmanager.models.user import User
from bizmanager.schemas.dashboard import Alert, DashboardStats
from bizmanager.services.access import Actor
from bizmanager.services.ledger import database_errors
from bizmanager.services.order_service import orders_assigned_to
from bizmanager.services.salary_service import salary_service

logger = logging.getLogger(__name__)

ALL_GOOD = Alert(
    type="info",
    title="All Good!",
    message="No urgent deadlines today. Keep up the great work!",
    icon="fas fa-check-circle",
    count=0,
)


def today_window(now: Optional[datetime] = None, tz_name: Optional[str] = None) -> Tuple[datetime, datetime]:
    """UTC bounds of the business day containing `now`."""
    tz = ZoneInfo(tz_name or settings.business_timezone)
    local_now = (now or utcnow()).astimezone(tz)
    start = local_now.replace(hour=0, minute=0, second=0, microsecond=0)
    # Next local midnight; DST days are 23 or 25 hours long
    next_day = start.date() + timedelta(days=1)
    end = datetime(next_day.year, next_day.month, next_day.day, tzinfo=tz)
    return start.astimezone(timezone.utc), end.astimezone(timezone.utc)


def _amount(value: float) -> str:
    value = money(value)
    if value == int(value):
        return f"₹{value:,.0f}"
    return f"₹{value:,.2f}"


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}{'s' if count != 1 else ''}"


class DashboardService:

    async def alerts(self, db: AsyncSession, actor: Actor, now: Optional[datetime] = None) -> List[Alert]:
        start, end = today_window(now)
        alerts: List[Alert] = []

        order_query = (
            select(Order, Client.name)
            .outerjoin(Client, Client.id == Order.client_id)
            .where(
                Order.order_date >= start,
                Order.order_date < end,
                Order.status != ORDER_STATUS_COMPLETED,
            )
            .order_by(Order.order_date)
        )
        project_query = (
            select(EditingProject)
            .where(
                EditingProject.end_date >= start,
                EditingProject.end_date < end,
                EditingProject.status != PROJECT_STATUS_COMPLETED,
            )
            .order_by(EditingProject.end_date)
        )

        if actor.is_owner and actor.is_scoped:
            order_query = order_query.where(Order.shop_name == actor.shop_name)
            project_query = project_query.where(EditingProject.shop_name == actor.shop_name)
        elif not actor.is_owner and actor.user_id:
            order_query = order_query.where(Order.id.in_(orders_assigned_to(actor.user_id)))
            project_query = project_query.where(EditingProject.editor_id == actor.user_id)
            if actor.is_scoped:
                order_query = order_query.where(Order.shop_name == actor.shop_name)
                project_query = project_query.where(EditingProject.shop_name == actor.shop_name)
        else:
            return [ALL_GOOD]

        with database_errors("Could not load dashboard alerts"):
            orders = (await db.execute(order_query)).all()
            projects = list((await db.execute(project_query)).scalars().all())

        if actor.is_owner:
            if orders:
                alerts.append(Alert(
                    type="urgent",
                    title=f"{_plural(len(orders), 'Order')} Due Today",
                    message="\n\n".join(
                        f"{order.order_name}\n"
                        f"Client: {client_name or order.client_id} | Venue: {order.venue_place or 'N/A'}\n"
                        f"Remaining: {_amount(order.total_amount - order.received_payment)}\n"
                        f"Due Today"
                        for order, client_name in orders
                    ),
                    icon="fas fa-exclamation-triangle",
                    count=len(orders),
                ))
            if projects:
                alerts.append(Alert(
                    type="urgent",
                    title=f"{_plural(len(projects), 'Project')} Ending Today",
                    message="\n\n".join(
                        f"{p.project_name}\nValue: {_amount(p.total_amount)}\nDeadline Today"
                        for p in projects
                    ),
                    icon="fas fa-video",
                    count=len(projects),
                ))
        else:
            if orders:
                alerts.append(Alert(
                    type="urgent",
                    title=f"Your {_plural(len(orders), 'Order')} Due Today",
                    message="\n\n".join(
                        f"ORDER: {order.order_name}\n"
                        f"Venue: {order.venue_place or 'Not specified'}\n"
                        f"Due TODAY\nYour work must be completed today!"
                        for order, _ in orders
                    ),
                    icon="fas fa-box",
                    count=len(orders),
                ))
            if projects:
                alerts.append(Alert(
                    type="urgent",
                    title=f"Your {_plural(len(projects), 'Project')} Ending Today",
                    message="\n\n".join(
                        f"PROJECT: {p.project_name}\n"
                        f"Your Commission: {_amount(p.commission_amount)}\n"
                        f"Deadline TODAY\nProject must be completed today!"
                        for p in projects
                    ),
                    icon="fas fa-video",
                    count=len(projects),
                ))

        return alerts or [ALL_GOOD]

    async def stats(self, db: AsyncSession, actor: Actor) -> DashboardStats:
        stats = DashboardStats(user_role=actor.role or "unknown")

        with database_errors("Could not load dashboard statistics"):
            if actor.is_owner and actor.is_scoped:
                await self._owner_stats(db, actor.shop_name, stats)
            elif not actor.is_owner and actor.user_id:
                await self._employee_stats(db, actor.user_id, stats)
        return stats

    async def _owner_stats(self, db: AsyncSession, shop_name: str, stats: DashboardStats) -> None:
        done = Order.status == ORDER_STATUS_COMPLETED
        row = (await db.execute(
            select(
                func.count(Order.id),
                func.coalesce(func.sum(case((done, 1), else_=0)), 0),
                func.coalesce(func.sum(Order.total_amount), 0),
                func.coalesce(func.sum(Order.received_payment), 0),
            ).where(Order.shop_name == shop_name)
        )).one()
        total_orders, done_orders, total_payment, received_payment = row
        stats.remaining_orders = int(total_orders) - int(done_orders)
        stats.done_orders = int(done_orders)
        stats.total_payment = money(total_payment)
        stats.received_payment = money(received_payment)

        project_done = EditingProject.status == PROJECT_STATUS_COMPLETED
        total_projects, done_projects = (await db.execute(
            select(
                func.count(EditingProject.id),
                func.coalesce(func.sum(case((project_done, 1), else_=0)), 0),
            ).where(EditingProject.shop_name == shop_name)
        )).one()
        stats.active_projects = int(total_projects) - int(done_projects)
        stats.completed_projects = int(done_projects)

        stats.remaining_client_payments = money(await db.scalar(
            select(func.coalesce(func.sum(Client.pending_payments), 0))
            .where(Client.shop_name == shop_name)
        ))
        stats.worker_payments = money(await db.scalar(
            select(func.coalesce(func.sum(Salary.amount), 0))
            .join(User, User.id == Salary.employee_id)
            .where(User.shop_name == shop_name, Salary.is_paid.is_(False))
        ))

    async def _employee_stats(self, db: AsyncSession, user_id: str, stats: DashboardStats) -> None:
        assigned = Order.id.in_(orders_assigned_to(user_id))
        total_orders, done_orders = (await db.execute(
            select(
                func.count(Order.id),
                func.coalesce(func.sum(case((Order.status == ORDER_STATUS_COMPLETED, 1), else_=0)), 0),
            ).where(assigned)
        )).one()
        stats.active_orders = int(total_orders) - int(done_orders)
        stats.completed_orders = int(done_orders)

        total_projects, done_projects = (await db.execute(
            select(
                func.count(EditingProject.id),
                func.coalesce(
                    func.sum(case((EditingProject.status == PROJECT_STATUS_COMPLETED, 1), else_=0)), 0
                ),
            ).where(EditingProject.editor_id == user_id)
        )).one()
        stats.active_projects = int(total_projects) - int(done_projects)
        stats.completed_projects = int(done_projects)

        total, paid, remaining = await salary_service.salary_totals(db, user_id)
        stats.total_earnings = total
        stats.paid_salary = paid
        stats.remaining_salary = remaining


dashboard_service = DashboardService()
