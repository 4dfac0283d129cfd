"""
Business Manager Backend — Ledger Primitives
============================================

What:  The arithmetic shared by every service that moves money between the
       five ledgers (order, editing project, salary, client, user), plus the
       row-locking loader used before each read-modify-write.

How:   Functions mutate already-loaded ORM objects in place and leave
       flushing to the caller. Every result is rounded to cents and each
       pair of running totals is recomputed from its parts, so

           order/project: remaining_payment = total_amount - received_payment
           client:        pending_payments  = total_payments_due - received_payments
           user:          remaining_salary  = total_earnings - paid_salary

       hold after every call.

Locking:
    `lock_one` / `lock_many` issue SELECT ... FOR UPDATE on PostgreSQL so
    concurrent writers serialize per row. SQLite ignores the clause; its
    single-writer lock gives the same effect for tests and development.
"""

import logging
from contextlib import contextmanager
from typing import Dict, Iterable, Iterator, Optional, Type, TypeVar, Union

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bizmanager.exceptions import DatabaseError
from bizmanager.models.base import money
from bizmanager.models.client import Client
from bizmanager.models.editing import EditingProject
from bizmanager.models.order import Order
from bizmanager.models.user import User

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")
Receivable = Union[Order, EditingProject]


# ── Error translation ────────────────────────────────────────────────────


@contextmanager
def database_errors(message: str, **context) -> Iterator[None]:
    """Re-raises driver / ORM failures as DatabaseError with a client-safe message."""
    try:
        yield
    except SQLAlchemyError as e:
        logger.error("%s: %s", message, e, exc_info=True)
        raise DatabaseError(
            message=f"{message}. Please try again.",
            context={"error_type": type(e).__name__, **context},
        ) from e


# ── Locked loading ───────────────────────────────────────────────────────


async def lock_one(db: AsyncSession, model: Type[ModelT], pk: Optional[str]) -> Optional[ModelT]:
    if not pk:
        return None
    result = await db.execute(
        select(model)
        .where(model.id == pk)
        .with_for_update()
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def lock_many(db: AsyncSession, model: Type[ModelT], pks: Iterable[str]) -> Dict[str, ModelT]:
    """Loads and locks rows by id in primary-key order; missing ids are absent from the map."""
    ids = sorted(set(pk for pk in pks if pk))
    if not ids:
        return {}
    result = await db.execute(
        select(model)
        .where(model.id.in_(ids))
        .order_by(model.id)
        .with_for_update()
        .execution_options(populate_existing=True)
    )
    return {row.id: row for row in result.scalars().all()}


# ── Orders and projects ──────────────────────────────────────────────────


def set_received(receivable: Receivable, received: float) -> float:
    """Overwrites the received amount and returns the delta applied."""
    previous = money(receivable.received_payment)
    receivable.received_payment = money(received)
    receivable.remaining_payment = money(receivable.total_amount - receivable.received_payment)
    return money(receivable.received_payment - previous)


def add_received(receivable: Receivable, amount: float) -> float:
    """
    Adds `amount` (negative to subtract) to the received amount, floored at
    zero. Returns the delta actually applied.
    """
    target = money(receivable.received_payment + amount)
    if target < 0:
        logger.warning(
            "Received payment on %r would drop to %.2f; clamping at 0", receivable, target
        )
        target = 0.0
    return set_received(receivable, target)


# ── Clients ──────────────────────────────────────────────────────────────


def _recompute_pending(client: Client) -> None:
    client.pending_payments = money(client.total_payments_due - client.received_payments)


def charge_client(client: Client, total: float, received: float, project: bool = False) -> None:
    """Adds a new order (or editing project) to the client's running totals."""
    client.total_payments_due = money(client.total_payments_due + total)
    client.received_payments = money(client.received_payments + received)
    _recompute_pending(client)
    if project:
        client.lifetime_editing_projects = (client.lifetime_editing_projects or 0) + 1
    else:
        client.lifetime_orders = (client.lifetime_orders or 0) + 1


def discharge_client(client: Client, total: float, received: float, project: bool = False) -> None:
    """Removes an order (or editing project) from the client's running totals."""
    client.total_payments_due = money(client.total_payments_due - total)
    client.received_payments = money(max(client.received_payments - received, 0))
    _recompute_pending(client)
    if project:
        client.lifetime_editing_projects = max((client.lifetime_editing_projects or 0) - 1, 0)
    else:
        client.lifetime_orders = max((client.lifetime_orders or 0) - 1, 0)


def receive_from_client(client: Client, amount: float) -> float:
    """
    Moves `amount` (negative to reverse) into the client's received total,
    floored at zero. Returns the delta actually applied.
    """
    previous = money(client.received_payments)
    target = money(previous + amount)
    if target < 0:
        logger.warning(
            "Received payments on %r would drop to %.2f; clamping at 0", client, target
        )
        target = 0.0
    client.received_payments = target
    _recompute_pending(client)
    return money(target - previous)


# ── Employees ────────────────────────────────────────────────────────────


def _recompute_remaining(user: User) -> None:
    user.remaining_salary = money(user.total_earnings - user.paid_salary)


def credit_earnings(user: User, amount: float) -> None:
    """A new unpaid salary entry: earned, not yet paid."""
    user.total_earnings = money(user.total_earnings + amount)
    _recompute_remaining(user)


def record_salary_paid(user: User, amount: float) -> None:
    user.paid_salary = money(user.paid_salary + amount)
    _recompute_remaining(user)


def reverse_salary(user: User, amount: float, paid: bool) -> None:
    """Undoes one salary entry; paid entries also come off `paid_salary`."""
    user.total_earnings = money(user.total_earnings - amount)
    if paid:
        user.paid_salary = money(user.paid_salary - amount)
    _recompute_remaining(user)
