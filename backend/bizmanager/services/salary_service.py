"""
Business Manager Backend — Salary Service
=========================================

What:  The salary ledger: crediting employees for assigned work, paying
       them (whole entries or through the allocator), and reversing entries
       when their order / project / row is deleted.
Who:   Called by routes/salary.py, and by the order and editing services
       when they create or delete work.

Allocation (POST /api/salary/pay):
    unpaid entries, oldest first ──▶ plan_allocation() ──▶ apply plan
                                        (pure)              (locked rows)

    For each unpaid entry while money remains:
        entry.amount <= pool  → mark the entry paid, pool -= amount
        entry.amount >  pool  → new paid entry of `pool` ("Partial payment: ...")
                                and the original shrinks by `pool`; stop
    The employee's paid_salary grows by exactly what was applied, which
    may be less than requested when too little is owed.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from sqlalchemy import case, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from bizmanager.exceptions import AccessDeniedError, NotFoundError, ValidationError
from bizmanager.models.base import money, to_utc, utcnow
from bizmanager.models.salary import Salary
from bizmanager.models.user import User
from bizmanager.schemas.salary import (
    SalaryCreate,
    SalaryCreated,
    SalaryPaid,
    SalaryPayRequest,
    SalaryRead,
    SalarySummary,
    SalaryWithEmployee,
)
from bizmanager.services.access import Actor, Resource, can_access, clean_identifier
from bizmanager.services.ledger import (
    credit_earnings,
    database_errors,
    lock_many,
    lock_one,
    record_salary_paid,
    reverse_salary,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Allocation:
    """One step of a payment plan: pay `amount` against the entry at `index`."""
    index: int
    amount: float
    partial: bool


def plan_allocation(owed: Sequence[float], amount: float) -> List[Allocation]:
    """
    Greedily spreads `amount` over `owed` (oldest first).

    Never allocates more than an entry owes and never more than `amount`
    in total; at most the last allocation is partial.
    """
    pool = money(amount)
    plan: List[Allocation] = []
    for index, entry_amount in enumerate(owed):
        if pool <= 0:
            break
        entry_amount = money(entry_amount)
        if entry_amount <= pool:
            plan.append(Allocation(index, entry_amount, partial=False))
            pool = money(pool - entry_amount)
        else:
            plan.append(Allocation(index, pool, partial=True))
            pool = 0.0
    return plan


class SalaryService:

    # ── Crediting ─────────────────────────────────────────────────────────

    def credit(
        self,
        db: AsyncSession,
        employee: User,
        amount: float,
        salary_type: str,
        description: str,
        work_date: Optional[datetime] = None,
        related_order_id: Optional[str] = None,
        related_project_id: Optional[str] = None,
    ) -> Salary:
        """Adds an unpaid entry for `employee` and raises their earnings. Caller flushes."""
        entry = Salary(
            employee_id=employee.id,
            amount=money(amount),
            salary_type=salary_type,
            related_order_id=related_order_id,
            related_project_id=related_project_id,
            description=description,
            work_date=to_utc(work_date) or utcnow(),
            is_paid=False,
        )
        db.add(entry)
        credit_earnings(employee, entry.amount)
        return entry

    async def create_salary(self, db: AsyncSession, payload: SalaryCreate) -> SalaryCreated:
        with database_errors("Could not create the salary entry"):
            employee = await lock_one(db, User, payload.employee_id)
            if employee is None:
                raise NotFoundError(resource="Employee", resource_id=payload.employee_id)

            entry = self.credit(
                db,
                employee,
                payload.amount,
                payload.salary_type,
                payload.description,
                work_date=payload.work_date,
                related_order_id=clean_identifier(payload.related_order),
                related_project_id=clean_identifier(payload.related_project),
            )
            await db.flush()

        logger.info("Salary entry %s created for %s: %.2f", entry.id, employee.id, entry.amount)
        return SalaryCreated(message="Salary entry created", salary_id=entry.id)

    # ── Reading ───────────────────────────────────────────────────────────

    async def list_salaries(self, db: AsyncSession, actor: Actor) -> List[SalaryWithEmployee]:
        if not actor.can_list:
            return []

        query = (
            select(Salary, User.first_name, User.last_name, User.role, User.shop_name)
            .outerjoin(User, User.id == Salary.employee_id)
            .order_by(Salary.created_at.desc())
        )
        if actor.is_owner:
            query = query.where(User.shop_name == actor.shop_name)
        else:
            query = query.where(Salary.employee_id == actor.user_id)

        with database_errors("Could not retrieve salaries"):
            result = await db.execute(query)
            rows = result.all()

        return [
            SalaryWithEmployee(
                **SalaryRead.model_validate(salary).model_dump(),
                first_name=first_name,
                last_name=last_name,
                role=role,
                shop_name=shop_name,
            )
            for salary, first_name, last_name, role, shop_name in rows
        ]

    async def salary_totals(self, db: AsyncSession, employee_id: str) -> Tuple[float, float, float]:
        """(total_earnings, paid_salary, remaining_salary) summed from the salary rows."""
        result = await db.execute(
            select(
                func.coalesce(func.sum(Salary.amount), 0),
                func.coalesce(
                    func.sum(case((Salary.is_paid.is_(True), Salary.amount), else_=0)), 0
                ),
            ).where(Salary.employee_id == employee_id)
        )
        total, paid = result.one()
        total, paid = money(total), money(paid)
        return total, paid, money(total - paid)

    async def my_salary(
        self, db: AsyncSession, actor: Actor, employee_id: Optional[str]
    ) -> SalarySummary:
        """
        An employee's salary rows with totals recomputed from them.

        Unknown or missing employees get zero totals rather than a 404; the
        dashboard calls this before the client knows who is logged in.
        """
        employee_id = clean_identifier(employee_id)
        if employee_id is None:
            return SalarySummary()

        with database_errors("Could not retrieve the salary summary"):
            employee = await db.get(User, employee_id)
            if employee is None:
                return SalarySummary()
            if not can_access(actor, Resource.of(employee.shop_name)):
                raise AccessDeniedError()

            result = await db.execute(
                select(Salary)
                .where(Salary.employee_id == employee_id)
                .order_by(Salary.created_at.desc())
            )
            salaries = list(result.scalars().all())
            total, paid, remaining = await self.salary_totals(db, employee_id)

        return SalarySummary(
            total_earnings=total,
            paid_salary=paid,
            remaining_salary=remaining,
            salaries=[SalaryRead.model_validate(s) for s in salaries],
        )

    # ── Paying ────────────────────────────────────────────────────────────

    async def pay(self, db: AsyncSession, payload: SalaryPayRequest) -> SalaryPaid:
        """Runs the allocator for one employee."""
        with database_errors("Could not process the salary payment"):
            employee = await lock_one(db, User, payload.employee_id)
            if employee is None:
                raise NotFoundError(resource="Employee", resource_id=payload.employee_id)

            requester = Actor(shop_name=clean_identifier(payload.shop_name))
            if not can_access(requester, Resource.of(employee.shop_name)):
                raise AccessDeniedError()

            result = await db.execute(
                select(Salary)
                .where(Salary.employee_id == employee.id, Salary.is_paid.is_(False))
                .order_by(Salary.created_at.asc(), Salary.id.asc())
                .with_for_update()
                .execution_options(populate_existing=True)
            )
            unpaid = list(result.scalars().all())

            plan = plan_allocation([entry.amount for entry in unpaid], payload.amount)
            now = utcnow()
            for step in plan:
                entry = unpaid[step.index]
                if step.partial:
                    db.add(Salary(
                        employee_id=entry.employee_id,
                        amount=step.amount,
                        salary_type=entry.salary_type,
                        related_order_id=entry.related_order_id,
                        related_project_id=entry.related_project_id,
                        description=f"Partial payment: {entry.description}",
                        work_date=entry.work_date,
                        is_paid=True,
                        paid_date=now,
                    ))
                    entry.amount = money(entry.amount - step.amount)
                else:
                    entry.is_paid = True
                    entry.paid_date = now

            paid_amount = money(sum(step.amount for step in plan))
            record_salary_paid(employee, paid_amount)
            await db.flush()

        if paid_amount < money(payload.amount):
            logger.info(
                "Employee %s owed less than requested: paid %.2f of %.2f",
                employee.id, paid_amount, payload.amount,
            )
        logger.info("Paid %.2f to %s across %d salary entries", paid_amount, employee.id, len(plan))
        return SalaryPaid(
            message="Payment processed successfully",
            paid_amount=paid_amount,
            paid_salaries=len(plan),
        )

    async def pay_entry(self, db: AsyncSession, salary_id: str) -> None:
        """Marks one entry paid in full, without splitting."""
        with database_errors("Could not pay the salary entry", salary_id=salary_id):
            entry = await lock_one(db, Salary, salary_id)
            if entry is None:
                raise NotFoundError(resource="Salary entry", resource_id=salary_id)
            if entry.is_paid:
                raise ValidationError("Salary already paid", field="id")

            entry.is_paid = True
            entry.paid_date = utcnow()
            employee = await lock_one(db, User, entry.employee_id)
            if employee is not None:
                record_salary_paid(employee, entry.amount)
            else:
                logger.warning("Salary %s paid for missing employee %s", entry.id, entry.employee_id)
            await db.flush()

    # ── Reversing ─────────────────────────────────────────────────────────

    async def delete_salary(self, db: AsyncSession, salary_id: str) -> None:
        with database_errors("Could not delete the salary entry", salary_id=salary_id):
            entry = await lock_one(db, Salary, salary_id)
            if entry is None:
                raise NotFoundError(resource="Salary entry", resource_id=salary_id)
            await self._reverse(db, [entry])
            await db.flush()

    async def reverse_related(
        self,
        db: AsyncSession,
        order_id: Optional[str] = None,
        project_id: Optional[str] = None,
    ) -> int:
        """
        Deletes every entry linked to an order or project and takes the
        amounts back off each employee. Returns the number of entries removed.
        """
        if order_id is not None:
            condition = Salary.related_order_id == order_id
        elif project_id is not None:
            condition = Salary.related_project_id == project_id
        else:
            raise ValueError("order_id or project_id is required")

        result = await db.execute(
            select(Salary)
            .where(condition)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        entries = list(result.scalars().all())
        await self._reverse(db, entries)
        return len(entries)

    async def _reverse(self, db: AsyncSession, entries: Sequence[Salary]) -> None:
        employees = await lock_many(db, User, (e.employee_id for e in entries))
        for entry in entries:
            employee = employees.get(entry.employee_id)
            if employee is not None:
                reverse_salary(employee, entry.amount, paid=entry.is_paid)
            else:
                logger.warning(
                    "Salary %s belongs to missing employee %s", entry.id, entry.employee_id
                )
            await db.delete(entry)


salary_service = SalaryService()
