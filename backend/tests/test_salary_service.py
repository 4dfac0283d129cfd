"""
Business Manager Backend — Salary Service Tests
===============================================

What we test:
    ✅ plan_allocation: oldest first, at most one partial step, never overpays
    ✅ pay(): [100, 200, 50] paid 250 → 100 paid, 200 split 150/50, 50 untouched
    ✅ pay() with more money than owed applies only what is owed
    ✅ pay() refuses an employee of another shop
    ✅ pay_entry(): whole-entry payment, 400 when already paid, 404 when missing
    ✅ delete_salary() takes paid and unpaid entries back off the employee
    ✅ my_salary(): totals recomputed from rows, zeros for unknown employees
"""

from datetime import timedelta

import pytest
from sqlalchemy import select

from bizmanager.exceptions import AccessDeniedError, NotFoundError, ValidationError
from bizmanager.models.base import utcnow
from bizmanager.models.salary import SALARY_TYPE_ORDER_WORK, Salary
from bizmanager.schemas.salary import SalaryCreate, SalaryPayRequest
from bizmanager.services.access import Actor
from bizmanager.services.salary_service import Allocation, plan_allocation, salary_service


async def _seed_entries(db_session, employee, amounts):
    """Unpaid entries with strictly increasing created_at, oldest first."""
    base = utcnow() - timedelta(days=len(amounts) + 1)
    entries = []
    for offset, amount in enumerate(amounts):
        entry = salary_service.credit(
            db_session, employee, amount, SALARY_TYPE_ORDER_WORK, f"Job {offset + 1}"
        )
        entry.created_at = base + timedelta(hours=offset)
        entries.append(entry)
    await db_session.flush()
    return entries


async def _rows(db_session, employee_id):
    result = await db_session.execute(
        select(Salary).where(Salary.employee_id == employee_id).order_by(Salary.created_at)
    )
    return list(result.scalars().all())


class TestPlanAllocation:

    def test_splits_the_entry_that_exceeds_the_pool(self):
        plan = plan_allocation([100, 200, 50], 250)
        assert plan == [
            Allocation(index=0, amount=100, partial=False),
            Allocation(index=1, amount=150, partial=True),
        ]

    def test_exact_cover_has_no_partial(self):
        plan = plan_allocation([100, 200], 300)
        assert [step.partial for step in plan] == [False, False]
        assert sum(step.amount for step in plan) == 300

    def test_never_allocates_more_than_owed(self):
        plan = plan_allocation([40, 60], 1000)
        assert sum(step.amount for step in plan) == 100

    def test_nothing_owed(self):
        assert plan_allocation([], 500) == []

    def test_cents_are_preserved(self):
        plan = plan_allocation([10.10, 20.20], 15.15)
        assert plan[-1] == Allocation(index=1, amount=5.05, partial=True)


class TestSalaryPay:

    @pytest.mark.asyncio
    async def test_oldest_first_with_split(self, db_session, make_user):
        employee = await make_user()
        first, second, third = await _seed_entries(db_session, employee, [100, 200, 50])

        result = await salary_service.pay(
            db_session, SalaryPayRequest(employee_id=employee.id, amount=250)
        )

        assert result.paid_amount == 250
        assert result.paid_salaries == 2

        assert first.is_paid is True and first.amount == 100
        assert second.is_paid is False and second.amount == 50
        assert third.is_paid is False and third.amount == 50

        rows = await _rows(db_session, employee.id)
        partials = [r for r in rows if r.description.startswith("Partial payment:")]
        assert len(partials) == 1
        assert partials[0].amount == 150
        assert partials[0].is_paid is True
        assert partials[0].description == "Partial payment: Job 2"

        assert employee.total_earnings == 350
        assert employee.paid_salary == 250
        assert employee.remaining_salary == 100

    @pytest.mark.asyncio
    async def test_pays_only_what_is_owed(self, db_session, make_user):
        employee = await make_user()
        await _seed_entries(db_session, employee, [100, 200])

        result = await salary_service.pay(
            db_session, SalaryPayRequest(employee_id=employee.id, amount=1000)
        )

        assert result.paid_amount == 300
        assert employee.paid_salary == 300
        assert employee.remaining_salary == 0
        assert all(r.is_paid for r in await _rows(db_session, employee.id))

    @pytest.mark.asyncio
    async def test_unknown_employee(self, db_session):
        with pytest.raises(NotFoundError):
            await salary_service.pay(db_session, SalaryPayRequest(employee_id="missing", amount=10))

    @pytest.mark.asyncio
    async def test_other_shop_is_refused(self, db_session, make_user):
        employee = await make_user(shop_name="Shop A")
        await _seed_entries(db_session, employee, [100])

        with pytest.raises(AccessDeniedError):
            await salary_service.pay(
                db_session,
                SalaryPayRequest(employee_id=employee.id, amount=50, shop_name="Shop B"),
            )
        assert employee.paid_salary == 0


class TestSalaryEntries:

    @pytest.mark.asyncio
    async def test_create_credits_earnings(self, db_session, make_user):
        employee = await make_user()
        created = await salary_service.create_salary(
            db_session,
            SalaryCreate(employee_id=employee.id, amount=75.5, salary_type="bonus", related_order="undefined"),
        )
        entry = await db_session.get(Salary, created.salary_id)
        assert entry.related_order_id is None
        assert employee.total_earnings == 75.5
        assert employee.remaining_salary == 75.5

    @pytest.mark.asyncio
    async def test_create_for_unknown_employee(self, db_session):
        with pytest.raises(NotFoundError):
            await salary_service.create_salary(
                db_session, SalaryCreate(employee_id="missing", amount=10, salary_type="bonus")
            )

    @pytest.mark.asyncio
    async def test_pay_entry_then_again(self, db_session, make_user):
        employee = await make_user()
        (entry,) = await _seed_entries(db_session, employee, [120])

        await salary_service.pay_entry(db_session, entry.id)
        assert entry.is_paid is True
        assert entry.paid_date is not None
        assert employee.paid_salary == 120
        assert employee.remaining_salary == 0

        with pytest.raises(ValidationError, match="Salary already paid"):
            await salary_service.pay_entry(db_session, entry.id)
        assert employee.paid_salary == 120

    @pytest.mark.asyncio
    async def test_pay_missing_entry(self, db_session):
        with pytest.raises(NotFoundError):
            await salary_service.pay_entry(db_session, "missing")

    @pytest.mark.asyncio
    async def test_delete_reverses_paid_and_unpaid(self, db_session, make_user):
        employee = await make_user()
        paid, unpaid = await _seed_entries(db_session, employee, [100, 40])
        await salary_service.pay_entry(db_session, paid.id)

        await salary_service.delete_salary(db_session, paid.id)
        assert employee.total_earnings == 40
        assert employee.paid_salary == 0
        assert employee.remaining_salary == 40

        await salary_service.delete_salary(db_session, unpaid.id)
        assert employee.total_earnings == 0
        assert employee.remaining_salary == 0
        assert await _rows(db_session, employee.id) == []


class TestMySalary:

    @pytest.mark.asyncio
    async def test_totals_from_rows(self, db_session, make_user):
        employee = await make_user()
        first, _ = await _seed_entries(db_session, employee, [100, 60])
        await salary_service.pay_entry(db_session, first.id)

        summary = await salary_service.my_salary(
            db_session, Actor(shop_name=employee.shop_name), employee.id
        )
        assert summary.total_earnings == 160
        assert summary.paid_salary == 100
        assert summary.remaining_salary == 60
        assert len(summary.salaries) == 2

    @pytest.mark.asyncio
    @pytest.mark.parametrize("employee_id", [None, "undefined", "no-such-user"])
    async def test_absent_employee_gets_zeros(self, db_session, employee_id):
        summary = await salary_service.my_salary(db_session, Actor(), employee_id)
        assert summary.total_earnings == 0
        assert summary.salaries == []

    @pytest.mark.asyncio
    async def test_other_shop_is_refused(self, db_session, make_user):
        employee = await make_user(shop_name="Shop A")
        with pytest.raises(AccessDeniedError):
            await salary_service.my_salary(
                db_session, Actor(shop_name="Shop B", role="owner"), employee.id
            )
