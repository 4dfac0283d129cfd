"""
Business Manager Backend — Payment Service Tests
================================================

What we test:
    ✅ create_payment adds to the order and the client
    ✅ delete_payment takes it back off
    ✅ delete after a manual payment correction clamps at zero
    ✅ client / order mismatch → ValidationError
    ✅ payment history joins the receiver and the order
"""

from datetime import timedelta

import pytest

from bizmanager.exceptions import NotFoundError, ValidationError
from bizmanager.models.base import utcnow
from bizmanager.models.payment import Payment
from bizmanager.schemas.payments import PaymentCreate
from bizmanager.services.order_service import order_service
from bizmanager.services.payment_service import payment_service


def _payment(order, amount, received_by="owner-1", **overrides) -> PaymentCreate:
    fields = dict(
        order_id=order.id,
        client_id=order.client_id,
        amount=amount,
        payment_date=utcnow(),
        received_by=received_by,
        shop_name=order.shop_name,
    )
    fields.update(overrides)
    return PaymentCreate(**fields)


class TestPaymentLedger:

    @pytest.mark.asyncio
    async def test_create_then_delete(self, db_session, make_client, make_order):
        client = await make_client()
        order = await make_order(client, total=1000)

        created = await payment_service.create_payment(db_session, _payment(order, 300))

        assert order.received_payment == 300
        assert order.remaining_payment == 700
        assert client.received_payments == 300
        assert client.pending_payments == 700

        await payment_service.delete_payment(db_session, created.payment_id)

        assert order.received_payment == 0
        assert order.remaining_payment == 1000
        assert client.received_payments == 0
        assert client.pending_payments == 1000
        assert await db_session.get(Payment, created.payment_id) is None

    @pytest.mark.asyncio
    async def test_delete_clamps_at_zero(self, db_session, make_client, make_order):
        client = await make_client()
        order = await make_order(client, total=1000)
        created = await payment_service.create_payment(db_session, _payment(order, 300))
        # Manual correction below the recorded payment
        await order_service.update_payment(db_session, order.id, 100)

        await payment_service.delete_payment(db_session, created.payment_id)

        assert order.received_payment == 0
        assert order.remaining_payment == 1000
        assert client.received_payments == 0
        assert client.pending_payments == 1000

    @pytest.mark.asyncio
    async def test_client_must_match_order(self, db_session, make_client, make_order):
        client = await make_client()
        stranger = await make_client(name="Someone Else")
        order = await make_order(client)

        with pytest.raises(ValidationError):
            await payment_service.create_payment(
                db_session, _payment(order, 50, client_id=stranger.id)
            )
        assert order.received_payment == 0

    @pytest.mark.asyncio
    async def test_unknown_order(self, db_session, make_client, make_order):
        client = await make_client()
        order = await make_order(client)
        with pytest.raises(NotFoundError, match="Order not found"):
            await payment_service.create_payment(db_session, _payment(order, 50, order_id="missing"))

    @pytest.mark.asyncio
    async def test_delete_missing(self, db_session):
        with pytest.raises(NotFoundError):
            await payment_service.delete_payment(db_session, "missing")


class TestPaymentHistory:

    @pytest.mark.asyncio
    async def test_newest_first_with_receiver(self, db_session, owner, make_client, make_order):
        client = await make_client()
        order = await make_order(client, total=1000, order_name="Concert")
        now = utcnow()
        await payment_service.create_payment(
            db_session, _payment(order, 100, received_by=owner.id, payment_date=now - timedelta(days=2))
        )
        await payment_service.create_payment(
            db_session, _payment(order, 200, received_by=owner.id, payment_date=now)
        )

        by_order = await payment_service.list_for_order(db_session, order.id)
        assert [p.amount for p in by_order] == [200, 100]
        assert by_order[0].first_name == "Olivia"
        assert by_order[0].role == "owner"

        by_client = await payment_service.list_for_client(db_session, client.id)
        assert len(by_client) == 2
        assert by_client[0].order_name == "Concert"
