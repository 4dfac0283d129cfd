"""
Business Manager Backend — Test Configuration (conftest.py)
===========================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every test gets a fresh in-memory SQLite database (aiosqlite +
       StaticPool, so all sessions share one connection). The API client
       overrides `get_db_session` to open one session per request against
       that database, with the same commit / rollback contract as production.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── engine:          in-memory database with every table created
    ├── session_factory: async_sessionmaker bound to `engine`
    ├── db_session:      one AsyncSession for service-level tests
    ├── test_client:     HTTPX AsyncClient wired to the FastAPI app
    └── make_user / make_client / make_order: row factories (flush only)
"""

import os

# Override settings for testing BEFORE any bizmanager imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["AUTO_CREATE_TABLES"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["BUSINESS_TIMEZONE"] = "UTC"

from itertools import count
from typing import AsyncGenerator, List, Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import bizmanager.models  # noqa: F401
from bizmanager.database import Base, get_db_session
from bizmanager.models.client import Client
from bizmanager.models.order import Order
from bizmanager.models.user import ROLE_OWNER, ROLE_WORKER, User
from bizmanager.schemas.orders import OrderCreate, OrderTransporterIn, OrderWorkerIn
from bizmanager.services.order_service import order_service

SHOP = "Test Shop"

_emails = count(1)


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def engine():
    test_engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """
    A session for calling services directly.

    Services only flush, so everything a test writes stays visible inside
    this session without committing.
    """
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def test_client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """
    HTTPX AsyncClient talking to the FastAPI app through ASGITransport.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from bizmanager.main import app

    async def override_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_session
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
    finally:
        app.dependency_overrides.pop(get_db_session, None)


# ══════════════════════════════════════════════════════════════════════════
# Row Factories
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def make_user(db_session):
    async def _make(
        role: str = ROLE_WORKER,
        shop_name: Optional[str] = SHOP,
        first_name: str = "Test",
        last_name: str = "User",
        email: Optional[str] = None,
    ) -> User:
        user = User(
            first_name=first_name,
            last_name=last_name,
            email=email or f"user{next(_emails)}@example.com",
            role=role,
            shop_name=shop_name,
            total_earnings=0,
            paid_salary=0,
            remaining_salary=0,
        )
        db_session.add(user)
        await db_session.flush()
        return user

    return _make


@pytest.fixture
def make_client(db_session):
    async def _make(name: str = "Acme Events", shop_name: str = SHOP) -> Client:
        client = Client(
            name=name,
            shop_name=shop_name,
            total_payments_due=0,
            received_payments=0,
            pending_payments=0,
            lifetime_orders=0,
            lifetime_editing_projects=0,
        )
        db_session.add(client)
        await db_session.flush()
        return client

    return _make


@pytest.fixture
def make_order(db_session):
    """Creates an order through the order service so every ledger is updated."""

    async def _make(
        client: Client,
        total: float = 1000,
        received: float = 0,
        workers: Optional[List[tuple]] = None,
        transporters: Optional[List[tuple]] = None,
        **fields,
    ) -> Order:
        payload = OrderCreate(
            client_id=client.id,
            order_name=fields.pop("order_name", "Wedding Shoot"),
            venue_place=fields.pop("venue_place", "Grand Hall"),
            total_amount=total,
            received_payment=received,
            shop_name=fields.pop("shop_name", client.shop_name),
            created_by=fields.pop("created_by", "owner-1"),
            workers=[OrderWorkerIn(worker=u.id, payment=p) for u, p in (workers or [])],
            transporters=[
                OrderTransporterIn(transporter=u.id, payment=p) for u, p in (transporters or [])
            ],
            **fields,
        )
        return await order_service.create_order(db_session, payload)

    return _make


@pytest_asyncio.fixture
async def owner(make_user) -> User:
    return await make_user(role=ROLE_OWNER, first_name="Olivia", last_name="Owner")
