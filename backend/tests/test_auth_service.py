"""
Business Manager Backend — Auth & Shop Service Tests
====================================================

What we test:
    ✅ Registration hashes the password and zeroes salary totals
    ✅ Duplicate email → ValidationError, no second row
    ✅ Worker ↔ editor conversion markers
    ✅ Login: success stamps last_login, wrong password / unknown email fail
    ✅ Legacy SHA-256 hashes verify and are upgraded on login
    ✅ Shop directory seeding and merging
    ✅ Shop creation conflicts are case-insensitive (shops and owners)
"""

import hashlib

import pytest
from sqlalchemy import func, select

from bizmanager.exceptions import ConflictError, NotFoundError, ValidationError
from bizmanager.models.user import ROLE_EDITOR, ROLE_OWNER, ROLE_WORKER, Shop, User
from bizmanager.schemas.auth import LoginRequest, RegisterRequest, ShopCreate
from bizmanager.services.auth_service import DEFAULT_SHOPS, auth_service


def _register(email="asha@example.com", password="s3cret!", **overrides) -> RegisterRequest:
    fields = dict(first_name="Asha", last_name="Rao", email=email, password=password, shop_name="Test Shop")
    fields.update(overrides)
    return RegisterRequest(**fields)


class TestRegister:

    @pytest.mark.asyncio
    async def test_register_hashes_password(self, db_session):
        user = await auth_service.register(db_session, _register())

        assert user.password != "s3cret!"
        assert user.password.startswith("$pbkdf2-sha256$")
        assert (user.total_earnings, user.paid_salary, user.remaining_salary) == (0, 0, 0)
        assert user.role == ROLE_WORKER

    @pytest.mark.asyncio
    async def test_duplicate_email(self, db_session):
        await auth_service.register(db_session, _register())

        with pytest.raises(ValidationError, match="User already exists"):
            await auth_service.register(db_session, _register(first_name="Other"))

        count = await db_session.scalar(select(func.count()).select_from(User))
        assert count == 1

    @pytest.mark.asyncio
    async def test_worker_turned_editor(self, db_session):
        user = await auth_service.register(
            db_session, _register(role=ROLE_EDITOR, old_worker_editor_id="old-worker-1")
        )
        assert user.is_from_worker is True
        assert user.original_worker_id == "old-worker-1"
        assert user.is_from_editor is False

    @pytest.mark.asyncio
    async def test_editor_turned_worker(self, db_session):
        user = await auth_service.register(
            db_session, _register(role=ROLE_WORKER, old_worker_editor_id="old-editor-1")
        )
        assert user.is_from_editor is True
        assert user.original_editor_id == "old-editor-1"

    @pytest.mark.asyncio
    async def test_placeholder_conversion_id_is_ignored(self, db_session):
        user = await auth_service.register(db_session, _register(old_worker_editor_id="undefined"))
        assert user.is_from_editor is False
        assert user.original_editor_id is None


class TestLogin:

    @pytest.mark.asyncio
    async def test_success_stamps_last_login(self, db_session):
        await auth_service.register(db_session, _register())

        user = await auth_service.login(db_session, LoginRequest(email="asha@example.com", password="s3cret!"))
        assert user.last_login is not None

    @pytest.mark.asyncio
    async def test_wrong_password(self, db_session):
        await auth_service.register(db_session, _register())
        with pytest.raises(ValidationError, match="Invalid credentials"):
            await auth_service.login(db_session, LoginRequest(email="asha@example.com", password="nope"))

    @pytest.mark.asyncio
    async def test_unknown_email(self, db_session):
        with pytest.raises(ValidationError, match="Invalid credentials"):
            await auth_service.login(db_session, LoginRequest(email="ghost@example.com", password="x"))

    @pytest.mark.asyncio
    async def test_account_without_password(self, db_session):
        await auth_service.register(db_session, _register(password=None))
        with pytest.raises(ValidationError, match="Google login"):
            await auth_service.login(db_session, LoginRequest(email="asha@example.com", password="x"))

    @pytest.mark.asyncio
    async def test_legacy_sha256_hash_is_upgraded(self, db_session, make_user):
        user = await make_user(email="legacy@example.com")
        user.password = hashlib.sha256(b"old-password").hexdigest()
        await db_session.flush()

        await auth_service.login(db_session, LoginRequest(email="legacy@example.com", password="old-password"))

        assert user.password.startswith("$pbkdf2-sha256$")
        again = await auth_service.login(
            db_session, LoginRequest(email="legacy@example.com", password="old-password")
        )
        assert again.id == user.id


class TestShops:

    @pytest.mark.asyncio
    async def test_empty_directory_is_seeded(self, db_session):
        shops = await auth_service.list_shops(db_session)

        assert [s.name for s in shops] == sorted(name for name, _ in DEFAULT_SHOPS)
        assert await db_session.scalar(select(func.count()).select_from(Shop)) == len(DEFAULT_SHOPS)

    @pytest.mark.asyncio
    async def test_user_shop_names_are_merged(self, db_session, make_user):
        db_session.add(Shop(name="Alpha Studio"))
        await make_user(shop_name="Zeta Events")
        await make_user(shop_name="Alpha Studio")

        shops = await auth_service.list_shops(db_session)
        assert [s.name for s in shops] == ["Alpha Studio", "Zeta Events"]

    @pytest.mark.asyncio
    async def test_create_shop(self, db_session):
        shop = await auth_service.create_shop(
            db_session,
            ShopCreate(name="  Pixel Works ", owner_email="o@example.com", owner_name="Owner"),
        )
        assert shop.name == "Pixel Works"
        assert shop.created_by == "o@example.com"

    @pytest.mark.asyncio
    async def test_duplicate_shop_name_any_case(self, db_session):
        db_session.add(Shop(name="Pixel Works"))
        await db_session.flush()

        with pytest.raises(ConflictError) as exc_info:
            await auth_service.create_shop(
                db_session,
                ShopCreate(name="PIXEL works", owner_email="o@example.com", owner_name="Owner"),
            )
        assert exc_info.value.payload == {"shopExists": True}
        assert await db_session.scalar(select(func.count()).select_from(Shop)) == 1

    @pytest.mark.asyncio
    async def test_shop_name_taken_by_owner(self, db_session, make_user):
        await make_user(role=ROLE_OWNER, shop_name="Lens Lab", email="boss@example.com")

        with pytest.raises(ConflictError) as exc_info:
            await auth_service.create_shop(
                db_session,
                ShopCreate(name="lens lab", owner_email="o@example.com", owner_name="Owner"),
            )
        assert exc_info.value.payload["existingOwner"] == "boss@example.com"
        assert await db_session.scalar(select(func.count()).select_from(Shop)) == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload, message",
        [
            (ShopCreate(name="", owner_email="o@example.com", owner_name="O"), "Shop name is required"),
            (ShopCreate(name="New Shop", owner_name="O"), "Owner email and name are required"),
        ],
    )
    async def test_required_fields(self, db_session, payload, message):
        with pytest.raises(ValidationError, match=message):
            await auth_service.create_shop(db_session, payload)


class TestLookup:

    @pytest.mark.asyncio
    async def test_lookup_by_email(self, db_session, make_user):
        user = await make_user(email="find.me@example.com")
        assert (await auth_service.lookup(db_session, "find.me@example.com")).id == user.id

    @pytest.mark.asyncio
    async def test_lookup_missing(self, db_session):
        with pytest.raises(NotFoundError, match="User not found"):
            await auth_service.lookup(db_session, "nobody@example.com")

    @pytest.mark.asyncio
    async def test_workers_and_editors(self, db_session, make_user):
        await make_user(role=ROLE_WORKER, first_name="Ann")
        await make_user(role=ROLE_EDITOR, first_name="Ben")
        await make_user(role=ROLE_OWNER, first_name="Cal")
        await make_user(role=ROLE_WORKER, first_name="Dee", shop_name="Elsewhere")

        staff = await auth_service.workers_and_editors(db_session, "Test Shop")
        assert [u.first_name for u in staff] == ["Ann", "Ben"]
