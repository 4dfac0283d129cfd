"""
Business Manager Backend — Auth & Shop Service
==============================================

What:  Account registration and login, and the shop (tenant) directory.
How:   Passwords are hashed with passlib (see services/security.py); shop
       names are compared case-insensitively against both the shops table
       and the shop names of existing owners.
"""

import logging
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from bizmanager.exceptions import ConflictError, NotFoundError, ValidationError
from bizmanager.models.base import utcnow
from bizmanager.models.user import (
    ROLE_EDITOR,
    ROLE_OWNER,
    ROLE_WORKER,
    ROLE_WORKER_EDITOR,
    Shop,
    User,
)
from bizmanager.schemas.auth import LoginRequest, RegisterRequest, ShopCreate, ShopName
from bizmanager.services.access import clean_identifier
from bizmanager.services.ledger import database_errors
from bizmanager.services.security import hash_password, verify_password

logger = logging.getLogger(__name__)

DEFAULT_SHOPS = (
    ("Creative Studios", "video_editing"),
    ("Event Productions", "mixed"),
    ("Digital Media House", "video_editing"),
    ("Wedding Films Co.", "video_editing"),
    ("LED Vision Pro", "led_walls"),
    ("Drone Masters", "drones"),
)

WORKER_EDITOR_ROLES = (ROLE_WORKER, ROLE_EDITOR, ROLE_WORKER_EDITOR)


class AuthService:

    async def get_by_email(self, db: AsyncSession, email: str) -> Optional[User]:
        result = await db.execute(select(User).where(User.email == email.strip()))
        return result.scalar_one_or_none()

    async def register(self, db: AsyncSession, payload: RegisterRequest) -> User:
        """
        Creates an account with zeroed salary totals.

        `oldWorkerEditorId` records a conversion: an editor who used to be a
        worker, or a worker who used to be an editor.
        """
        email = payload.email.strip()
        previous_id = clean_identifier(payload.old_worker_editor_id)
        with database_errors("Could not register the user"):
            if await self.get_by_email(db, email) is not None:
                raise ValidationError("User already exists", field="email")

            user = User(
                first_name=payload.first_name,
                last_name=payload.last_name,
                email=email,
                password=hash_password(payload.password) if payload.password else None,
                shop_name=clean_identifier(payload.shop_name),
                role=payload.role,
                phone=payload.phone or "",
                is_from_worker=bool(previous_id) and payload.role == ROLE_EDITOR,
                original_worker_id=previous_id if payload.role == ROLE_EDITOR else None,
                is_from_editor=bool(previous_id) and payload.role == ROLE_WORKER,
                original_editor_id=previous_id if payload.role == ROLE_WORKER else None,
                profile_complete=True,
                total_earnings=0,
                paid_salary=0,
                remaining_salary=0,
            )
            db.add(user)
            await db.flush()

        logger.info("User %s registered as %s in shop %s", user.id, user.role, user.shop_name)
        return user

    async def login(self, db: AsyncSession, payload: LoginRequest) -> User:
        with database_errors("Could not log in"):
            user = await self.get_by_email(db, payload.email)
            if user is None:
                raise ValidationError("Invalid credentials")
            if not user.password:
                raise ValidationError("Please use Google login for this account")

            matches, replacement = verify_password(payload.password, user.password)
            if not matches:
                logger.info("Failed login for %s", user.id)
                raise ValidationError("Invalid credentials")
            if replacement:
                user.password = replacement
                logger.info("Upgraded password hash for %s", user.id)
            user.last_login = utcnow()
            await db.flush()
        return user

    async def list_shops(self, db: AsyncSession) -> List[ShopName]:
        """
        Active shops plus any shop names users registered with.
        An empty directory is seeded with the default shops first.
        """
        with database_errors("Could not retrieve shops"):
            result = await db.execute(
                select(Shop.name).where(Shop.is_active.is_(True)).order_by(Shop.name)
            )
            names = list(result.scalars().all())

            if not names:
                for name, business_type in DEFAULT_SHOPS:
                    db.add(Shop(name=name, business_type=business_type))
                await db.flush()
                logger.info("Seeded %d default shops", len(DEFAULT_SHOPS))
                return [ShopName(name=name) for name in sorted(n for n, _ in DEFAULT_SHOPS)]

            result = await db.execute(
                select(User.shop_name)
                .where(User.shop_name.is_not(None), User.shop_name != "")
                .distinct()
            )
            user_shops = sorted(result.scalars().all())

        merged = list(dict.fromkeys(names + user_shops))
        return [ShopName(name=name) for name in merged]

    async def create_shop(self, db: AsyncSession, payload: ShopCreate) -> Shop:
        name = (payload.name or "").strip()
        if not name:
            raise ValidationError("Shop name is required", field="name")
        if not payload.owner_email or not payload.owner_name:
            raise ValidationError("Owner email and name are required")

        with database_errors("Could not create the shop"):
            existing = await db.execute(select(Shop).where(func.lower(Shop.name) == name.lower()))
            if existing.scalars().first() is not None:
                raise ConflictError(
                    "Shop name already exists. Please choose a different name.",
                    payload={"shopExists": True},
                )

            owner = await db.execute(
                select(User).where(
                    func.lower(User.shop_name) == name.lower(), User.role == ROLE_OWNER
                )
            )
            owner = owner.scalars().first()
            if owner is not None:
                raise ConflictError(
                    "This shop already has an owner. Please choose a different shop name.",
                    payload={"shopExists": True, "existingOwner": owner.email},
                )

            shop = Shop(
                name=name,
                description=payload.description or "",
                business_type=payload.business_type or "mixed",
                created_by=payload.owner_email,
                is_active=True,
            )
            db.add(shop)
            await db.flush()

        logger.info("Shop %s created by %s", shop.name, payload.owner_email)
        return shop

    async def workers_and_editors(self, db: AsyncSession, shop_name: str) -> List[User]:
        with database_errors("Could not retrieve workers and editors"):
            result = await db.execute(
                select(User)
                .where(User.shop_name == shop_name, User.role.in_(WORKER_EDITOR_ROLES))
                .order_by(User.first_name, User.last_name)
            )
            return list(result.scalars().all())

    async def lookup(self, db: AsyncSession, email: str) -> User:
        with database_errors("Could not retrieve the user"):
            user = await self.get_by_email(db, email)
        if user is None:
            raise NotFoundError(resource="User")
        return user


auth_service = AuthService()
