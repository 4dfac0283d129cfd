"""
Business Manager Backend — Auth & Shop Routes
=============================================

What:  /api/auth: register, login, shop directory, shop creation, staff
       lookup for a shop, user lookup by email.
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from bizmanager.database import get_db_session
from bizmanager.schemas.auth import (
    AuthResponse,
    AuthUser,
    LoginRequest,
    RegisterRequest,
    ShopCreate,
    ShopCreated,
    ShopName,
    ShopRead,
    UserLookup,
)
from bizmanager.schemas.common import ErrorResponse, StaffRef
from bizmanager.services.auth_service import auth_service

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "User already exists", "model": ErrorResponse}},
)
async def register(
    payload: RegisterRequest,
    db: AsyncSession = Depends(get_db_session),
) -> AuthResponse:
    user = await auth_service.register(db, payload)
    return AuthResponse(message="User registered successfully", user=AuthUser.model_validate(user))


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={400: {"description": "Invalid credentials", "model": ErrorResponse}},
)
async def login(
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db_session),
) -> AuthResponse:
    user = await auth_service.login(db, payload)
    return AuthResponse(message="Login successful", user=AuthUser.model_validate(user))


@router.get("/shops", response_model=List[ShopName], summary="Active shops and shops users registered with")
async def list_shops(db: AsyncSession = Depends(get_db_session)) -> List[ShopName]:
    return await auth_service.list_shops(db)


@router.post(
    "/shops",
    response_model=ShopCreated,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Name, owner email or owner name missing", "model": ErrorResponse},
        409: {"description": "Shop name already taken (case-insensitive)", "model": ErrorResponse},
    },
)
async def create_shop(
    payload: ShopCreate,
    db: AsyncSession = Depends(get_db_session),
) -> ShopCreated:
    shop = await auth_service.create_shop(db, payload)
    return ShopCreated(message="Shop created successfully", shop=ShopRead.model_validate(shop))


@router.get("/workers-editors/{shop_name}", response_model=List[StaffRef])
async def workers_and_editors(
    shop_name: str,
    db: AsyncSession = Depends(get_db_session),
) -> List[StaffRef]:
    users = await auth_service.workers_and_editors(db, shop_name)
    return [StaffRef.model_validate(u) for u in users]


@router.get(
    "/user/{email}",
    response_model=UserLookup,
    responses={404: {"description": "User not found", "model": ErrorResponse}},
)
async def get_user_by_email(
    email: str,
    db: AsyncSession = Depends(get_db_session),
) -> UserLookup:
    user = await auth_service.lookup(db, email)
    return UserLookup(user=AuthUser.model_validate(user))
