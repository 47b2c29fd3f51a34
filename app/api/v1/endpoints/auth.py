"""
Authentication endpoints.
Register, login and current profile.
"""

from fastapi import APIRouter, status

from app.api.deps import DbSession, CurrentUser
from app.schemas.auth import LoginRequest, RegisterRequest, Token, UserResponse
from app.services.auth import AuthService


router = APIRouter()


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register",
    description="Create a new user account",
)
async def register(
    data: RegisterRequest,
    db: DbSession,
) -> UserResponse:
    service = AuthService(db)
    user = await service.register(data)
    return UserResponse.model_validate(user)


@router.post(
    "/login",
    response_model=Token,
    summary="Login",
    description="Log in with email and password",
)
async def login(
    data: LoginRequest,
    db: DbSession,
) -> Token:
    service = AuthService(db)
    _, token = await service.login(data)
    return token


@router.get(
    "/me",
    response_model=UserResponse,
    summary="Current profile",
)
async def get_current_user(
    current_user: CurrentUser,
) -> UserResponse:
    return UserResponse.model_validate(current_user)
