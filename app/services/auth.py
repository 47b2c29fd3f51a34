"""
Authentication service.
Handles user registration and login.
"""

import logging
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from fastapi import HTTPException, status

from app.models.user import User
from app.schemas.auth import RegisterRequest, LoginRequest, Token
from app.core.security import (
    get_password_hash,
    verify_password,
    create_access_token,
)


logger = logging.getLogger(__name__)


class AuthService:
    """Service for authentication operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def register(self, data: RegisterRequest) -> User:
        """
        Register a new user.

        Args:
            data: Registration data

        Returns:
            Created user

        Raises:
            HTTPException: If email already exists
        """
        if await self.get_user_by_email(data.email):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="An account with this email already exists",
            )

        user = User(
            email=data.email,
            hashed_password=get_password_hash(data.password),
            first_name=data.first_name,
            last_name=data.last_name,
        )

        self.db.add(user)
        await self.db.flush()
        await self.db.refresh(user)

        logger.info("Registered user %s", user.email)
        return user

    async def login(self, data: LoginRequest) -> tuple[User, Token]:
        """
        Authenticate user and issue an access token.

        Raises:
            HTTPException: If credentials are invalid or the account is disabled
        """
        user = await self.get_user_by_email(data.email)

        if not user or not verify_password(data.password, user.hashed_password):
            logger.warning("Failed login for %s", data.email)
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Incorrect email or password",
            )

        if not user.is_active:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Account disabled",
            )

        return user, Token(access_token=create_access_token(user.id, user.email))

    async def get_user_by_email(self, email: str) -> User | None:
        """Get user by email."""
        result = await self.db.execute(
            select(User).where(User.email == email)
        )
        return result.scalar_one_or_none()
