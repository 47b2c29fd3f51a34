"""
API Dependencies.
Common dependencies for authentication and database sessions.
"""

import logging
from typing import Annotated
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from app.core.database import get_db
from app.core.security import decode_token
from app.models.user import User
from app.services.storage import StorageService


logger = logging.getLogger(__name__)

# Bearer token security scheme
security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> User:
    """
    Resolve the current user from the JWT bearer token.

    Raises:
        HTTPException: If the token is invalid or the user does not exist
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or expired authentication token",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if not credentials:
        logger.warning("Request without token")
        raise credentials_exception

    token_data = decode_token(credentials.credentials)
    if token_data is None or token_data.user_id is None:
        logger.warning("Invalid or expired token")
        raise credentials_exception

    result = await db.execute(
        select(User).where(User.id == token_data.user_id)
    )
    user = result.scalar_one_or_none()

    if user is None:
        logger.warning("User %s not found", token_data.user_id)
        raise credentials_exception

    logger.debug("Authenticated user: %s", user.email)
    return user


async def get_current_active_user(
    current_user: User = Depends(get_current_user),
) -> User:
    """
    Resolve the current user and require an active account.

    Raises:
        HTTPException: If the account is disabled
    """
    if not current_user.is_active:
        logger.warning("Disabled account: %s", current_user.email)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account disabled",
        )
    return current_user


# Type aliases for cleaner route signatures
CurrentUser = Annotated[User, Depends(get_current_active_user)]
DbSession = Annotated[AsyncSession, Depends(get_db)]


def get_storage() -> StorageService:
    """Storage for uploaded documents."""
    return StorageService()


Storage = Annotated[StorageService, Depends(get_storage)]
