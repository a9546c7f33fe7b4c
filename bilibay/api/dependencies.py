"""
FastAPI dependencies for authentication and role gating.
"""

import logging
from typing import Callable, Optional
from uuid import UUID

from fastapi import Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from bilibay.database.async_db import get_async_db
from bilibay.models.auth import UserRole
from bilibay.models.db.user import UserDB
from bilibay.repositories.user_repository import UserRepository
from bilibay.services.token_service import TokenService
from bilibay.services.user_service import UserService

logger = logging.getLogger(__name__)

token_service = TokenService()
oauth2_scheme = token_service.oauth2_scheme


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_user_service(db: AsyncSession = Depends(get_async_db)) -> UserService:  # noqa: B008
    return UserService(db, token_service=token_service)


async def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme),  # noqa: B008
    db: AsyncSession = Depends(get_async_db),  # noqa: B008
) -> UserDB:
    """
    Resolve the bearer token to an active user.

    Raises:
        HTTPException: 401 for a missing/invalid token or a missing/inactive user
    """
    if not token:
        raise _unauthorized()

    payload = token_service.decode_token(token)
    try:
        user_id = UUID(str(payload.get("sub")))
    except ValueError as e:
        raise _unauthorized() from e

    user = await UserRepository(db).get_by_id(user_id)
    if user is None or not user.is_active:
        logger.info(f"Token for missing or inactive user {user_id} rejected")
        raise _unauthorized()
    return user


def require_roles(*roles: UserRole) -> Callable:
    """
    Build a dependency that only lets the given roles through.

    Example:
        ```python
        @router.get("/", dependencies=[Depends(require_roles(UserRole.ADMIN))])
        ```
    """
    allowed = [role.value for role in roles]

    async def dependency(current_user: UserDB = Depends(get_current_user)) -> UserDB:  # noqa: B008
        if current_user.role not in allowed:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Forbidden: Access is allowed only for {', '.join(allowed)}",
            )
        return current_user

    return dependency


require_buyer = require_roles(UserRole.BUYER)
require_seller = require_roles(UserRole.SELLER)
require_admin = require_roles(UserRole.ADMIN)
