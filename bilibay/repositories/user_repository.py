"""
Repository for user accounts with PostgreSQL
"""

import logging
import uuid
from typing import Any, List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from bilibay.models.db.user import UserDB

logger = logging.getLogger(__name__)


class UserRepository:
    """
    CRUD operations on user accounts.

    Like the marketplace repositories it only flushes; the caller owns
    the transaction.

    Attributes:
        session: SQLAlchemy async session
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, **fields: Any) -> UserDB:
        """
        Create a new user.

        Args:
            **fields: UserDB column values (email must already be lowercase)

        Returns:
            UserDB: The created user
        """
        user = UserDB(id=uuid.uuid4(), **fields)
        self.session.add(user)
        await self.session.flush()
        logger.info(f"User created: {user.email} (ID: {user.id}, role: {user.role})")
        return user

    async def get_by_id(self, user_id: uuid.UUID) -> Optional[UserDB]:
        return await self.session.get(UserDB, user_id)

    async def get_by_email(self, email: str) -> Optional[UserDB]:
        result = await self.session.execute(select(UserDB).where(UserDB.email == email.strip().lower()))
        return result.scalar_one_or_none()

    async def get_by_verification_token(self, token: str) -> Optional[UserDB]:
        result = await self.session.execute(select(UserDB).where(UserDB.verification_token == token))
        return result.scalar_one_or_none()

    async def get_by_reset_token(self, token: str) -> Optional[UserDB]:
        result = await self.session.execute(select(UserDB).where(UserDB.reset_password_token == token))
        return result.scalar_one_or_none()

    async def email_exists(self, email: str) -> bool:
        return await self.get_by_email(email) is not None

    async def list_users(self, role: Optional[str] = None, offset: int = 0, limit: int = 20) -> Tuple[List[UserDB], int]:
        """
        List users, newest first.

        Returns:
            (page of users, total matching users)
        """
        conditions = [UserDB.role == role] if role else []
        total = await self.session.scalar(select(func.count()).select_from(UserDB).where(*conditions))
        result = await self.session.execute(
            select(UserDB).where(*conditions).order_by(UserDB.created_at.desc(), UserDB.id).offset(offset).limit(limit)
        )
        return list(result.scalars().all()), total or 0

    async def count(self, role: Optional[str] = None) -> int:
        conditions = [UserDB.role == role] if role else []
        total = await self.session.scalar(select(func.count()).select_from(UserDB).where(*conditions))
        return total or 0

    async def save(self, user: UserDB) -> UserDB:
        """Flush pending changes made to a loaded user."""
        await self.session.flush()
        return user
