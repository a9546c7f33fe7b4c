import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from bilibay.core.domain import (
    AuthenticationException,
    AuthorizationException,
    BusinessRuleViolationException,
    DuplicateEntityException,
    EntityNotFoundException,
    ValidationException,
)
from bilibay.core.shared import Page, page_offset
from bilibay.database.unit_of_work import SQLAlchemyUnitOfWork
from bilibay.models.auth import User, UserCreate, UserRole, UserUpdate
from bilibay.models.db.user import UserDB
from bilibay.repositories.user_repository import UserRepository
from bilibay.services.notification_service import NotificationService
from bilibay.services.token_service import TokenService

logger = logging.getLogger(__name__)


def to_profile(user: UserDB) -> User:
    """Public profile of a stored user"""
    return User.model_validate(user)


class UserService:
    """
    Service for account management: registration, login, email
    verification, password reset and profile updates.

    Every mutating method commits its own unit of work.
    """

    def __init__(
        self,
        session: AsyncSession,
        token_service: Optional[TokenService] = None,
        notification_service: Optional[NotificationService] = None,
    ):
        self.users = UserRepository(session)
        self.uow = SQLAlchemyUnitOfWork(session)
        self.token_service = token_service or TokenService()
        self.notification_service = notification_service or NotificationService()

    async def get_user(self, user_id: UUID) -> Optional[UserDB]:
        return await self.users.get_by_id(user_id)

    async def register(self, user_data: UserCreate) -> UserDB:
        """
        Register a buyer or seller account

        Raises:
            AuthorizationException: Someone tried to self-register as admin
            DuplicateEntityException: Email already registered
        """
        if user_data.role == UserRole.ADMIN:
            raise AuthorizationException("register", message="Admin accounts cannot be self-registered")
        if await self.users.email_exists(user_data.email):
            raise DuplicateEntityException("User", "email", user_data.email)

        verification_token = secrets.token_urlsafe(32)
        user = await self.users.create(
            first_name=user_data.first_name.strip(),
            middle_name=user_data.middle_name,
            last_name=user_data.last_name.strip(),
            email=user_data.email,
            password_hash=self.token_service.get_password_hash(user_data.password),
            phone=user_data.phone,
            birthday=user_data.birthday,
            role=user_data.role.value,
            email_verified=False,
            verification_token=verification_token,
            is_active=True,
        )
        await self.uow.commit()

        await self.notification_service.send_verification_email(user.email, verification_token)
        return user

    async def authenticate(self, email: str, password: str) -> UserDB:
        """
        Check credentials

        Raises:
            AuthenticationException: Unknown email or wrong password
            AuthorizationException: Account deactivated
        """
        user = await self.users.get_by_email(email)
        if user is None or not self.token_service.verify_password(password, user.password_hash):
            logger.info(f"Failed login attempt for {email}")
            raise AuthenticationException("Invalid email or password")
        if not user.is_active:
            raise AuthorizationException("login", message="Account is deactivated")
        return user

    def issue_token(self, user: UserDB) -> str:
        return self.token_service.create_access_token(data={"sub": str(user.id), "role": user.role})

    async def verify_email(self, token: str) -> UserDB:
        user = await self.users.get_by_verification_token(token)
        if user is None:
            raise BusinessRuleViolationException(
                rule="INVALID_TOKEN", message="Invalid or expired verification token"
            )
        user.email_verified = True
        user.verification_token = None
        await self.users.save(user)
        await self.uow.commit()
        logger.info(f"Email verified for {user.email}")
        return user

    async def request_password_reset(self, email: str) -> None:
        """Store a reset token and email it; unknown emails are ignored silently."""
        user = await self.users.get_by_email(email)
        if user is None:
            logger.info(f"Password reset requested for unknown email {email}")
            return

        token = secrets.token_urlsafe(32)
        user.reset_password_token = token
        user.reset_password_expires = datetime.now(timezone.utc) + timedelta(
            minutes=self.token_service.settings.RESET_TOKEN_EXPIRE_MINUTES
        )
        await self.users.save(user)
        await self.uow.commit()
        await self.notification_service.send_password_reset_email(user.email, token)

    async def reset_password(self, token: str, new_password: str) -> None:
        user = await self.users.get_by_reset_token(token)
        expires = user.reset_password_expires if user else None
        if expires is not None and expires.tzinfo is None:
            expires = expires.replace(tzinfo=timezone.utc)
        if user is None or expires is None or expires < datetime.now(timezone.utc):
            raise BusinessRuleViolationException(rule="INVALID_TOKEN", message="Invalid or expired reset token")

        user.password_hash = self.token_service.get_password_hash(new_password)
        user.reset_password_token = None
        user.reset_password_expires = None
        await self.users.save(user)
        await self.uow.commit()
        logger.info(f"Password reset for {user.email}")

    async def change_password(self, user: UserDB, current_password: str, new_password: str) -> None:
        if not self.token_service.verify_password(current_password, user.password_hash):
            raise ValidationException("Current password is incorrect", field="current_password")
        user.password_hash = self.token_service.get_password_hash(new_password)
        await self.users.save(user)
        await self.uow.commit()

    async def update_profile(self, user: UserDB, changes: UserUpdate) -> UserDB:
        data = changes.model_dump(exclude_unset=True)
        for field_name, value in data.items():
            setattr(user, field_name, value)
        await self.users.save(user)
        await self.uow.commit()
        return user

    async def list_users(self, role: Optional[str] = None, page: int = 1, limit: int = 20) -> Page:
        users, total = await self.users.list_users(role, page_offset(page, limit), limit)
        return Page(items=[to_profile(u) for u in users], total=total, page=page, limit=limit)

    async def toggle_status(self, user_id: UUID, admin_id: UUID) -> UserDB:
        """
        Activate or deactivate an account

        Raises:
            EntityNotFoundException: Unknown user
            BusinessRuleViolationException: An admin tried to deactivate themselves
        """
        user = await self.users.get_by_id(user_id)
        if user is None:
            raise EntityNotFoundException("User", user_id)
        if user.id == admin_id:
            raise BusinessRuleViolationException(
                rule="SELF_DEACTIVATION", message="You cannot deactivate your own account"
            )
        user.is_active = not user.is_active
        await self.users.save(user)
        await self.uow.commit()
        logger.info(f"User {user.email} is_active={user.is_active} (by admin {admin_id})")
        return user
