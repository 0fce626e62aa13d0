"""User service layer."""

import logging
from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.features.auth.hashing import hash_password

from .exceptions import EmailAlreadyExists
from .models import User
from .schemas import UserRegisterRequest, UserUpdateRequest

logger = logging.getLogger(__name__)


class UserService:
    """Service for user operations."""

    @staticmethod
    async def register_user(session: AsyncSession, data: UserRegisterRequest) -> User:
        """Register a new user.

        Args:
            session: Database session
            data: User registration data

        Returns:
            Created User object

        Raises:
            EmailAlreadyExists: If email already exists
            PasswordHashingException: If the password cannot be hashed

        """
        if await UserService.get_user_by_email(session, data.email):
            raise EmailAlreadyExists()

        user = User(
            email=data.email,
            nickname=data.nickname,
            hashed_password=hash_password(data.password),
        )

        session.add(user)
        await session.flush()
        logger.info(f"New user registered: {user.nickname} ({user.email})")

        return user

    @staticmethod
    async def get_user(session: AsyncSession, user_id: UUID) -> User | None:
        """Get user by ID."""
        stmt = select(User).where(User.id == user_id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def get_user_by_email(session: AsyncSession, email: str) -> User | None:
        """Get user by email."""
        stmt = select(User).where(User.email == email)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def update_user(session: AsyncSession, user: User, data: UserUpdateRequest) -> User:
        """Update email, nickname and/or password.

        Fields left as None keep their current value.

        Raises:
            EmailAlreadyExists: If email is being changed to an existing email

        """
        if data.email is not None and data.email != user.email:
            if await UserService.get_user_by_email(session, data.email):
                raise EmailAlreadyExists()
            user.email = data.email

        if data.nickname is not None:
            user.nickname = data.nickname

        if data.password is not None:
            user.hashed_password = hash_password(data.password)

        user.updated_at = datetime.now(UTC)
        await session.flush()
        logger.info(f"User updated: {user.id}")
        return user
