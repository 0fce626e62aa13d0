"""Refresh token persistence."""

import logging
import secrets
from datetime import UTC, datetime, timedelta
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from .exceptions import RefreshTokenNotFoundException, RefreshTokenStoreException
from .models import RefreshToken

logger = logging.getLogger(__name__)

TOKEN_BYTES = 32
DEFAULT_LIFETIME = timedelta(days=60)


class RefreshTokenStore:
    """Create, look up and revoke refresh tokens in the database.

    Every method awaits the database. A failed statement rolls back the
    session's unit of work before RefreshTokenStoreException is raised.
    """

    def __init__(self, session: AsyncSession, lifetime: timedelta = DEFAULT_LIFETIME):
        self.session = session
        self.lifetime = lifetime

    async def _fail(self, action: str, err: SQLAlchemyError) -> RefreshTokenStoreException:
        logger.error(f"Refresh token store failed to {action}: {err}")
        await self.session.rollback()
        return RefreshTokenStoreException()

    async def create(self, user_id: UUID) -> RefreshToken:
        """Persist a new refresh token for a user.

        A duplicate token value surfaces as a store error; it is not retried.
        """
        now = datetime.now(UTC)
        record = RefreshToken(
            token=secrets.token_hex(TOKEN_BYTES),
            user_id=user_id,
            created_at=now,
            updated_at=now,
            expires_at=now + self.lifetime,
            revoked_at=None,
        )
        self.session.add(record)

        try:
            await self.session.flush()
        except SQLAlchemyError as err:
            raise await self._fail("create token", err) from err

        return record

    async def find(self, value: str) -> RefreshToken:
        """Look up a refresh token by its value.

        Raises:
            RefreshTokenNotFoundException: If no record matches
            RefreshTokenStoreException: If the database is unavailable

        """
        stmt = select(RefreshToken).where(RefreshToken.token == value)
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as err:
            raise await self._fail("find token", err) from err

        record = result.scalar_one_or_none()
        if record is None:
            raise RefreshTokenNotFoundException()
        return record

    async def revoke(self, value: str) -> bool:
        """Soft revoke a refresh token.

        Idempotent: unknown or already revoked tokens are left alone.

        Returns:
            True if this call revoked the token, False otherwise

        """
        try:
            record = await self.find(value)
        except RefreshTokenNotFoundException:
            return False

        if record.is_revoked:
            return False

        now = datetime.now(UTC)
        record.revoked_at = now
        record.updated_at = now
        try:
            await self.session.flush()
        except SQLAlchemyError as err:
            raise await self._fail("revoke token", err) from err

        return True
