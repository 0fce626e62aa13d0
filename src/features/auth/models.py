"""Authentication models (refresh token persistence)."""

from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import DateTime, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from src.database.base import Base, TimestampMixin, as_utc


class RefreshToken(Base, TimestampMixin):
    """Opaque long-lived credential used only to mint new access tokens.

    Records are never deleted; logout sets `revoked_at` instead.
    """

    __tablename__ = "refresh_tokens"

    # 32 random bytes, hex encoded
    token: Mapped[str] = mapped_column(String(64), primary_key=True)

    user_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    revoked_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    @property
    def is_revoked(self) -> bool:
        return self.revoked_at is not None

    def is_expired(self, now: datetime | None = None) -> bool:
        """Check if the token lifetime has elapsed."""
        now = now or datetime.now(UTC)
        return as_utc(self.expires_at) <= now

    def is_usable(self, now: datetime | None = None) -> bool:
        """A token can mint access tokens only while unrevoked and unexpired."""
        return not self.is_revoked and not self.is_expired(now)
