"""User domain models."""

from uuid import UUID, uuid4

from sqlalchemy import String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from src.database.base import Base, TimestampMixin


class User(Base, TimestampMixin):
    """Registered account.

    The auth subsystem only reads `id` (token subject) and `hashed_password`.
    """

    __tablename__ = "users"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)

    # Identity
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    nickname: Mapped[str] = mapped_column(String(100), nullable=False)

    # Authentication
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
