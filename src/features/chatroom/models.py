"""Chatroom and message models."""

from datetime import UTC, datetime
from enum import StrEnum
from uuid import UUID, uuid4

from sqlalchemy import DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from src.database.base import Base, TimestampMixin


class ChatroomType(StrEnum):
    DIRECT = "direct"


class MessageType(StrEnum):
    TEXT = "text"


class Chatroom(Base, TimestampMixin):
    """A conversation. Direct rooms are named "<nickname>:<nickname>"."""

    __tablename__ = "chatrooms"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    type: Mapped[str] = mapped_column(String(50), nullable=False, default=ChatroomType.DIRECT.value)


class ChatroomParticipant(Base):
    """Membership row linking a user to a chatroom."""

    __tablename__ = "chatroom_participants"

    chatroom_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("chatrooms.id", ondelete="CASCADE"), primary_key=True
    )
    participant_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )


class Message(Base, TimestampMixin):
    """A message posted to a chatroom."""

    __tablename__ = "messages"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    type: Mapped[str] = mapped_column(String(50), nullable=False, default=MessageType.TEXT.value)
    author_id: Mapped[UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True
    )
    chatroom_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("chatrooms.id", ondelete="CASCADE"), nullable=False, index=True
    )
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
