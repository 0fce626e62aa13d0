"""Chatroom and message service layer."""

import logging
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.features.user.models import User
from src.shared.pagination.pagination import PaginationParams

from .models import Chatroom, ChatroomParticipant, ChatroomType, Message, MessageType

logger = logging.getLogger(__name__)


class ChatroomService:
    """Service for chatrooms and their messages."""

    @staticmethod
    async def create_direct_chatroom(session: AsyncSession, owner: User, friend: User) -> Chatroom:
        """Create a direct chatroom with both users as participants."""
        room = Chatroom(name=f"{owner.nickname}:{friend.nickname}", type=ChatroomType.DIRECT.value)
        session.add(room)
        await session.flush()

        session.add_all(
            [
                ChatroomParticipant(chatroom_id=room.id, participant_id=owner.id),
                ChatroomParticipant(chatroom_id=room.id, participant_id=friend.id),
            ]
        )
        await session.flush()

        logger.info(f"Direct chatroom {room.id} created by {owner.id}")
        return room

    @staticmethod
    async def get_chatroom(session: AsyncSession, chatroom_id: UUID) -> Chatroom | None:
        stmt = select(Chatroom).where(Chatroom.id == chatroom_id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def get_user_chatrooms(session: AsyncSession, user_id: UUID) -> list[Chatroom]:
        """List chatrooms the user participates in, newest first."""
        stmt = (
            select(Chatroom)
            .join(ChatroomParticipant, ChatroomParticipant.chatroom_id == Chatroom.id)
            .where(ChatroomParticipant.participant_id == user_id)
            .order_by(Chatroom.created_at.desc())
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def leave_chatroom(session: AsyncSession, chatroom_id: UUID, user_id: UUID) -> None:
        """Remove the user from a chatroom. Leaving a room you are not in is a no-op."""
        stmt = delete(ChatroomParticipant).where(
            ChatroomParticipant.chatroom_id == chatroom_id,
            ChatroomParticipant.participant_id == user_id,
        )
        await session.execute(stmt)
        logger.info(f"User {user_id} left chatroom {chatroom_id}")

    @staticmethod
    async def create_message(session: AsyncSession, chatroom: Chatroom, author: User, content: str) -> Message:
        message = Message(
            type=MessageType.TEXT.value,
            author_id=author.id,
            chatroom_id=chatroom.id,
            content=content,
        )
        session.add(message)
        await session.flush()
        return message

    @staticmethod
    async def get_messages(
        session: AsyncSession, chatroom_id: UUID, pagination: PaginationParams
    ) -> tuple[list[Message], int]:
        """Get a page of messages in posting order.

        Returns:
            Tuple of (messages, total_count)

        """
        count_stmt = select(func.count()).select_from(Message).where(Message.chatroom_id == chatroom_id)
        total = (await session.execute(count_stmt)).scalar_one()

        stmt = (
            select(Message)
            .where(Message.chatroom_id == chatroom_id)
            .order_by(Message.created_at, Message.id)
            .offset(pagination.skip)
            .limit(pagination.limit)
        )
        result = await session.execute(stmt)
        return list(result.scalars().all()), total
