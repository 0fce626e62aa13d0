"""Chatroom and message router (API endpoints)."""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.database.dependencies import get_db_session
from src.features.auth.dependencies import get_current_user
from src.features.user.models import User
from src.features.user.service import UserService
from src.shared.pagination.pagination import PaginationParams

from .exceptions import ChatroomNotFound, FriendNotFound, InvalidFriendId
from .schemas import (
    ChatroomCreateRequest,
    ChatroomResponse,
    MessageCreateRequest,
    MessageListResponse,
    MessageResponse,
)
from .service import ChatroomService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/chatrooms", tags=["Chatrooms"])


@router.post("", response_model=ChatroomResponse, status_code=status.HTTP_201_CREATED)
async def create_chatroom(
    data: ChatroomCreateRequest,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Open a direct chatroom between the current user and `friend_id`."""
    try:
        friend_id = UUID(data.friend_id)
    except ValueError as err:
        raise InvalidFriendId() from err

    if friend_id == current_user.id:
        raise InvalidFriendId()

    friend = await UserService.get_user(session, friend_id)
    if friend is None:
        raise FriendNotFound()

    room = await ChatroomService.create_direct_chatroom(session, current_user, friend)
    await session.commit()
    return ChatroomResponse.model_validate(room)


@router.get("", response_model=list[ChatroomResponse])
async def list_chatrooms(
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """List the current user's chatrooms."""
    rooms = await ChatroomService.get_user_chatrooms(session, current_user.id)
    return [ChatroomResponse.model_validate(room) for room in rooms]


@router.delete("/{chatroom_id}", status_code=status.HTTP_204_NO_CONTENT)
async def leave_chatroom(
    chatroom_id: UUID,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Leave a chatroom."""
    await ChatroomService.leave_chatroom(session, chatroom_id, current_user.id)
    await session.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{chatroom_id}/messages", response_model=MessageListResponse)
async def read_messages(
    chatroom_id: UUID,
    pagination: PaginationParams = Depends(),
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Read a chatroom's messages, oldest first."""
    room = await ChatroomService.get_chatroom(session, chatroom_id)
    if room is None:
        raise ChatroomNotFound()

    messages, total = await ChatroomService.get_messages(session, room.id, pagination)
    return MessageListResponse(
        items=[MessageResponse.model_validate(m) for m in messages],
        total=total,
        page=pagination.page,
        page_size=pagination.page_size,
    )


@router.post("/{chatroom_id}/messages", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def post_message(
    chatroom_id: UUID,
    data: MessageCreateRequest,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Post a text message to a chatroom."""
    room = await ChatroomService.get_chatroom(session, chatroom_id)
    if room is None:
        raise ChatroomNotFound()

    message = await ChatroomService.create_message(session, room, current_user, data.content)
    await session.commit()
    return MessageResponse.model_validate(message)
