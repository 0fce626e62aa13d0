"""Chatroom and message schemas (DTOs)."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from src.shared.pagination.pagination import PaginatedResponse


# Request schemas
class ChatroomCreateRequest(BaseModel):
    """Open a direct chatroom with another user.

    `friend_id` is a plain string so that a malformed id yields 400, not 422.
    """

    friend_id: str


class MessageCreateRequest(BaseModel):
    content: str = Field(..., min_length=1)


# Response schemas
class ChatroomResponse(BaseModel):
    id: UUID
    name: str | None
    type: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class MessageResponse(BaseModel):
    id: UUID
    type: str
    author_id: UUID | None
    chatroom_id: UUID
    content: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


MessageListResponse = PaginatedResponse[MessageResponse]
