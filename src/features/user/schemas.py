"""User schemas (DTOs)."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field


# Request schemas
class UserRegisterRequest(BaseModel):
    """User registration request. All fields are mandatory."""

    email: EmailStr
    nickname: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1)


class UserUpdateRequest(BaseModel):
    """User update request. Omitted fields keep their current value."""

    email: EmailStr | None = None
    nickname: str | None = Field(None, min_length=1, max_length=100)
    password: str | None = Field(None, min_length=1)


# Response schemas
class UserResponse(BaseModel):
    """Public user projection (never includes the password hash)."""

    id: UUID
    email: EmailStr
    nickname: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
