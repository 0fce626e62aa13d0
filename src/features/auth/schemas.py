"""Authentication schemas (DTOs)."""

from pydantic import BaseModel, EmailStr, Field

from src.features.user.schemas import UserResponse


# Request schemas
class LoginRequest(BaseModel):
    """Login with email and password."""

    email: EmailStr
    password: str = Field(..., min_length=1)


# Response schemas
class LoginResponse(UserResponse):
    """User projection plus a fresh access/refresh token pair."""

    token: str
    refresh_token: str


class RefreshResponse(BaseModel):
    """New access token minted from a refresh token."""

    token: str
