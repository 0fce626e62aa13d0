"""User management router (API endpoints)."""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.database.dependencies import get_db_session
from src.features.auth.dependencies import get_current_user

from .exceptions import CannotModifyOtherUser, UserNotFound
from .models import User
from .schemas import UserRegisterRequest, UserResponse, UserUpdateRequest
from .service import UserService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/users", tags=["User Management"])


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register_user(data: UserRegisterRequest, session: AsyncSession = Depends(get_db_session)):
    """Register a new account (email, nickname and password are mandatory)."""
    user = await UserService.register_user(session, data)
    await session.commit()
    return UserResponse.model_validate(user)


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(current_user: User = Depends(get_current_user)):
    """Get current user information."""
    return UserResponse.model_validate(current_user)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: UUID,
    data: UserUpdateRequest,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    """Update your own account. Omitted fields are left unchanged."""
    if current_user.id != user_id:
        logger.warning(f"User {current_user.id} tried to modify user {user_id}")
        raise CannotModifyOtherUser()

    user = await UserService.get_user(session, user_id)
    if user is None:
        raise UserNotFound()

    user = await UserService.update_user(session, user, data)
    await session.commit()
    return UserResponse.model_validate(user)
