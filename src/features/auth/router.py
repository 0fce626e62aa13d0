"""Authentication router (login, refresh, revoke)."""

import logging

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.config.settings import settings
from src.database.dependencies import get_db_session
from src.features.user.service import UserService
from src.shared.rate_limit import limiter

from .dependencies import get_session_manager
from .exceptions import InvalidCredentialsException
from .hashing import verify_password
from .schemas import LoginRequest, LoginResponse, RefreshResponse
from .service import SessionManager

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Authentication"])


@router.post("/login", response_model=LoginResponse)
@limiter.limit(settings.login_rate_limit)
async def login(
    request: Request,
    data: LoginRequest,
    session: AsyncSession = Depends(get_db_session),
    manager: SessionManager = Depends(get_session_manager),
):
    """Login with email and password.

    Returns the user together with an access token (`token`, valid one hour)
    and a `refresh_token` (valid sixty days).
    """
    user = await UserService.get_user_by_email(session, data.email)
    if user is None:
        raise InvalidCredentialsException()

    verify_password(user.hashed_password, data.password)

    response = await manager.login(user)
    await session.commit()

    logger.info(f"User logged in: {user.email}")
    return response


@router.post("/refresh", response_model=RefreshResponse)
async def refresh(request: Request, manager: SessionManager = Depends(get_session_manager)):
    """Mint a new access token.

    Send the refresh token as `Authorization: Bearer <refresh_token>`.
    """
    token = await manager.refresh(request.headers)
    return RefreshResponse(token=token)


@router.post("/revoke", status_code=status.HTTP_204_NO_CONTENT)
async def revoke(
    request: Request,
    session: AsyncSession = Depends(get_db_session),
    manager: SessionManager = Depends(get_session_manager),
):
    """Revoke a refresh token (logout).

    Always answers 204, whether or not the token existed.
    """
    await manager.revoke(request.headers)
    await session.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
