"""Authentication dependencies for FastAPI.

The authenticated user is resolved per request and passed to handlers as a
parameter; nothing request-specific is stored on shared objects.
"""

import logging
from datetime import timedelta

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.config.settings import settings
from src.database.dependencies import get_db_session
from src.features.user.models import User
from src.features.user.service import UserService

from .exceptions import InvalidTokenException
from .headers import extract_api_key, extract_bearer_token
from .jwt_utils import decode_access_token
from .service import SessionManager
from .store import RefreshTokenStore

logger = logging.getLogger(__name__)


async def get_session_manager(session: AsyncSession = Depends(get_db_session)) -> SessionManager:
    """Build a session manager bound to the request's database session."""
    store = RefreshTokenStore(session, lifetime=timedelta(days=settings.refresh_token_expire_days))
    return SessionManager(
        store,
        secret=settings.secret_key,
        access_token_ttl=timedelta(minutes=settings.access_token_expire_minutes),
    )


async def get_current_user(request: Request, session: AsyncSession = Depends(get_db_session)) -> User:
    """Get the current authenticated user from the bearer access token.

    Raises:
        AuthorizationHeaderException: If the Authorization header is missing or malformed
        InvalidTokenException: If the token is invalid or the user no longer exists

    """
    token = extract_bearer_token(request.headers)

    try:
        user_id = decode_access_token(token, settings.secret_key)
    except InvalidTokenException as err:
        logger.info(f"Access token rejected: {err.reason}")
        raise

    user = await UserService.get_user(session, user_id)
    if user is None:
        raise InvalidTokenException(reason="user_not_found")

    return user


def get_api_key(request: Request) -> str:
    """Get the key from an `Authorization: ApiKey <key>` header."""
    return extract_api_key(request.headers)
