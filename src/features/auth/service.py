"""Session management: login, refresh and revoke flows."""

import logging
from collections.abc import Mapping
from datetime import timedelta

from src.features.user.models import User
from src.features.user.schemas import UserResponse

from .exceptions import (
    AuthorizationHeaderException,
    RefreshTokenNotFoundException,
    RefreshTokenStoreException,
    TokenIssuanceFailedException,
    TokenSigningException,
    UnauthorizedException,
)
from .headers import extract_bearer_token
from .jwt_utils import create_access_token
from .schemas import LoginResponse
from .store import RefreshTokenStore

logger = logging.getLogger(__name__)

DEFAULT_ACCESS_TOKEN_TTL = timedelta(hours=1)


class SessionManager:
    """Issue, refresh and revoke sessions for authenticated users.

    Owns the token policy (signing secret, access token lifetime). Refresh
    token persistence is delegated to the store.
    """

    def __init__(
        self,
        store: RefreshTokenStore,
        secret: str,
        access_token_ttl: timedelta = DEFAULT_ACCESS_TOKEN_TTL,
    ):
        self.store = store
        self.secret = secret
        self.access_token_ttl = access_token_ttl

    async def login(self, user: User) -> LoginResponse:
        """Issue an access/refresh token pair.

        The caller must have verified the password already.

        Raises:
            TokenIssuanceFailedException: If signing or persisting fails (retryable)

        """
        try:
            access_token = create_access_token(user.id, self.secret, self.access_token_ttl)
            refresh_token = await self.store.create(user.id)
        except (TokenSigningException, RefreshTokenStoreException) as err:
            logger.error(f"Token issuance failed for user {user.id}: {err.reason}")
            raise TokenIssuanceFailedException() from err

        logger.info(f"Session started for user {user.id}")
        return LoginResponse(
            **UserResponse.model_validate(user).model_dump(),
            token=access_token,
            refresh_token=refresh_token.token,
        )

    async def refresh(self, headers: Mapping[str, str]) -> str:
        """Mint a new access token from the refresh token in the bearer header.

        The refresh token is not rotated.

        Raises:
            AuthorizationHeaderException: If the header is missing or malformed
            UnauthorizedException: If the token is unknown, expired or revoked
            RefreshTokenStoreException: If the store is unavailable

        """
        value = extract_bearer_token(headers)

        try:
            record = await self.store.find(value)
        except RefreshTokenNotFoundException as err:
            raise UnauthorizedException(reason=err.reason) from err

        if not record.is_usable():
            reason = "refresh_token_revoked" if record.is_revoked else "refresh_token_expired"
            raise UnauthorizedException(reason=reason)

        try:
            return create_access_token(record.user_id, self.secret, self.access_token_ttl)
        except TokenSigningException as err:
            raise TokenIssuanceFailedException() from err

    async def revoke(self, headers: Mapping[str, str]) -> None:
        """Revoke the refresh token in the bearer header.

        Best effort: failures are logged, never raised.
        """
        try:
            value = extract_bearer_token(headers)
            revoked = await self.store.revoke(value)
        except (AuthorizationHeaderException, RefreshTokenStoreException) as err:
            logger.warning(f"Refresh token revocation skipped: {err.reason}")
            return

        if revoked:
            logger.info("Refresh token revoked")
