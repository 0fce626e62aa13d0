"""JWT utilities for session access tokens."""

import logging
from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

import jwt
from jwt.exceptions import (
    ExpiredSignatureError,
    InvalidAlgorithmError,
    InvalidIssuerError,
    InvalidSignatureError,
    InvalidSubjectError,
    InvalidTokenError,
    MissingRequiredClaimError,
    PyJWTError,
)

from src.config.settings import settings

from .exceptions import (
    InvalidTokenIssuerException,
    InvalidTokenSignatureException,
    MalformedTokenException,
    MalformedTokenSubjectException,
    TokenExpiredException,
    TokenSigningException,
    UnexpectedTokenAlgorithmException,
)

logger = logging.getLogger(__name__)

REQUIRED_CLAIMS = ["iss", "sub", "iat", "exp"]


def create_access_token(subject: UUID, secret: str, expires_in: timedelta) -> str:
    """Create a signed access token.

    A negative `expires_in` produces a token that is already expired.

    Args:
        subject: User ID the token is bound to
        secret: HMAC signing secret
        expires_in: Token lifetime

    Returns:
        Compact JWS string (header.payload.signature)

    Raises:
        TokenSigningException: If the secret is empty or signing fails

    """
    if not secret:
        raise TokenSigningException()

    now = datetime.now(UTC)
    payload = {
        "iss": settings.jwt_issuer,
        "sub": str(subject),
        "iat": now,
        "exp": now + expires_in,
        "jti": str(uuid4()),
    }

    try:
        return jwt.encode(payload, secret, algorithm=settings.jwt_algorithm)
    except (PyJWTError, TypeError, ValueError) as err:
        logger.error(f"Failed to sign access token: {type(err).__name__}")
        raise TokenSigningException() from err


def decode_access_token(token: str, secret: str) -> UUID:
    """Verify an access token and return its subject.

    Only the configured HMAC algorithm is accepted, so a token declaring
    `none` or an asymmetric algorithm is rejected before any key is used.

    Raises:
        UnexpectedTokenAlgorithmException: Header algorithm is not allowed
        InvalidTokenSignatureException: Signature does not match `secret`
        TokenExpiredException: `exp` is in the past
        InvalidTokenIssuerException: Token was not issued by this service
        MalformedTokenSubjectException: `sub` is not a UUID
        MalformedTokenException: Anything else structurally wrong

    """
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[settings.jwt_algorithm],
            issuer=settings.jwt_issuer,
            options={"require": REQUIRED_CLAIMS},
        )
    except InvalidAlgorithmError as err:
        raise UnexpectedTokenAlgorithmException() from err
    except InvalidSignatureError as err:
        raise InvalidTokenSignatureException() from err
    except ExpiredSignatureError as err:
        raise TokenExpiredException() from err
    except InvalidIssuerError as err:
        raise InvalidTokenIssuerException() from err
    except InvalidSubjectError as err:
        raise MalformedTokenSubjectException() from err
    except MissingRequiredClaimError as err:
        if err.claim == "sub":
            raise MalformedTokenSubjectException() from err
        raise MalformedTokenException() from err
    except InvalidTokenError as err:
        raise MalformedTokenException() from err

    try:
        return UUID(payload["sub"])
    except (TypeError, ValueError) as err:
        raise MalformedTokenSubjectException() from err
