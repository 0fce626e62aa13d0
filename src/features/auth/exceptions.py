"""Authentication exceptions.

Every 401 carries the same generic detail. The concrete cause is kept on
`reason` for logging; clients never see it.
"""

from fastapi import HTTPException, status


class AuthenticationException(HTTPException):
    """Base authentication exception."""

    def __init__(self, detail: str = "Authentication failed", reason: str = "authentication_failed"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )
        self.reason = reason


class InvalidCredentialsException(AuthenticationException):
    """Raised when the email is unknown or the password does not match."""

    def __init__(self):
        super().__init__(detail="Incorrect email or password", reason="credentials_mismatch")


class UnauthorizedException(AuthenticationException):
    """Raised when a refresh token is unknown, expired or revoked.

    The three cases are deliberately indistinguishable to the caller.
    """

    def __init__(self, reason: str = "refresh_token_unusable"):
        super().__init__(detail="Unauthorized", reason=reason)


# Token errors


class InvalidTokenException(AuthenticationException):
    """Raised when an access token fails verification."""

    def __init__(self, reason: str = "invalid_token"):
        super().__init__(detail="Invalid or expired token", reason=reason)


class InvalidTokenSignatureException(InvalidTokenException):
    def __init__(self):
        super().__init__(reason="invalid_signature")


class TokenExpiredException(InvalidTokenException):
    def __init__(self):
        super().__init__(reason="expired")


class UnexpectedTokenAlgorithmException(InvalidTokenException):
    """Raised when the token header declares an algorithm other than the configured HMAC."""

    def __init__(self):
        super().__init__(reason="unexpected_algorithm")


class MalformedTokenSubjectException(InvalidTokenException):
    def __init__(self):
        super().__init__(reason="malformed_subject")


class InvalidTokenIssuerException(InvalidTokenException):
    def __init__(self):
        super().__init__(reason="invalid_issuer")


class MalformedTokenException(InvalidTokenException):
    def __init__(self):
        super().__init__(reason="malformed_token")


class RefreshTokenNotFoundException(InvalidTokenException):
    """Raised by the store when no refresh token matches the value."""

    def __init__(self):
        super().__init__(reason="refresh_token_not_found")


# Authorization header errors


class AuthorizationHeaderException(AuthenticationException):
    """Raised when the Authorization header cannot be used."""

    def __init__(self, reason: str = "invalid_authorization_header"):
        super().__init__(detail="Not authenticated", reason=reason)


class MissingAuthorizationHeaderException(AuthorizationHeaderException):
    def __init__(self):
        super().__init__(reason="missing_authorization_header")


class MalformedAuthorizationHeaderException(AuthorizationHeaderException):
    def __init__(self, scheme: str):
        super().__init__(reason=f"malformed_authorization_header:{scheme.strip().lower()}")


# Internal failures (5xx)


class AuthInternalException(HTTPException):
    """Base for auth failures that are not the client's fault."""

    def __init__(self, detail: str = "Internal Server Error", reason: str = "internal_error"):
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)
        self.reason = reason


class PasswordHashingException(AuthInternalException):
    """Raised when the hashing primitive fails."""

    def __init__(self):
        super().__init__(reason="hashing_failed")


class TokenSigningException(AuthInternalException):
    """Raised when an access token cannot be signed."""

    def __init__(self):
        super().__init__(reason="signing_failed")


class RefreshTokenStoreException(AuthInternalException):
    """Raised when refresh token persistence is unavailable."""

    def __init__(self):
        super().__init__(reason="store_unavailable")


class TokenIssuanceFailedException(AuthInternalException):
    """Raised when login or refresh could not mint tokens. Safe to retry."""

    def __init__(self):
        super().__init__(detail="token_issuance_failed", reason="token_issuance_failed")
