"""Authorization header parsing."""

from collections.abc import Mapping

from .exceptions import MalformedAuthorizationHeaderException, MissingAuthorizationHeaderException

BEARER_PREFIX = "Bearer "
API_KEY_PREFIX = "ApiKey "


def _extract_credential(headers: Mapping[str, str], prefix: str) -> str:
    value = headers.get("Authorization")
    if value is None:
        raise MissingAuthorizationHeaderException()

    # Exact, case-sensitive prefix; whatever follows is returned untouched.
    if not value.startswith(prefix):
        raise MalformedAuthorizationHeaderException(prefix)

    return value[len(prefix) :]


def extract_bearer_token(headers: Mapping[str, str]) -> str:
    """Return the token from an `Authorization: Bearer <token>` header."""
    return _extract_credential(headers, BEARER_PREFIX)


def extract_api_key(headers: Mapping[str, str]) -> str:
    """Return the key from an `Authorization: ApiKey <key>` header."""
    return _extract_credential(headers, API_KEY_PREFIX)
