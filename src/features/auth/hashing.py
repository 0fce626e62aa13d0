"""Password hashing with pwdlib."""

import logging

from pwdlib import PasswordHash
from pwdlib.exceptions import UnknownHashError
from pwdlib.hashers.argon2 import Argon2Hasher
from pwdlib.hashers.bcrypt import BcryptHasher

from .exceptions import InvalidCredentialsException, PasswordHashingException

logger = logging.getLogger(__name__)

# New hashes use Argon2 with pwdlib's default cost; bcrypt is accepted for verification only.
password_hash = PasswordHash((Argon2Hasher(), BcryptHasher()))


def hash_password(password: str) -> str:
    """Hash a password.

    Salt is generated and embedded in the returned hash.

    Raises:
        PasswordHashingException: If the underlying primitive fails

    """
    try:
        return password_hash.hash(password)
    except Exception as err:
        logger.error(f"Password hashing failed: {type(err).__name__}")
        raise PasswordHashingException() from err


def verify_password(hashed_password: str, password: str) -> None:
    """Check a password against a stored hash.

    Raises:
        InvalidCredentialsException: If the password does not match

    """
    try:
        matches = password_hash.verify(password, hashed_password)
    except UnknownHashError as err:
        logger.warning("Stored password hash has an unknown format")
        raise InvalidCredentialsException() from err
    except ValueError as err:
        # bcrypt refuses passwords over 72 bytes
        raise InvalidCredentialsException() from err

    if not matches:
        raise InvalidCredentialsException()
