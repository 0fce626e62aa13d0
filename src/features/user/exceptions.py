"""User-related exceptions."""

from fastapi import HTTPException, status


class UserException(HTTPException):
    """Base user exception."""

    def __init__(self, detail: str = "User operation failed", status_code: int = status.HTTP_400_BAD_REQUEST):
        super().__init__(status_code=status_code, detail=detail)


class UserNotFound(UserException):
    """Raised when user is not found."""

    def __init__(self):
        super().__init__(detail="User not found", status_code=status.HTTP_404_NOT_FOUND)


class EmailAlreadyExists(UserException):
    """Raised when trying to register or switch to an email that is taken."""

    def __init__(self):
        super().__init__(
            detail="User with this email already exists", status_code=status.HTTP_422_UNPROCESSABLE_CONTENT
        )


class CannotModifyOtherUser(UserException):
    """Raised when user tries to modify another user."""

    def __init__(self):
        super().__init__(
            detail="You do not have permission to modify other users", status_code=status.HTTP_403_FORBIDDEN
        )
