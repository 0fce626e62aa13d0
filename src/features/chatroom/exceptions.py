"""Chatroom-related exceptions."""

from fastapi import HTTPException, status


class ChatroomException(HTTPException):
    """Base chatroom exception."""

    def __init__(self, detail: str = "Chatroom operation failed", status_code: int = status.HTTP_400_BAD_REQUEST):
        super().__init__(status_code=status_code, detail=detail)


class ChatroomNotFound(ChatroomException):
    def __init__(self):
        super().__init__(detail="Chatroom not found.", status_code=status.HTTP_404_NOT_FOUND)


class FriendNotFound(ChatroomException):
    def __init__(self):
        super().__init__(detail="Friend not found.", status_code=status.HTTP_404_NOT_FOUND)


class InvalidFriendId(ChatroomException):
    def __init__(self):
        super().__init__(detail="Invalid Friend ID.")
