"""
Matchmaking Errors

Exceptions surfaced to callers of the matchmaking client.

    - MatchMakeError: placement or matchmake handshake failure
    - UnsupportedOperationError: join intent disabled in this deployment
    - ServerError: the room transport reported an error before joining
    - MatchmakerError: raised by the placement service collaborator
"""

from typing import Optional

from .protocol import ErrorCode


class MatchMakeError(Exception):
    """
    Failure while obtaining a seat reservation.

    Attributes:
        message: Human readable description from the remote service
        code: Remote numeric status, or None when none was reported
    """

    def __init__(self, message: str, code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.code = code

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, code={self.code!r})"


class UnsupportedOperationError(MatchMakeError):
    """Join intent that the placement service cannot back."""

    def __init__(self, operation: str, hint: str = "Use join_or_create instead."):
        super().__init__(
            f"{operation} is not supported by this matchmaker. {hint}".strip(),
            ErrorCode.MATCHMAKE_UNHANDLED,
        )
        self.operation = operation


class ServerError(Exception):
    """
    Error signalled by a room process before the join completed.

    Attributes:
        code: Error or close code sent by the room process
        message: Error description
    """

    def __init__(self, code: Optional[int], message: str):
        super().__init__(message)
        self.code = code
        self.message = message

    def __repr__(self) -> str:
        return f"ServerError(code={self.code!r}, message={self.message!r})"


class MatchmakerError(Exception):
    """Non-successful response from the lobby placement service."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
