"""
Seat Schema Definitions

Response of the matchmake handshake: either a confirmed seat in a room
process or a structured error.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .base import BaseResponse


@dataclass
class RoomReference:
    """
    Room a seat was reserved in.

    Attributes:
        name: Room name (handler name) on the process
        room_id: Room identifier
        process_id: Identifier of the process owning the room
    """

    name: str
    room_id: str
    process_id: str


@dataclass
class SeatReservation(BaseResponse):
    """
    Outcome of a matchmake request.

    Exactly one of (room and session_id) or error is present.

    Attributes:
        room: Reserved room on success
        session_id: Session identifier of this client's seat
        error: Error message on failure
        code: Error code on failure
    """

    room: Optional[RoomReference] = None
    session_id: Optional[str] = None
    error: Optional[str] = None
    code: Optional[int] = None

    def __post_init__(self):
        if self.error is not None:
            if self.room is not None or self.session_id is not None:
                raise ValueError("Seat reservation has both a seat and an error")
        elif self.room is None or self.session_id is None:
            raise ValueError("Seat reservation has neither a seat nor an error")

    @property
    def is_error(self) -> bool:
        return self.error is not None

    @classmethod
    def _from_data(cls, data: Dict[str, Any]) -> "SeatReservation":
        if data.get("error"):
            error = data["error"]
            # Some servers nest the error as {"message": ..., "code": ...}
            if isinstance(error, dict):
                return cls(error=str(error.get("message", "")), code=error.get("code"))
            return cls(error=str(error), code=data.get("code"))

        room = data["room"]
        return cls(
            room=RoomReference(
                name=room["name"],
                room_id=room["roomId"],
                process_id=room["processId"],
            ),
            session_id=data["sessionId"],
        )
