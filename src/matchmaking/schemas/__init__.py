"""
Schemas Package

Message structures for the lobby placement service and the matchmake
handshake, organized by category: lobby, seat and room listing.

The package provides base classes (BaseRequest, BaseResponse) that share
serialization and deserialization methods.
"""

from .base import BaseRequest, BaseResponse
from .lobby import (
    DEFAULT_PORT_NAME,
    FindLobbyRequest,
    JoinPlayer,
    JoinPort,
    ListLobbiesResponse,
    LobbyPlacement,
    LobbySummary,
)
from .room import RoomAvailable
from .seat import RoomReference, SeatReservation

__all__ = [
    # Base classes
    "BaseRequest",
    "BaseResponse",
    # Lobby schemas
    "DEFAULT_PORT_NAME",
    "FindLobbyRequest",
    "JoinPlayer",
    "JoinPort",
    "ListLobbiesResponse",
    "LobbyPlacement",
    "LobbySummary",
    # Seat schemas
    "RoomReference",
    "SeatReservation",
    # Room listing
    "RoomAvailable",
]
