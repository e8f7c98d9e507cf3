"""
Matchmaking Package

Client-side matchmaking for hosted multiplayer rooms: obtains a lobby from
the placement service, reserves a seat on the lobby's process and connects
a Room handle to it.

Modules:
    - client: Client, the public join operations
    - request: the matchmake HTTP handshake
    - reservation: seat reservation to joined Room
    - endpoint: room websocket URI builder
    - room / connection: room handle and its websocket transport
    - matchmaker: lobby placement service client
"""

from .client import Client, JoinOptions
from .config import ClientConfig
from .connection import Connection
from .endpoint import build_endpoint, websocket_origin
from .errors import (
    MatchMakeError,
    MatchmakerError,
    ServerError,
    UnsupportedOperationError,
)
from .matchmaker import RivetMatchmaker
from .protocol import ErrorCode, Protocol
from .request import request_seat_reservation
from .reservation import consume_seat_reservation
from .room import ConnectionState, Room
from .schemas import (
    JoinPlayer,
    JoinPort,
    LobbyPlacement,
    RoomAvailable,
    RoomReference,
    SeatReservation,
)
from .signals import EventSignal, ResultChannel

__all__ = [
    # Client
    "Client",
    "ClientConfig",
    "JoinOptions",
    # Errors
    "MatchMakeError",
    "MatchmakerError",
    "ServerError",
    "UnsupportedOperationError",
    # Protocol
    "ErrorCode",
    "Protocol",
    # Handshake components
    "build_endpoint",
    "websocket_origin",
    "request_seat_reservation",
    "consume_seat_reservation",
    "RivetMatchmaker",
    # Room handle
    "Room",
    "ConnectionState",
    "Connection",
    "EventSignal",
    "ResultChannel",
    # Schemas
    "JoinPlayer",
    "JoinPort",
    "LobbyPlacement",
    "RoomAvailable",
    "RoomReference",
    "SeatReservation",
]
