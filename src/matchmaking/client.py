"""
Matchmaking Client

Public entry point for joining rooms. Every join intent runs the same two
phases:

    1. Placement: ask the lobby placement service for a lobby
    2. Reservation + connect: POST the matchmake request to the lobby's
       process, then connect a new Room to the reserved seat

Join intents the placement service cannot back (explicit create, join by
id, reconnect, room listing) are disabled unless enabled in ClientConfig,
and then fail with UnsupportedOperationError before any network I/O.

Usage:
    async with Client(ClientConfig.from_env()) as client:
        room = await client.join_or_create("battle", {"rank": 3})
"""

import logging
from typing import Any, Callable, Dict, List, Optional

import httpx

from .config import ClientConfig
from .errors import MatchMakeError, UnsupportedOperationError
from .matchmaker import RivetMatchmaker
from .request import request_seat_reservation
from .reservation import consume_seat_reservation
from .room import Room
from .schemas import LobbyPlacement, RoomAvailable, SeatReservation

logger = logging.getLogger(__name__)

JoinOptions = Dict[str, Any]


class Client:
    """
    Matchmaking client.

    Attributes:
        config: Client settings
        matchmaker: Lobby placement service client
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        matchmaker: Optional[RivetMatchmaker] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        room_factory: Optional[Callable[..., Room]] = None,
    ):
        """
        Initialize the client.

        Args:
            config: Settings; defaults to ClientConfig()
            matchmaker: Placement service client; built from config if omitted
            http_client: HTTP client for matchmake requests (and the default
                matchmaker); created and owned by the client if omitted
            room_factory: Callable(name, root_schema) building room handles
        """
        self.config = config or ClientConfig()
        self._owns_http = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=self.config.timeout)
        self.matchmaker = matchmaker or RivetMatchmaker(
            self._http, self.config.matchmaker_url, self.config.token
        )
        self._room_factory = room_factory or Room

        logger.info(f"Client initialized for matchmaker {self.config.matchmaker_url}")

    async def __aenter__(self) -> "Client":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client if this client created it."""
        if self._owns_http:
            await self._http.aclose()

    async def join_or_create(
        self, room_name: str, options: Optional[JoinOptions] = None, root_schema: Any = None
    ) -> Room:
        """
        Join a room by name, letting the matchmaker create one if needed.

        Raises:
            MatchMakeError: If placement or the matchmake request fails
            ServerError: If the room rejects the connection
        """
        placement = await self._find_lobby(self.config.game_modes_for(room_name))
        return await self._create_matchmake_request(
            "joinOrCreate", room_name, options, root_schema, placement
        )

    async def create(
        self, room_name: str, options: Optional[JoinOptions] = None, root_schema: Any = None
    ) -> Room:
        """
        Create a new room.

        Raises:
            UnsupportedOperationError: If creating lobbies is disabled;
                raised on first await, before any network I/O
            MatchMakeError: If placement or the matchmake request fails
            ServerError: If the room rejects the connection
        """
        if not self.config.allow_create:
            raise UnsupportedOperationError("Creating a lobby")

        placement = await self._find_lobby(self.config.game_modes_for(room_name))
        return await self._create_matchmake_request(
            "create", room_name, options, root_schema, placement
        )

    async def join(
        self, room_name: str, options: Optional[JoinOptions] = None, root_schema: Any = None
    ) -> Room:
        """
        Join an existing room by name; never creates one.

        Raises:
            MatchMakeError: If no lobby matches or the matchmake request fails
            ServerError: If the room rejects the connection
        """
        placement = await self._find_lobby(
            self.config.game_modes_for(room_name), prevent_auto_create_lobby=True
        )
        return await self._create_matchmake_request(
            "join", room_name, options, root_schema, placement
        )

    async def join_by_id(
        self, room_id: str, options: Optional[JoinOptions] = None, root_schema: Any = None
    ) -> Room:
        """
        Join a specific room by its identifier.

        Raises:
            UnsupportedOperationError: If joining by id is disabled;
                raised on first await, before any network I/O
            MatchMakeError: If placement or the matchmake request fails
            ServerError: If the room rejects the connection
        """
        if not self.config.allow_join_by_id:
            raise UnsupportedOperationError("Joining lobbies by id")

        placement = await self._find_lobby(self.config.game_modes_for(None))
        return await self._create_matchmake_request(
            "joinById", room_id, options, root_schema, placement
        )

    async def reconnect(
        self,
        room_id: str,
        session_id: str,
        options: Optional[JoinOptions] = None,
        root_schema: Any = None,
    ) -> Room:
        """
        Rejoin a room with the session id of a previous seat.

        Raises:
            UnsupportedOperationError: If reconnecting is disabled;
                raised on first await, before any network I/O
            MatchMakeError: If placement or the matchmake request fails
            ServerError: If the room rejects the connection
        """
        if not self.config.allow_reconnect:
            raise UnsupportedOperationError("Reconnecting to lobbies", hint="")

        placement = await self._find_lobby(self.config.game_modes_for(None))
        reconnect_options = dict(options or {})
        reconnect_options["sessionId"] = session_id
        return await self._create_matchmake_request(
            "joinById", room_id, reconnect_options, root_schema, placement
        )

    async def get_available_rooms(self, room_name: str = "") -> List[RoomAvailable]:
        """
        List rooms with their occupancy.

        Args:
            room_name: Only rooms of this game mode; all rooms if empty

        Raises:
            UnsupportedOperationError: If room listing is disabled;
                raised on first await, before any network I/O
            MatchMakeError: If the listing call fails
        """
        if not self.config.allow_room_listing:
            raise UnsupportedOperationError("Listing rooms", hint="")

        try:
            listing = await self.matchmaker.list_lobbies()
        except Exception as e:
            raise MatchMakeError(str(e), getattr(e, "status_code", None)) from e

        rooms = []
        for lobby in listing.lobbies:
            mode = listing.game_modes.get(lobby.game_mode_id, lobby.game_mode_id)
            if room_name and mode != room_name:
                continue
            # Lobby ids stand in for room ids until the service exposes rooms
            rooms.append(
                RoomAvailable(
                    room_id=lobby.lobby_id,
                    clients=lobby.total_player_count,
                    max_clients=lobby.max_players_normal,
                    name=mode,
                    metadata={"rivet_lobby": lobby.raw},
                )
            )
        logger.info(f"Found {len(rooms)} available rooms")
        return rooms

    async def consume_seat_reservation(
        self,
        placement: LobbyPlacement,
        reservation: SeatReservation,
        root_schema: Any = None,
    ) -> Room:
        """
        Connect a new room handle to a seat reserved on a placement.

        Raises:
            ServerError: If the room rejects the connection
        """
        room = self._create_room(reservation.room.name, root_schema)
        return await consume_seat_reservation(
            room, placement.default_port, reservation, placement.player
        )

    async def _find_lobby(
        self, game_modes: List[str], prevent_auto_create_lobby: bool = False
    ) -> LobbyPlacement:
        try:
            return await self.matchmaker.find_lobby(
                game_modes, prevent_auto_create_lobby=prevent_auto_create_lobby
            )
        except Exception as e:
            logger.error(f"Lobby placement failed: {e}")
            raise MatchMakeError(str(e), getattr(e, "status_code", None)) from e

    async def _create_matchmake_request(
        self,
        method: str,
        room_name: str,
        options: Optional[JoinOptions],
        root_schema: Any,
        placement: LobbyPlacement,
    ) -> Room:
        try:
            port = placement.default_port
        except ValueError as e:
            raise MatchMakeError(str(e)) from e

        reservation = await request_seat_reservation(
            self._http, method, room_name, options, port
        )
        return await self.consume_seat_reservation(placement, reservation, root_schema)

    def _create_room(self, room_name: str, root_schema: Any = None) -> Room:
        return self._room_factory(room_name, root_schema)
