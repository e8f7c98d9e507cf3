"""
Lobby Schema Definitions

Message structures exchanged with the lobby placement service: finding a
lobby for a player and listing the lobbies that currently exist.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .base import BaseRequest, BaseResponse

DEFAULT_PORT_NAME = "default"


@dataclass
class JoinPort:
    """
    Routable network target of a lobby.

    Attributes:
        host: Host including the port, e.g. "lobby.example.com:1234"
        hostname: Host without the port
        port: Port number, if the service reported one
        is_tls: Whether the port expects TLS
    """

    host: str
    hostname: Optional[str] = None
    port: Optional[int] = None
    is_tls: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "JoinPort":
        hostname = data.get("hostname")
        port = data.get("port")
        host = data.get("host") or (f"{hostname}:{port}" if port else hostname)
        if not host:
            raise ValueError("Lobby port has no host")
        return cls(
            host=host,
            hostname=hostname,
            port=port,
            is_tls=bool(data.get("is_tls", False)),
        )


@dataclass
class JoinPlayer:
    """Credential identifying the player to the lobby's process."""

    token: str


@dataclass
class LobbyPlacement(BaseResponse):
    """
    Candidate process allocated for a player.

    Produced per matchmaking attempt and consumed immediately.

    Attributes:
        lobby_id: Process identifier assigned by the placement service
        ports: Named network targets of the lobby
        player: Player credential for the lobby
        region_id: Region the lobby runs in
    """

    lobby_id: str
    ports: Dict[str, JoinPort]
    player: JoinPlayer
    region_id: Optional[str] = None

    @property
    def default_port(self) -> JoinPort:
        """The port matchmake requests and room connections go through."""
        try:
            return self.ports[DEFAULT_PORT_NAME]
        except KeyError:
            raise ValueError(
                f"Lobby {self.lobby_id} has no '{DEFAULT_PORT_NAME}' port"
            ) from None

    @classmethod
    def _from_data(cls, data: Dict[str, Any]) -> "LobbyPlacement":
        lobby = data["lobby"]
        player = data.get("player") or lobby["player"]
        ports = data.get("ports") or lobby["ports"]
        return cls(
            lobby_id=lobby["lobby_id"],
            ports={name: JoinPort.from_dict(port) for name, port in ports.items()},
            player=JoinPlayer(token=player["token"]),
            region_id=lobby.get("region"),
        )


@dataclass
class FindLobbyRequest(BaseRequest):
    """
    Request a lobby for one of the given game modes.

    Attributes:
        game_modes: Game mode filter
        prevent_auto_create_lobby: Fail instead of creating a lobby when
            no existing one matches
    """

    game_modes: List[str]
    prevent_auto_create_lobby: Optional[bool] = None


@dataclass
class LobbySummary:
    """Occupancy of one lobby as reported by the listing call."""

    lobby_id: str
    game_mode_id: str
    region_id: Optional[str]
    total_player_count: int
    max_players_normal: int
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)


@dataclass
class ListLobbiesResponse(BaseResponse):
    """
    Every lobby the placement service knows about.

    Attributes:
        lobbies: Lobby occupancy entries
        game_modes: Mapping of game mode id to its name id
    """

    lobbies: List[LobbySummary]
    game_modes: Dict[str, str]

    @classmethod
    def _from_data(cls, data: Dict[str, Any]) -> "ListLobbiesResponse":
        lobbies = [
            LobbySummary(
                lobby_id=lobby["lobby_id"],
                game_mode_id=lobby["game_mode_id"],
                region_id=lobby.get("region_id"),
                total_player_count=lobby.get("total_player_count", 0),
                max_players_normal=lobby.get("max_players_normal", 0),
                raw=lobby,
            )
            for lobby in data.get("lobbies", [])
        ]
        game_modes = {
            mode["game_mode_id"]: mode.get("game_mode_name_id", mode["game_mode_id"])
            for mode in data.get("game_modes", [])
        }
        return cls(lobbies=lobbies, game_modes=game_modes)
