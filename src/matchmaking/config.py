"""
Client Configuration

Settings for the matchmaking client, read from the environment with
defaults for everything except the matchmaker token.

Environment:
    RIVET_TOKEN: Bearer token for the lobby placement API
    RIVET_MATCHMAKER_URL: Placement API root
    MATCHMAKER_GAME_MODE: Fixed game mode; when unset the room name is used
    MATCHMAKE_TIMEOUT: HTTP timeout in seconds
    MATCHMAKER_ALLOW_CREATE, MATCHMAKER_ALLOW_JOIN_BY_ID,
    MATCHMAKER_ALLOW_RECONNECT, MATCHMAKER_ALLOW_ROOM_LISTING:
        Enable join intents the placement service may not back (1/true/yes/on)
"""

import os
from dataclasses import dataclass
from typing import List, Mapping, Optional

from .matchmaker import DEFAULT_MATCHMAKER_URL

DEFAULT_TIMEOUT = 10.0
DEFAULT_GAME_MODE = "default"

_TRUTHY = {"1", "true", "yes", "on"}


def _flag(env: Mapping[str, str], name: str) -> bool:
    return env.get(name, "").strip().lower() in _TRUTHY


@dataclass
class ClientConfig:
    """
    Matchmaking client settings.

    Attributes:
        token: Placement API token
        matchmaker_url: Placement API root
        game_mode: Fixed game mode filter, or None to filter by room name
        timeout: HTTP timeout in seconds
        allow_create: create() is backed by the placement service
        allow_join_by_id: join_by_id() is backed by the placement service
        allow_reconnect: reconnect() is backed by the placement service
        allow_room_listing: get_available_rooms() returns real rooms
    """

    token: Optional[str] = None
    matchmaker_url: str = DEFAULT_MATCHMAKER_URL
    game_mode: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT
    allow_create: bool = False
    allow_join_by_id: bool = False
    allow_reconnect: bool = False
    allow_room_listing: bool = False

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "ClientConfig":
        """
        Build the configuration from environment variables.

        Raises:
            ValueError: If MATCHMAKE_TIMEOUT is not a number
        """
        env = os.environ if env is None else env
        timeout_value = env.get("MATCHMAKE_TIMEOUT", str(DEFAULT_TIMEOUT))
        try:
            timeout = float(timeout_value)
        except ValueError:
            raise ValueError(
                f"MATCHMAKE_TIMEOUT must be a number, got {timeout_value!r}"
            ) from None

        return cls(
            token=env.get("RIVET_TOKEN") or None,
            matchmaker_url=env.get("RIVET_MATCHMAKER_URL", DEFAULT_MATCHMAKER_URL),
            game_mode=env.get("MATCHMAKER_GAME_MODE") or None,
            timeout=timeout,
            allow_create=_flag(env, "MATCHMAKER_ALLOW_CREATE"),
            allow_join_by_id=_flag(env, "MATCHMAKER_ALLOW_JOIN_BY_ID"),
            allow_reconnect=_flag(env, "MATCHMAKER_ALLOW_RECONNECT"),
            allow_room_listing=_flag(env, "MATCHMAKER_ALLOW_ROOM_LISTING"),
        )

    def game_modes_for(self, room_name: Optional[str] = None) -> List[str]:
        """
        Game mode filter used when placing a player.

        Args:
            room_name: Room the player asked for; None when joining by id,
                where the placement falls back to the default game mode
        """
        return [self.game_mode or room_name or DEFAULT_GAME_MODE]
