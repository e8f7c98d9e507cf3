"""
Lobby Placement Service

HTTP client for the external matchmaker that allocates lobbies (candidate
room processes) to players. Only the two calls the matchmaking client
needs are covered: finding a lobby and listing lobbies.
"""

import logging
from typing import List, Optional

import httpx

from .errors import MatchmakerError
from .schemas import FindLobbyRequest, ListLobbiesResponse, LobbyPlacement

logger = logging.getLogger(__name__)

DEFAULT_MATCHMAKER_URL = "https://matchmaker.api.rivet.gg/v1"


class RivetMatchmaker:
    """
    Client for the lobby placement API.

    Attributes:
        base_url: API root, e.g. https://matchmaker.api.rivet.gg/v1
        token: Bearer token sent with every request (optional)
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        base_url: str = DEFAULT_MATCHMAKER_URL,
        token: Optional[str] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self._http = http_client

    async def find_lobby(
        self,
        game_modes: List[str],
        prevent_auto_create_lobby: bool = False,
    ) -> LobbyPlacement:
        """
        Ask for a lobby in one of the given game modes.

        Args:
            game_modes: Game mode filter
            prevent_auto_create_lobby: Fail rather than create a lobby when
                no existing one matches

        Returns:
            LobbyPlacement with routing info and the player token

        Raises:
            MatchmakerError: If the request fails or no lobby matches
        """
        request = FindLobbyRequest(
            game_modes=list(game_modes),
            prevent_auto_create_lobby=prevent_auto_create_lobby or None,
        )
        logger.info(f"Finding lobby for game modes {request.game_modes}")
        data = await self._request("POST", "/lobbies/find", json=request.to_dict())

        try:
            placement = LobbyPlacement.from_dict(data)
        except ValueError as e:
            raise MatchmakerError(f"Malformed lobby placement: {e}") from e
        logger.info(f"Placed in lobby {placement.lobby_id}")
        return placement

    async def list_lobbies(self) -> ListLobbiesResponse:
        """
        List every lobby known to the placement service.

        Raises:
            MatchmakerError: If the request fails
        """
        data = await self._request("GET", "/lobbies/list")
        try:
            response = ListLobbiesResponse.from_dict(data)
        except ValueError as e:
            raise MatchmakerError(f"Malformed lobby list: {e}") from e
        logger.info(f"Listed {len(response.lobbies)} lobbies")
        return response

    async def _request(self, method: str, path: str, **kwargs) -> dict:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        try:
            response = await self._http.request(
                method, f"{self.base_url}{path}", headers=headers, **kwargs
            )
        except httpx.HTTPError as e:
            logger.error(f"Matchmaker request {method} {path} failed: {e}")
            raise MatchmakerError(f"Matchmaker unreachable: {e}") from e

        if response.is_error:
            message = _error_message(response)
            logger.error(
                f"Matchmaker request {method} {path} returned "
                f"{response.status_code}: {message}"
            )
            raise MatchmakerError(message, response.status_code)

        try:
            return response.json()
        except ValueError as e:
            raise MatchmakerError(
                f"Matchmaker returned invalid JSON: {e}", response.status_code
            ) from e


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict):
        return str(body.get("message") or body.get("code") or body)
    return str(body)
