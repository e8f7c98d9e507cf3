"""
Matchmake Request

The HTTP handshake that turns a lobby placement into a seat reservation:

    POST <origin>/matchmake/<method>/<room_name_or_id>
    Accept: application/json
    Content-Type: application/json

    <options as JSON>

A body carrying an "error" field is a failure even on HTTP 200. One
request is made per call; retrying is left to the caller.
"""

import json
import logging
from typing import Any, Dict, Optional

import httpx

from .errors import MatchMakeError
from .schemas import JoinPort, SeatReservation

logger = logging.getLogger(__name__)

MATCHMAKE_METHODS = ("create", "join", "joinOrCreate", "joinById")

JSON_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}


def http_origin(port: JoinPort) -> str:
    """Origin of the matchmake endpoint for a lobby port."""
    scheme = "https" if port.is_tls else "http"
    return f"{scheme}://{port.host}"


async def request_seat_reservation(
    http_client: httpx.AsyncClient,
    method: str,
    room_name: str,
    options: Optional[Dict[str, Any]],
    port: JoinPort,
) -> SeatReservation:
    """
    Reserve a seat on the process behind a lobby port.

    Args:
        http_client: HTTP client used for the single POST
        method: Matchmake method, one of MATCHMAKE_METHODS
        room_name: Room name, or room id for joinById
        options: Join options, sent as the JSON body
        port: Lobby port the request is routed to

    Returns:
        Successful SeatReservation

    Raises:
        MatchMakeError: If the request fails or the body carries an error
    """
    if method not in MATCHMAKE_METHODS:
        raise ValueError(f"Unknown matchmake method: {method}")

    url = f"{http_origin(port)}/matchmake/{method}/{room_name}"
    logger.info(f"Sending matchmake request {method} for '{room_name}'")

    try:
        response = await http_client.post(
            url, content=json.dumps(options or {}), headers=JSON_HEADERS
        )
    except httpx.HTTPError as e:
        logger.error(f"Matchmake request to {url} failed: {e}")
        raise MatchMakeError(f"Matchmake request failed: {e}") from e

    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict) and body.get("error"):
        reservation = SeatReservation.from_dict(body)
        logger.error(
            f"Matchmake {method} for '{room_name}' rejected: "
            f"{reservation.error} ({reservation.code})"
        )
        raise MatchMakeError(reservation.error, reservation.code)

    if response.is_error or not isinstance(body, dict):
        message = response.text or response.reason_phrase
        logger.error(f"Matchmake {method} returned {response.status_code}: {message}")
        raise MatchMakeError(message, response.status_code)

    try:
        reservation = SeatReservation.from_dict(body)
    except ValueError as e:
        raise MatchMakeError(f"Malformed seat reservation: {e}", response.status_code) from e

    logger.info(
        f"Reserved seat in room {reservation.room.room_id} "
        f"on process {reservation.room.process_id}"
    )
    return reservation
