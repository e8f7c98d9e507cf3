"""
Room Endpoint Builder

Maps a resolved connection target and query parameters to the websocket
URI of a room: <ws|wss>://<host>/<process_id>/<room_id>?<params>
"""

from typing import Any, Mapping, Optional, Union
from urllib.parse import urlencode, urlsplit

from .schemas import JoinPort, RoomReference

_WS_SCHEMES = {"http": "ws", "https": "wss", "ws": "ws", "wss": "wss"}


def websocket_origin(target: Union[JoinPort, str]) -> str:
    """
    Resolve the websocket origin of a connection target.

    Args:
        target: Lobby port (scheme chosen by its TLS flag) or an already
            resolved origin such as "https://host:1234" or "wss://host"

    Returns:
        Origin with a ws/wss scheme and no trailing slash

    Raises:
        ValueError: If an origin string has no usable scheme
    """
    if isinstance(target, JoinPort):
        scheme = "wss" if target.is_tls else "ws"
        return f"{scheme}://{target.host}"

    parts = urlsplit(target)
    try:
        scheme = _WS_SCHEMES[parts.scheme.lower()]
    except KeyError:
        raise ValueError(f"Unsupported origin scheme in {target!r}") from None
    return f"{scheme}://{parts.netloc}{parts.path.rstrip('/')}"


def build_endpoint(
    target: Union[JoinPort, str],
    room: RoomReference,
    params: Optional[Mapping[str, Any]] = None,
) -> str:
    """
    Build the websocket URI of a reserved room.

    Parameters are encoded in the mapping's insertion order; entries whose
    value is None are left out.

    Args:
        target: Lobby port or resolved origin
        room: Room the seat was reserved in
        params: Query parameters, typically sessionId and playerToken

    Returns:
        Room websocket URI
    """
    query = urlencode(
        [(name, value) for name, value in (params or {}).items() if value is not None]
    )
    return f"{websocket_origin(target)}/{room.process_id}/{room.room_id}?{query}"
