"""
Seat Reservation Consumer

Turns a seat reservation into a joined Room: assigns the reserved ids to
the handle, opens its connection and waits for whichever of the room's
join or error events comes first.
"""

import logging
from typing import Optional, Union

from .endpoint import build_endpoint
from .errors import ServerError
from .room import Room
from .schemas import JoinPlayer, JoinPort, SeatReservation
from .signals import ResultChannel

logger = logging.getLogger(__name__)


async def consume_seat_reservation(
    room: Room,
    target: Union[JoinPort, str],
    reservation: SeatReservation,
    player: Optional[JoinPlayer] = None,
) -> Room:
    """
    Connect a fresh room handle to its reserved seat.

    Args:
        room: Unconnected handle; it is consumed by this call
        target: Lobby port or resolved origin of the room process
        reservation: Successful seat reservation
        player: Player credential, appended as playerToken when given

    Returns:
        The room, joined

    Raises:
        ServerError: If the room reports an error before joining
        ValueError: If the reservation is an error
        RuntimeError: If the room handle was already connected
    """
    if reservation.is_error:
        raise ValueError("Cannot consume a failed seat reservation")
    if room.connection is not None:
        raise RuntimeError(f"Room '{room.name}' was already used for a join")

    room.room_id = reservation.room.room_id
    room.session_id = reservation.session_id

    result = ResultChannel()

    def on_error(code, message):
        result.reject(ServerError(code, message))

    def on_join():
        result.resolve(room)

    room.on_error.once(on_error)
    room.on_join.once(on_join)
    result.add_cleanup(lambda: room.on_error.remove(on_error))
    result.add_cleanup(lambda: room.on_join.remove(on_join))

    params = {"sessionId": room.session_id}
    if player is not None:
        params["playerToken"] = player.token

    await room.connect(build_endpoint(target, reservation.room, params))

    try:
        return await result.wait()
    except ServerError as e:
        logger.error(f"Could not join room '{room.name}': {e.code} {e.message}")
        if room.connection is not None and room.connection.is_open:
            await room.connection.close()
        raise
