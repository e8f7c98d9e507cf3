"""
Room Handle

Client-side object for one occupied seat in a room process. The handle
owns its transport connection, reads the control frames of the room
protocol and exposes what happens through event signals:

    - on_join(): the room process accepted the seat
    - on_error(code, message): the room process or transport failed
    - on_leave(code): the connection closed after joining
    - on_message(payload): ROOM_DATA payload, undecoded
    - on_state_change(payload): ROOM_STATE / ROOM_STATE_PATCH payload, undecoded

Usage:
    room = Room("battle")
    room.on_join.once(lambda: print("joined"))
    await room.connect("ws://host/process/room?sessionId=abc")
"""

import asyncio
import logging
from enum import Enum
from typing import Any, Callable, Optional, Set

from websockets.exceptions import WebSocketException

from .connection import Connection
from .protocol import ABNORMAL_CLOSURE, Protocol, decode_error_frame, utf8_read
from .signals import EventSignal

logger = logging.getLogger(__name__)


class ConnectionState(Enum):
    """Lifecycle of a room handle."""

    IDLE = "idle"
    CONNECTING = "connecting"
    JOINED = "joined"
    FAILED = "failed"
    LEFT = "left"


class Room:
    """
    Handle for a seat in a room process.

    Attributes:
        name: Room name the seat was reserved under
        room_id: Room identifier, assigned from the seat reservation
        session_id: Session identifier, assigned from the seat reservation
        root_schema: Optional schema hint for decoding room state
        serializer_id: Serializer announced by the room when joining
        state: Current ConnectionState
        connection: Transport connection (None before connect)
    """

    def __init__(
        self,
        name: str,
        root_schema: Any = None,
        connection_factory: Optional[Callable[[], Connection]] = None,
    ):
        self.name = name
        self.root_schema = root_schema
        self.room_id: Optional[str] = None
        self.session_id: Optional[str] = None
        self.serializer_id: Optional[str] = None
        self.state = ConnectionState.IDLE
        self.connection: Optional[Connection] = None
        self._connection_factory = connection_factory or Connection
        self._tasks: Set[asyncio.Task] = set()

        self.on_join = EventSignal("join")
        self.on_error = EventSignal("error")
        self.on_leave = EventSignal("leave")
        self.on_message = EventSignal("message")
        self.on_state_change = EventSignal("state_change")

    @property
    def has_joined(self) -> bool:
        return self.state is ConnectionState.JOINED

    async def connect(self, endpoint: str) -> None:
        """
        Open the transport to the room process.

        Returns once the socket is open; joining completes later, when the
        room sends JOIN_ROOM. A transport failure is reported through
        on_error rather than raised.

        Raises:
            RuntimeError: If the handle was already connected
        """
        if self.state is not ConnectionState.IDLE:
            raise RuntimeError(f"Room '{self.name}' is already {self.state.value}")

        self.state = ConnectionState.CONNECTING
        self.connection = self._connection_factory()
        self.connection.on_message = self._handle_frame
        self.connection.on_close = self._handle_close

        try:
            await self.connection.open(endpoint)
        except (
            OSError,
            asyncio.TimeoutError,
            WebSocketException,
        ) as e:
            logger.error(f"Could not connect to room '{self.name}': {e}")
            self._fail(ABNORMAL_CLOSURE, str(e))

    async def send(self, payload: bytes) -> None:
        """Send a ROOM_DATA frame with an already encoded payload."""
        if not self.has_joined:
            raise ConnectionError(f"Room '{self.name}' has not been joined")
        await self.connection.send(bytes([Protocol.ROOM_DATA]) + payload)

    async def leave(self, consented: bool = True) -> None:
        """
        Leave the room and close the connection.

        Args:
            consented: Tell the room process the player left on purpose
        """
        if self.connection is None or not self.connection.is_open:
            return
        if consented:
            await self.connection.send(bytes([Protocol.LEAVE_ROOM]))
        await self.connection.close()

    def _handle_frame(self, frame: bytes) -> None:
        if not frame:
            return
        code = frame[0]

        if code == Protocol.JOIN_ROOM:
            self._handle_join(frame)
        elif code == Protocol.ERROR:
            try:
                error_code, message = decode_error_frame(frame)
            except ValueError as e:
                logger.warning(f"Malformed error frame from room '{self.name}': {e}")
                error_code, message = None, "Malformed error frame"
            logger.error(f"Room '{self.name}' error {error_code}: {message}")
            if self.state is ConnectionState.CONNECTING:
                self._fail(error_code, message)
            else:
                self.on_error.invoke(error_code, message)
        elif code == Protocol.LEAVE_ROOM:
            self._spawn(self.leave(consented=False))
        elif code == Protocol.ROOM_DATA:
            self.on_message.invoke(frame[1:])
        elif code in (Protocol.ROOM_STATE, Protocol.ROOM_STATE_PATCH):
            self.on_state_change.invoke(frame[1:])
        else:
            logger.debug(f"Ignoring frame with code {code} in room '{self.name}'")

    def _handle_join(self, frame: bytes) -> None:
        if self.state is not ConnectionState.CONNECTING:
            logger.debug(f"Ignoring JOIN_ROOM in room '{self.name}' ({self.state.value})")
            return
        try:
            self.serializer_id, _ = utf8_read(frame, 1)
        except ValueError:
            self.serializer_id = None

        self.state = ConnectionState.JOINED
        logger.info(f"Joined room '{self.name}' ({self.room_id})")
        # Acknowledge so the room process starts sending state
        self._spawn(self.connection.send(bytes([Protocol.JOIN_ROOM])))
        self.on_join.invoke()

    def _handle_close(self, code: int, reason: str) -> None:
        if self.has_joined:
            self.state = ConnectionState.LEFT
            logger.info(f"Left room '{self.name}' with code {code}")
            self.on_leave.invoke(code)
        elif self.state is ConnectionState.CONNECTING:
            self._fail(code, reason or "Connection closed before joining")

    def _fail(self, code: Optional[int], message: str) -> None:
        self.state = ConnectionState.FAILED
        self.on_error.invoke(code, message)

    def _spawn(self, coro) -> asyncio.Task:
        task = asyncio.ensure_future(coro)
        self._tasks.add(task)
        task.add_done_callback(self._task_done)
        return task

    def _task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.warning(f"Background send in room '{self.name}' failed: {error}")

    def __repr__(self) -> str:
        return (
            f"Room(name={self.name!r}, room_id={self.room_id!r}, "
            f"session_id={self.session_id!r}, state={self.state.value})"
        )
