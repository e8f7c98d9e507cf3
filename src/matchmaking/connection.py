"""
Room Transport Connection

WebSocket connection to a room process. Incoming binary frames are read by
a background task and handed to the on_message callback; the end of the
stream is reported once through on_close.

Architecture:
    - Supports dependency injection for the websocket factory (for testability)
    - Callbacks are plain attributes set by the owning Room
"""

import asyncio
import logging
from typing import Any, Callable, Optional

import websockets
from websockets.exceptions import ConnectionClosed

from .protocol import ABNORMAL_CLOSURE

logger = logging.getLogger(__name__)


class Connection:
    """
    Binary websocket connection to a room process.

    Attributes:
        url: URI the connection was opened with
        websocket: Active websocket (None until opened)
        on_message: Called with each received frame as bytes
        on_close: Called once with (code, reason) when the stream ends
    """

    def __init__(self, websocket_factory: Optional[Callable] = None):
        """
        Initialize the connection.

        Args:
            websocket_factory: Optional factory for creating websocket
                connections (for dependency injection/testing)
        """
        self.url: Optional[str] = None
        self.websocket: Any = None
        self.on_message: Optional[Callable[[bytes], None]] = None
        self.on_close: Optional[Callable[[int, str], None]] = None
        self._websocket_factory = websocket_factory or websockets.connect
        self._reader: Optional[asyncio.Task] = None
        self._closed = False

    @property
    def is_open(self) -> bool:
        return self.websocket is not None and not self._closed

    async def open(self, url: str) -> None:
        """
        Open the websocket and start reading frames.

        Raises:
            OSError: If the host cannot be reached
            websockets.exceptions.WebSocketException: If the handshake fails
        """
        self.url = url
        logger.info(f"Connecting to room at {url.split('?', 1)[0]}")
        self.websocket = await self._websocket_factory(url)
        self._closed = False
        self._reader = asyncio.create_task(self._read_frames())

    async def send(self, data: bytes) -> None:
        if not self.is_open:
            raise ConnectionError("Room connection is not open")
        await self.websocket.send(data)

    async def close(self, code: int = 1000, reason: str = "") -> None:
        """Close the websocket; on_close fires from the reader task."""
        if self.websocket is None:
            return
        await self.websocket.close(code, reason)
        if self._reader is not None:
            await asyncio.gather(self._reader, return_exceptions=True)

    async def _read_frames(self) -> None:
        code, reason = 1000, ""
        try:
            async for frame in self.websocket:
                if isinstance(frame, str):
                    frame = frame.encode("utf-8")
                logger.debug(f"Received frame of {len(frame)} bytes")
                if self.on_message:
                    self.on_message(frame)
            code = getattr(self.websocket, "close_code", None) or code
            reason = getattr(self.websocket, "close_reason", None) or reason
        except ConnectionClosed as e:
            if e.rcvd is not None:
                code, reason = e.rcvd.code, e.rcvd.reason
            else:
                code, reason = ABNORMAL_CLOSURE, str(e)
            logger.warning(f"Room connection closed: {code} {reason}")
        finally:
            self._closed = True
            if self.on_close:
                self.on_close(code, reason)
