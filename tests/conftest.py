"""
Shared test doubles for the matchmaking tests.
"""

import asyncio

import pytest

from matchmaking.protocol import Protocol, utf8_write


def join_frame(serializer_id: str = "schema") -> bytes:
    return bytes([Protocol.JOIN_ROOM]) + utf8_write(serializer_id)


def error_frame(code: int = 4216, message: str = "boom") -> bytes:
    # uint16 code followed by a fixstr message
    encoded = message.encode("utf-8")
    return (
        bytes([Protocol.ERROR, 0xCD, code >> 8, code & 0xFF, 0xA0 | len(encoded)])
        + encoded
    )


class FakeConnection:
    """
    Stand-in for matchmaking.connection.Connection.

    on_open, when given, is scheduled on the loop right after open() so
    tests can script what the room process sends back.
    """

    def __init__(self, on_open=None, open_error=None):
        self.url = None
        self.sent = []
        self.closed = False
        self.on_message = None
        self.on_close = None
        self._on_open = on_open
        self._open_error = open_error

    @property
    def is_open(self):
        return self.url is not None and not self.closed

    async def open(self, url):
        if self._open_error is not None:
            raise self._open_error
        self.url = url
        if self._on_open is not None:
            asyncio.get_running_loop().call_soon(self._on_open, self)

    async def send(self, data):
        self.sent.append(data)

    async def close(self, code=1000, reason=""):
        self.closed = True
        if self.on_close:
            self.on_close(code, reason)

    def receive(self, frame):
        self.on_message(frame)


class MockWebSocket:
    """Mock websocket yielding scripted frames, then waiting to be closed."""

    def __init__(self, frames=(), close_exception=None):
        self.frames = list(frames)
        self.close_exception = close_exception
        self.sent_messages = []
        self.close_code = None
        self.close_reason = None
        self._closed = asyncio.Event()

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        for frame in self.frames:
            yield frame
        if self.close_exception is not None:
            raise self.close_exception
        await self._closed.wait()

    async def send(self, message):
        self.sent_messages.append(message)

    async def close(self, code=1000, reason=""):
        self.close_code = code
        self.close_reason = reason
        self._closed.set()


def factory_for(websocket, urls=None):
    async def connect(url):
        if urls is not None:
            urls.append(url)
        return websocket

    return connect


class ConnectionRecorder:
    """Connection factory that remembers every connection it built."""

    def __init__(self, on_open=None, open_error=None):
        self.on_open = on_open
        self.open_error = open_error
        self.connections = []

    def __call__(self):
        connection = FakeConnection(self.on_open, self.open_error)
        self.connections.append(connection)
        return connection

    @property
    def last(self):
        return self.connections[-1]


def joins(connection):
    connection.receive(join_frame())


def fails(connection):
    connection.receive(error_frame(4216, "boom"))


@pytest.fixture
def placement_body():
    port = {
        "host": "p1.example.com:1234",
        "hostname": "p1.example.com",
        "port": 1234,
        "is_tls": True,
    }
    return {
        "lobby": {
            "lobby_id": "lobby-1",
            "region": "eu",
            "ports": {"default": port},
            "player": {"token": "tok"},
        },
        "ports": {"default": port},
        "player": {"token": "tok"},
    }


@pytest.fixture
def seat_body():
    return {
        "room": {"name": "battle", "roomId": "R1", "processId": "P1"},
        "sessionId": "abc",
    }
