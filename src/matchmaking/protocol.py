"""
Room Transport Protocol

Control-frame codes and the small decoders needed to read them. Every
binary frame sent by a room process starts with one Protocol byte.

Frame Layouts:
    JOIN_ROOM:  [10, utf8(serializer_id), handshake...]
    ERROR:      [11, number(code), string(message)]
    LEAVE_ROOM: [12]
    ROOM_DATA / ROOM_STATE / ROOM_STATE_PATCH: [code, payload...]

utf8() is a single length byte followed by the encoded text. number() and
string() use the compact MessagePack-style encodings of the state serializer.
State payloads are passed through undecoded.
"""

import struct
from enum import IntEnum
from typing import Tuple

ABNORMAL_CLOSURE = 1006


class Protocol(IntEnum):
    """Room frame codes."""

    HANDSHAKE = 9
    JOIN_ROOM = 10
    ERROR = 11
    LEAVE_ROOM = 12
    ROOM_DATA = 13
    ROOM_STATE = 14
    ROOM_STATE_PATCH = 15


class ErrorCode(IntEnum):
    """Error codes reported by the matchmake endpoint and room processes."""

    MATCHMAKE_NO_HANDLER = 4210
    MATCHMAKE_INVALID_CRITERIA = 4211
    MATCHMAKE_INVALID_ROOM_ID = 4212
    MATCHMAKE_UNHANDLED = 4213
    MATCHMAKE_EXPIRED = 4214
    AUTH_FAILED = 4215
    APPLICATION_ERROR = 4216


def utf8_read(data: bytes, offset: int) -> Tuple[str, int]:
    """
    Read a length-prefixed utf8 string.

    Returns:
        Tuple of (text, offset just past the string)

    Raises:
        ValueError: If the frame is truncated
    """
    if offset >= len(data):
        raise ValueError("Truncated frame: missing string length")
    length = data[offset]
    end = offset + 1 + length
    if end > len(data):
        raise ValueError("Truncated frame: string shorter than its length")
    return data[offset + 1:end].decode("utf-8"), end


def utf8_write(text: str) -> bytes:
    """Encode text as a length-prefixed utf8 string."""
    encoded = text.encode("utf-8")
    if len(encoded) > 0xFF:
        raise ValueError("String too long for a length byte")
    return bytes([len(encoded)]) + encoded


# prefix byte -> (struct format, size)
_NUMBER_FORMATS = {
    0xCA: (">f", 4),
    0xCB: (">d", 8),
    0xCC: (">B", 1),
    0xCD: (">H", 2),
    0xCE: (">I", 4),
    0xCF: (">Q", 8),
    0xD0: (">b", 1),
    0xD1: (">h", 2),
    0xD2: (">i", 4),
    0xD3: (">q", 8),
}


def _take(data: bytes, offset: int, size: int) -> bytes:
    end = offset + size
    if end > len(data):
        raise ValueError("Truncated frame")
    return data[offset:end]


def decode_number(data: bytes, offset: int) -> Tuple[float, int]:
    """Decode a compact number. Returns (value, new offset)."""
    prefix = _take(data, offset, 1)[0]
    offset += 1

    if prefix < 0x80:
        return prefix, offset
    if prefix >= 0xE0:
        return prefix - 0x100, offset

    try:
        fmt, size = _NUMBER_FORMATS[prefix]
    except KeyError:
        raise ValueError(f"Not a number prefix: 0x{prefix:02x}") from None
    (value,) = struct.unpack(fmt, _take(data, offset, size))
    return value, offset + size


def decode_string(data: bytes, offset: int) -> Tuple[str, int]:
    """Decode a compact string. Returns (text, new offset)."""
    prefix = _take(data, offset, 1)[0]
    offset += 1

    if 0xA0 <= prefix <= 0xBF:
        length = prefix & 0x1F
    elif prefix == 0xD9:
        length = _take(data, offset, 1)[0]
        offset += 1
    elif prefix == 0xDA:
        (length,) = struct.unpack(">H", _take(data, offset, 2))
        offset += 2
    elif prefix == 0xDB:
        (length,) = struct.unpack(">I", _take(data, offset, 4))
        offset += 4
    else:
        raise ValueError(f"Not a string prefix: 0x{prefix:02x}")

    return _take(data, offset, length).decode("utf-8"), offset + length


def decode_error_frame(data: bytes) -> Tuple[int, str]:
    """
    Decode the body of an ERROR frame.

    Args:
        data: Full frame, including the leading Protocol.ERROR byte

    Returns:
        Tuple of (code, message)
    """
    code, offset = decode_number(data, 1)
    message = ""
    if offset < len(data):
        message, _ = decode_string(data, offset)
    return int(code), message
