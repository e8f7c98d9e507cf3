"""
Tests for the room endpoint builder.
"""

import pytest

from matchmaking import JoinPort, RoomReference, build_endpoint, websocket_origin


ROOM = RoomReference(name="battle", room_id="R1", process_id="P1")


def test_build_endpoint_from_origin():
    """Origin-based endpoints keep the origin's scheme and host."""
    uri = build_endpoint(
        "wss://host:1234", ROOM, {"sessionId": "abc", "playerToken": "tok"}
    )
    assert uri == "wss://host:1234/P1/R1?sessionId=abc&playerToken=tok"


def test_build_endpoint_keeps_insertion_order():
    uri = build_endpoint(
        "ws://host", ROOM, {"playerToken": "tok", "sessionId": "abc"}
    )
    assert uri == "ws://host/P1/R1?playerToken=tok&sessionId=abc"


def test_build_endpoint_from_tls_port():
    port = JoinPort(host="lobby.example.com:443", is_tls=True)
    uri = build_endpoint(port, ROOM, {"sessionId": "abc"})
    assert uri == "wss://lobby.example.com:443/P1/R1?sessionId=abc"


def test_build_endpoint_from_plain_port():
    port = JoinPort(host="10.0.0.5:7777", is_tls=False)
    assert build_endpoint(port, ROOM, {"sessionId": "abc"}).startswith(
        "ws://10.0.0.5:7777/"
    )


def test_build_endpoint_skips_none_and_encodes_values():
    uri = build_endpoint(
        "ws://host", ROOM, {"sessionId": "a b&c", "playerToken": None}
    )
    assert uri == "ws://host/P1/R1?sessionId=a+b%26c"


def test_build_endpoint_without_params():
    assert build_endpoint("ws://host", ROOM) == "ws://host/P1/R1?"


@pytest.mark.parametrize(
    "origin, expected",
    [
        ("http://host:80", "ws://host:80"),
        ("https://host", "wss://host"),
        ("wss://host/", "wss://host"),
    ],
)
def test_websocket_origin_maps_http_schemes(origin, expected):
    assert websocket_origin(origin) == expected


def test_websocket_origin_rejects_unknown_scheme():
    with pytest.raises(ValueError):
        websocket_origin("ftp://host")
