"""
Tests for lobby and seat schemas.
"""

import pytest

from matchmaking.schemas import (
    FindLobbyRequest,
    JoinPort,
    ListLobbiesResponse,
    LobbyPlacement,
    SeatReservation,
)


def test_lobby_placement_from_dict(placement_body):
    placement = LobbyPlacement.from_dict(placement_body)

    assert placement.lobby_id == "lobby-1"
    assert placement.region_id == "eu"
    assert placement.player.token == "tok"
    assert placement.default_port.host == "p1.example.com:1234"
    assert placement.default_port.is_tls is True


def test_lobby_placement_falls_back_to_nested_ports(placement_body):
    del placement_body["ports"]
    del placement_body["player"]

    placement = LobbyPlacement.from_dict(placement_body)

    assert placement.default_port.port == 1234
    assert placement.player.token == "tok"


def test_lobby_placement_missing_lobby():
    with pytest.raises(ValueError, match="lobby"):
        LobbyPlacement.from_dict({"player": {"token": "tok"}})


def test_lobby_placement_without_default_port(placement_body):
    placement_body["ports"] = {"game": placement_body["ports"]["default"]}
    placement = LobbyPlacement.from_dict(placement_body)

    with pytest.raises(ValueError, match="default"):
        placement.default_port


def test_join_port_builds_host_from_hostname():
    port = JoinPort.from_dict({"hostname": "lobby.example.com", "port": 7777})
    assert port.host == "lobby.example.com:7777"
    assert port.is_tls is False


def test_find_lobby_request_omits_unset_flag():
    assert FindLobbyRequest(game_modes=["battle"]).to_dict() == {
        "game_modes": ["battle"]
    }
    assert FindLobbyRequest(
        game_modes=["battle"], prevent_auto_create_lobby=True
    ).to_dict() == {"game_modes": ["battle"], "prevent_auto_create_lobby": True}


def test_list_lobbies_response_from_dict():
    response = ListLobbiesResponse.from_dict(
        {
            "game_modes": [{"game_mode_id": "gm-1", "game_mode_name_id": "battle"}],
            "lobbies": [
                {
                    "lobby_id": "lobby-1",
                    "game_mode_id": "gm-1",
                    "region_id": "eu",
                    "total_player_count": 3,
                    "max_players_normal": 8,
                }
            ],
        }
    )

    assert response.game_modes == {"gm-1": "battle"}
    assert response.lobbies[0].total_player_count == 3
    assert response.lobbies[0].max_players_normal == 8


def test_seat_reservation_success(seat_body):
    reservation = SeatReservation.from_dict(seat_body)

    assert not reservation.is_error
    assert reservation.session_id == "abc"
    assert reservation.room.room_id == "R1"
    assert reservation.room.process_id == "P1"
    assert reservation.room.name == "battle"


def test_seat_reservation_error():
    reservation = SeatReservation.from_dict({"error": "no handler", "code": 4210})

    assert reservation.is_error
    assert reservation.error == "no handler"
    assert reservation.code == 4210
    assert reservation.room is None


def test_seat_reservation_nested_error():
    reservation = SeatReservation.from_dict(
        {"error": {"message": "expired", "code": 4214}}
    )
    assert (reservation.error, reservation.code) == ("expired", 4214)


def test_seat_reservation_requires_exactly_one_outcome(seat_body):
    with pytest.raises(ValueError):
        SeatReservation()
    with pytest.raises(ValueError):
        SeatReservation(session_id="abc", error="both")
    with pytest.raises(ValueError, match="sessionId"):
        SeatReservation.from_dict({"room": seat_body["room"]})
