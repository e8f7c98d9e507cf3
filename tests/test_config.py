"""
Tests for ClientConfig.
"""

import pytest

from matchmaking import ClientConfig
from matchmaking.matchmaker import DEFAULT_MATCHMAKER_URL


def test_defaults_disable_unsupported_intents():
    config = ClientConfig.from_env({})

    assert config.token is None
    assert config.matchmaker_url == DEFAULT_MATCHMAKER_URL
    assert config.game_mode is None
    assert config.timeout == 10.0
    assert not config.allow_create
    assert not config.allow_join_by_id
    assert not config.allow_reconnect
    assert not config.allow_room_listing


def test_from_env_reads_all_settings():
    config = ClientConfig.from_env(
        {
            "RIVET_TOKEN": "secret",
            "RIVET_MATCHMAKER_URL": "http://localhost:8080/v1",
            "MATCHMAKER_GAME_MODE": "default",
            "MATCHMAKE_TIMEOUT": "2.5",
            "MATCHMAKER_ALLOW_CREATE": "true",
            "MATCHMAKER_ALLOW_JOIN_BY_ID": "1",
            "MATCHMAKER_ALLOW_RECONNECT": "YES",
            "MATCHMAKER_ALLOW_ROOM_LISTING": "off",
        }
    )

    assert config.token == "secret"
    assert config.matchmaker_url == "http://localhost:8080/v1"
    assert config.game_mode == "default"
    assert config.timeout == 2.5
    assert config.allow_create
    assert config.allow_join_by_id
    assert config.allow_reconnect
    assert not config.allow_room_listing


def test_from_env_reads_os_environ(monkeypatch):
    monkeypatch.setenv("RIVET_TOKEN", "from-env")

    assert ClientConfig.from_env().token == "from-env"


def test_invalid_timeout():
    with pytest.raises(ValueError, match="MATCHMAKE_TIMEOUT"):
        ClientConfig.from_env({"MATCHMAKE_TIMEOUT": "soon"})


def test_game_modes_for():
    assert ClientConfig().game_modes_for("battle") == ["battle"]
    assert ClientConfig().game_modes_for(None) == ["default"]
    assert ClientConfig(game_mode="ranked").game_modes_for("battle") == ["ranked"]
