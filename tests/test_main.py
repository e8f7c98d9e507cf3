"""
Tests for the command line client.
"""

import argparse
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from matchmaking import ClientConfig, MatchMakeError
from matchmaking.main import build_parser, main, parse_option, run


def test_parse_option_reads_json_values():
    assert parse_option("rank=3") == ("rank", 3)
    assert parse_option("mode=ranked") == ("mode", "ranked")
    assert parse_option("tags=[\"eu\"]") == ("tags", ["eu"])


def test_parse_option_requires_equals():
    with pytest.raises(argparse.ArgumentTypeError):
        parse_option("rank")


def test_parser_collects_options():
    args = build_parser().parse_args(
        ["join-or-create", "battle", "--option", "rank=3", "--option", "mode=x"]
    )
    assert args.command == "join-or-create"
    assert args.room == "battle"
    assert dict(args.option) == {"rank": 3, "mode": "x"}


@pytest.mark.asyncio
async def test_run_joins_and_leaves(capsys):
    room = MagicMock(room_id="R1", session_id="abc")
    room.leave = AsyncMock()
    client = MagicMock()
    client.__aenter__ = AsyncMock(return_value=client)
    client.__aexit__ = AsyncMock(return_value=None)
    client.join = AsyncMock(return_value=room)

    args = build_parser().parse_args(["join", "battle", "--option", "rank=3"])
    with patch("matchmaking.main.Client", return_value=client):
        assert await run(args, ClientConfig()) == 0

    client.join.assert_awaited_once_with("battle", {"rank": 3})
    room.leave.assert_awaited_once()
    assert "room_id=R1 session_id=abc" in capsys.readouterr().out


def test_main_exits_nonzero_on_matchmake_error(monkeypatch):
    monkeypatch.setattr("sys.argv", ["matchmake-client", "create", "battle"])
    failing_run = AsyncMock(side_effect=MatchMakeError("not supported", 4213))

    with patch("matchmaking.main.run", failing_run):
        with pytest.raises(SystemExit) as exc_info:
            main()

    assert exc_info.value.code == 1
