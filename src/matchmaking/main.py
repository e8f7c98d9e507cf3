#!/usr/bin/env python3
"""
Matchmaking Command Line Client

Joins a room through the matchmaker, prints the reserved ids and leaves.
Settings come from the environment (see matchmaking.config).

Examples:
    matchmake-client join-or-create battle --option rank=3
    matchmake-client reconnect ROOM_ID SESSION_ID
    matchmake-client list battle
"""

import argparse
import asyncio
import json
import logging
import sys

from .client import Client
from .config import ClientConfig
from .errors import MatchMakeError, ServerError

logger = logging.getLogger(__name__)


def parse_option(value: str):
    """Parse KEY=VALUE; VALUE is read as JSON when it parses as JSON."""
    if "=" not in value:
        raise argparse.ArgumentTypeError(f"Expected KEY=VALUE, got {value!r}")
    key, raw = value.split("=", 1)
    try:
        return key, json.loads(raw)
    except ValueError:
        return key, raw


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="matchmake-client", description="Join rooms through the matchmaker"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    for name in ("join-or-create", "join", "create"):
        command = commands.add_parser(name, help=f"{name} a room by name")
        command.add_argument("room")
        command.add_argument(
            "--option", type=parse_option, action="append", default=[],
            metavar="KEY=VALUE", help="Join option (repeatable)",
        )

    by_id = commands.add_parser("join-by-id", help="Join a room by id")
    by_id.add_argument("room_id")

    reconnect = commands.add_parser("reconnect", help="Rejoin a previous seat")
    reconnect.add_argument("room_id")
    reconnect.add_argument("session_id")

    listing = commands.add_parser("list", help="List available rooms")
    listing.add_argument("room", nargs="?", default="")
    return parser


async def run(args: argparse.Namespace, config: ClientConfig) -> int:
    async with Client(config) as client:
        if args.command == "list":
            for available in await client.get_available_rooms(args.room):
                print(
                    f"{available.room_id}\t{available.name or ''}\t"
                    f"{available.clients}/{available.max_clients}"
                )
            return 0

        if args.command == "join-by-id":
            room = await client.join_by_id(args.room_id)
        elif args.command == "reconnect":
            room = await client.reconnect(args.room_id, args.session_id)
        else:
            join = {
                "join-or-create": client.join_or_create,
                "join": client.join,
                "create": client.create,
            }[args.command]
            room = await join(args.room, dict(args.option))

        print(f"room_id={room.room_id} session_id={room.session_id}")
        await room.leave()
        return 0


def main():
    """Main entry point for the matchmaking client."""
    args = build_parser().parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        config = ClientConfig.from_env()
        sys.exit(asyncio.run(run(args, config)))
    except (MatchMakeError, ServerError) as e:
        logger.error(f"Join failed: {e!r}")
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)
    except KeyboardInterrupt:
        print("\nExiting...")
        sys.exit(0)


if __name__ == "__main__":
    main()
