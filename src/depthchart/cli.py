"""Command-line interface for managing depth charts."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any, Sequence

from depthchart.config_loader import STORAGE_CHOICES, Settings
from depthchart.models import Player
from depthchart.persistence import StorageError
from depthchart.seed import seed_storage
from depthchart.service import DepthChartService, ValidationError


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Manage team depth charts")
    parser.add_argument("--storage", choices=STORAGE_CHOICES, default=None, help="Storage backend (default from env)")
    parser.add_argument("--db-path", default=None, help="SQLite database path")
    parser.add_argument("--data-dir", type=Path, default=None, help="Data directory for the json backend")
    parser.add_argument("--load-profile", type=Path, default=None, help="Load settings JSON")
    parser.add_argument("--save-profile", type=Path, default=None, help="Save effective settings JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log at INFO level")
    sub = parser.add_subparsers(dest="command", required=True)

    add = sub.add_parser("add", help="Add or move a player at a position")
    add.add_argument("team")
    add.add_argument("position")
    add.add_argument("number", type=int)
    add.add_argument("name")
    add.add_argument("--depth", type=int, default=None, help="Requested depth (0 = starter); appends if omitted")

    remove = sub.add_parser("remove", help="Remove a player from a position")
    remove.add_argument("team")
    remove.add_argument("position")
    remove.add_argument("number", type=int)

    backups = sub.add_parser("backups", help="List players ranked behind a player")
    backups.add_argument("team")
    backups.add_argument("position")
    backups.add_argument("number", type=int)

    chart = sub.add_parser("chart", help="Print a team's grouped depth chart")
    chart.add_argument("team")
    chart.add_argument("--league", default=None, help="League taxonomy (default from settings)")

    sub.add_parser("teams", help="List known teams")

    players = sub.add_parser("players", help="List a team's player records")
    players.add_argument("team")

    positions = sub.add_parser("positions", help="List a league's positions")
    positions.add_argument("--league", default=None)

    seed = sub.add_parser("seed", help="Seed reference data into empty storage")
    seed.add_argument("--sample", action="store_true", help="Also seed sample depth charts")

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)

    return parser.parse_args(argv)


def _settings_from_args(args: argparse.Namespace) -> Settings:
    settings = Settings.load(args.load_profile) if args.load_profile else Settings.from_env()
    if args.storage:
        settings.storage = args.storage
    if args.db_path:
        settings.db_path = args.db_path
    if args.data_dir:
        settings.data_dir = args.data_dir
    return settings


def _player_dict(player: Player) -> dict[str, Any]:
    return {"team_id": player.team_id, "number": player.number, "name": player.name}


def _run(args: argparse.Namespace, settings: Settings) -> Any:
    if args.command == "serve":
        import uvicorn

        from depthchart.api import create_app

        uvicorn.run(create_app(settings), host=args.host, port=args.port)
        return None

    storage = settings.open_storage()
    if args.command == "seed":
        report = seed_storage(storage, sample=args.sample)
        return asdict(report)
    if settings.seed != "none":
        seed_storage(storage, sample=settings.seed == "sample")

    service = DepthChartService.from_storage(storage)
    league = getattr(args, "league", None) or settings.default_league

    if args.command == "add":
        service.add_player(args.team, args.position, Player(team_id=args.team, number=args.number, name=args.name), args.depth)
        return {"message": "Player added successfully"}
    if args.command == "remove":
        removed = service.remove_player(args.team, args.position, args.number)
        if removed is None:
            raise SystemExit(f"player #{args.number} not found at {args.team}/{args.position}")
        return _player_dict(removed)
    if args.command == "backups":
        return [_player_dict(p) for p in service.get_backups(args.team, args.position, args.number)]
    if args.command == "chart":
        chart = service.get_full_chart(args.team, league)
        return {
            group: [
                {"position": entry.position, "name": entry.name, "players": [_player_dict(p) for p in entry.players]}
                for entry in entries
            ]
            for group, entries in chart.items()
        }
    if args.command == "teams":
        return [team.model_dump() for team in service.list_teams()]
    if args.command == "players":
        return [_player_dict(p) for p in service.list_players(args.team)]
    if args.command == "positions":
        return [position.model_dump() for position in service.list_positions(league)]
    raise SystemExit(f"unknown command {args.command!r}")


def main(argv: Sequence[str] | None = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)
    settings = _settings_from_args(args)
    if args.save_profile:
        settings.save(args.save_profile)
        print(f"Settings saved to {args.save_profile}", file=sys.stderr)

    try:
        result = _run(args, settings)
    except ValidationError as exc:
        raise SystemExit(f"invalid input: {exc}") from exc
    except StorageError as exc:
        raise SystemExit(f"storage error: {exc}") from exc
    if result is not None:
        print(json.dumps(result, indent=2))


if __name__ == "__main__":
    main()
