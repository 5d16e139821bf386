"""Lightweight REST client for the depthchart API."""

from __future__ import annotations

import argparse
import json

import httpx


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the depthchart REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("team", nargs="?", help="Team id, e.g. TB")
    parser.add_argument("--league", default="NFL", help="League taxonomy for the grouped chart")
    parser.add_argument("--list-teams", action="store_true", help="List teams and exit")
    parser.add_argument("--add", nargs=3, metavar=("POSITION", "NUMBER", "NAME"), help="Add or move a player")
    parser.add_argument("--depth", type=int, default=None, help="Depth for --add (appends if omitted)")
    parser.add_argument("--remove", nargs=2, metavar=("POSITION", "NUMBER"), help="Remove a player")
    parser.add_argument("--backups", nargs=2, metavar=("POSITION", "NUMBER"), help="Show a player's backups")
    args = parser.parse_args()

    with httpx.Client(base_url=args.base_url) as client:
        if args.list_teams:
            resp = client.get("/api/teams")
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))
            return

        if not args.team:
            raise SystemExit("team is required unless using --list-teams")
        base = f"/api/depthchart/{args.team}"

        if args.add:
            position, number, name = args.add
            body = {
                "position": position,
                "player": {"number": int(number), "name": name},
                "position_depth": args.depth,
            }
            resp = client.post(f"{base}/players", json=body)
            if resp.status_code == 400:
                raise SystemExit(resp.json()["message"])
            resp.raise_for_status()
            print(resp.json()["message"])

        if args.remove:
            position, number = args.remove
            resp = client.delete(f"{base}/positions/{position}/players/{number}")
            if resp.status_code == 404:
                raise SystemExit(f"player #{number} not found at {position}")
            resp.raise_for_status()
            print("Removed:", json.dumps(resp.json(), indent=2))

        if args.backups:
            position, number = args.backups
            resp = client.get(f"{base}/positions/{position}/players/{number}/backups")
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))
            return

        resp = client.get(f"{base}/depthchart", params={"league": args.league})
        resp.raise_for_status()
        print(json.dumps(resp.json(), indent=2))


if __name__ == "__main__":
    main()
