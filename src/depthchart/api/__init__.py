"""REST API for team depth charts."""

from __future__ import annotations

import html
import logging
import time
from datetime import datetime, timezone
from typing import Any

from fastapi import FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, JSONResponse

from depthchart.api.schemas import (
    AddPlayerRequest,
    ErrorResponse,
    MessageResponse,
    PlayerPayload,
    PlayerResponse,
    PositionChartResponse,
    PositionResponse,
    TeamResponse,
)
from depthchart.chart import GroupedChart
from depthchart.config_loader import Settings
from depthchart.models import Player, Team
from depthchart.persistence import SnapshotStore, StorageError
from depthchart.seed import seed_storage
from depthchart.service import DepthChartService, ValidationError


logger = logging.getLogger("uvicorn.error")

_UNLOGGED_PATHS = ("/health",)
_REQUEST_LOCATIONS = ("body", "path", "query")


def _error(status_code: int, message: str, field: str | None = None) -> JSONResponse:
    body = ErrorResponse(message=message, status_code=status_code, field=field)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def _request_error_field(loc: tuple[Any, ...]) -> str | None:
    parts = [str(part) for part in loc if part not in _REQUEST_LOCATIONS]
    return ".".join(parts) or None


def _render_page(title: str, body: str) -> str:
    return f"""<!DOCTYPE html>
<html lang=\"en\">
<head>
    <meta charset=\"utf-8\">
    <title>{html.escape(title)}</title>
    <style>
        body {{ font-family: Arial, sans-serif; margin: 2rem; background: #f5f7fa; }}
        main {{ background: #fff; padding: 2rem; border-radius: 12px; box-shadow: 0 2px 6px rgba(0,0,0,0.08); }}
        nav a {{ margin-right: 1rem; color: #2563eb; text-decoration: none; }}
        table {{ border-collapse: collapse; width: 100%; margin-bottom: 1.5rem; }}
        th, td {{ border: 1px solid #e2e8f0; padding: 0.4rem 0.6rem; text-align: left; }}
        th {{ background: #f1f5f9; }}
        .muted {{ color: #64748b; }}
    </style>
</head>
<body>
    <main>
        <nav><a href=\"/ui\">Teams</a></nav>
        <h1>{html.escape(title)}</h1>
        {body}
    </main>
</body>
</html>"""


def _render_teams_page(teams: list[Team]) -> str:
    if not teams:
        return _render_page("Depth charts", "<p class=\"muted\">No teams loaded.</p>")
    items = "\n".join(
        f"<li><a href=\"/ui/{html.escape(team.id)}\">{html.escape(team.name)}</a>"
        f" <span class=\"muted\">{html.escape(team.league)}</span></li>"
        for team in teams
    )
    return _render_page("Depth charts", f"<ul>{items}</ul>")


def _render_chart_page(team_id: str, league: str, chart: GroupedChart) -> str:
    if not chart:
        return _render_page(f"{team_id} depth chart", "<p class=\"muted\">No players ranked yet.</p>")
    depth = max(len(entry.players) for entries in chart.values() for entry in entries)
    header = "".join(f"<th>{'Starter' if slot == 0 else f'Depth {slot}'}</th>" for slot in range(depth))
    sections = []
    for group, entries in chart.items():
        rows = []
        for entry in entries:
            cells = "".join(f"<td>#{p.number} {html.escape(p.name)}</td>" for p in entry.players)
            cells += "<td></td>" * (depth - len(entry.players))
            rows.append(f"<tr><th title=\"{html.escape(entry.name)}\">{html.escape(entry.position)}</th>{cells}</tr>")
        sections.append(
            f"<h2>{html.escape(group)}</h2>"
            f"<table><thead><tr><th>Position</th>{header}</tr></thead><tbody>{''.join(rows)}</tbody></table>"
        )
    return _render_page(f"{team_id} depth chart ({league})", "\n".join(sections))


def create_app(settings: Settings | None = None, storage: SnapshotStore | None = None) -> FastAPI:
    settings = settings or Settings.from_env()
    storage = storage or settings.open_storage()
    if settings.seed != "none":
        seed_storage(storage, sample=settings.seed == "sample")
    service = DepthChartService.from_storage(storage)

    app = FastAPI(title="depthchart")
    app.state.settings = settings
    app.state.storage = storage
    app.state.service = service

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        path = request.url.path
        if path.startswith(_UNLOGGED_PATHS):
            return await call_next(request)
        started = time.perf_counter()
        logger.info("Request %s %s started", request.method, path)
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            elapsed_ms = (time.perf_counter() - started) * 1000
            level = logging.WARNING if status_code >= 400 else logging.INFO
            logger.log(
                level,
                "Request %s %s completed with %s in %.1fms",
                request.method,
                path,
                status_code,
                elapsed_ms,
            )

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
        return _error(400, str(exc), exc.field)

    @app.exception_handler(StorageError)
    async def handle_storage_error(request: Request, exc: StorageError) -> JSONResponse:
        logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc)
        return _error(500, "An internal storage error occurred. Please try again later.")

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        first = errors[0] if errors else {}
        field = _request_error_field(tuple(first.get("loc", ())))
        message = first.get("msg", "Invalid request.")
        return _error(400, f"{field} {message}" if field else message, field)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error(500, "An unexpected error occurred. Please try again later.")

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}

    @app.get("/api/teams", response_model=list[TeamResponse])
    async def list_teams() -> list[TeamResponse]:
        return [TeamResponse.model_validate(team.model_dump()) for team in service.list_teams()]

    @app.get("/api/positions", response_model=list[PositionResponse])
    async def list_positions(league: str = Query(settings.default_league)) -> list[PositionResponse]:
        return [PositionResponse.model_validate(p.model_dump()) for p in service.list_positions(league)]

    @app.put("/api/players", response_model=MessageResponse)
    async def upsert_player(payload: PlayerPayload) -> MessageResponse:
        service.upsert_player(Player(team_id=payload.team_id or "", number=payload.number, name=payload.name))
        return MessageResponse(message="Player saved successfully")

    @app.post("/api/depthchart/{team_id}/players", response_model=MessageResponse)
    async def add_player(team_id: str, request: AddPlayerRequest) -> MessageResponse:
        player = Player(team_id=team_id, number=request.player.number, name=request.player.name)
        service.add_player(team_id, request.position, player, request.position_depth)
        return MessageResponse(message="Player added successfully")

    @app.delete(
        "/api/depthchart/{team_id}/positions/{position}/players/{player_number}",
        response_model=PlayerResponse,
    )
    async def remove_player(team_id: str, position: str, player_number: int) -> PlayerResponse | JSONResponse:
        removed = service.remove_player(team_id, position, player_number)
        if removed is None:
            return _error(404, "Player not found in depth chart at this position")
        return PlayerResponse.from_player(removed)

    @app.get(
        "/api/depthchart/{team_id}/positions/{position}/players/{player_number}/backups",
        response_model=list[PlayerResponse],
    )
    async def get_backups(team_id: str, position: str, player_number: int) -> list[PlayerResponse]:
        return [PlayerResponse.from_player(p) for p in service.get_backups(team_id, position, player_number)]

    @app.get("/api/depthchart/{team_id}/depthchart")
    async def get_full_chart(team_id: str, league: str = Query(settings.default_league)) -> dict[str, Any]:
        chart = service.get_full_chart(team_id, league)
        return {
            group: [PositionChartResponse.from_chart(entry).model_dump() for entry in positions]
            for group, positions in chart.items()
        }

    @app.get("/api/depthchart/{team_id}/positions")
    async def get_raw_chart(team_id: str) -> dict[str, list[PlayerResponse]]:
        chart = service.get_raw_chart(team_id)
        return {position: [PlayerResponse.from_player(p) for p in players] for position, players in chart.items()}

    @app.get("/api/teams/{team_id}/players", response_model=list[PlayerResponse])
    async def list_players(team_id: str) -> list[PlayerResponse]:
        return [PlayerResponse.from_player(p) for p in service.list_players(team_id)]

    @app.get("/ui", response_class=HTMLResponse)
    async def ui_index() -> HTMLResponse:
        return HTMLResponse(_render_teams_page(service.list_teams()))

    @app.get("/ui/{team_id}", response_class=HTMLResponse)
    async def ui_team_chart(team_id: str, league: str = Query(settings.default_league)) -> HTMLResponse:
        chart = service.get_full_chart(team_id, league)
        return HTMLResponse(_render_chart_page(team_id.strip().upper(), league.strip().upper(), chart))

    return app
