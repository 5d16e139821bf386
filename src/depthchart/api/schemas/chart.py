from __future__ import annotations

from datetime import datetime, timezone
from typing import List

from pydantic import BaseModel, Field

from depthchart.chart import PositionChart
from depthchart.models import Player


class PlayerPayload(BaseModel):
    number: int
    name: str = ""
    team_id: str | None = None


class AddPlayerRequest(BaseModel):
    position: str = ""
    player: PlayerPayload
    position_depth: int | None = None


class PlayerResponse(BaseModel):
    team_id: str
    number: int
    name: str

    @classmethod
    def from_player(cls, player: Player) -> "PlayerResponse":
        return cls(team_id=player.team_id, number=player.number, name=player.name)


class PositionChartResponse(BaseModel):
    position: str
    name: str
    players: List[PlayerResponse]

    @classmethod
    def from_chart(cls, chart: PositionChart) -> "PositionChartResponse":
        return cls(
            position=chart.position,
            name=chart.name,
            players=[PlayerResponse.from_player(player) for player in chart.players],
        )


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    message: str
    status_code: int
    field: str | None = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
