from __future__ import annotations

from pydantic import BaseModel


class TeamResponse(BaseModel):
    id: str
    name: str
    league: str


class PositionResponse(BaseModel):
    league: str
    code: str
    name: str
    group: str
    sort_order: int
