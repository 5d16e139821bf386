"""Canonical depth chart models."""

from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


def player_key(team_id: str, number: int) -> str:
    """Durable directory key for a (team, jersey number) identity."""

    return f"{team_id}_{number}"


class Player(BaseModel):
    """A player as known to the directory, identified by team and jersey number."""

    team_id: str = ""
    number: int
    name: str = ""

    model_config = ConfigDict(frozen=True)

    @property
    def key(self) -> str:
        return player_key(self.team_id, self.number)


class RankEntry(BaseModel):
    """One player's slot inside a (team, position) bucket."""

    player_number: int = Field(..., ge=0)
    depth: int = Field(..., ge=0)

    model_config = ConfigDict(frozen=True)


class PositionMetadata(BaseModel):
    league: str
    code: str
    name: str
    group: str
    sort_order: int

    model_config = ConfigDict(frozen=True)


class Team(BaseModel):
    id: str
    name: str
    league: str

    model_config = ConfigDict(frozen=True)
