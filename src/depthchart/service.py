"""Depth chart service: validation, normalization and orchestration."""

from __future__ import annotations

import logging
import re
from typing import Dict, List, Optional

from depthchart.chart import ChartAssembler, GroupedChart
from depthchart.directory import PlayerDirectory
from depthchart.models import Player, PositionMetadata, Team
from depthchart.persistence import SnapshotStore
from depthchart.ranking import RankingStore
from depthchart.reference import ReferenceData


logger = logging.getLogger(__name__)


class ValidationError(ValueError):
    """Caller input violates a precondition; ``field`` names the offending input."""

    def __init__(self, field: str, message: str):
        super().__init__(f"{field} {message}")
        self.field = field


def normalize_code(value: str) -> str:
    return value.strip().upper()


def _require_text(value: Optional[str], field: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(field, "cannot be empty.")
    return str(value)


def _require_number(value: Optional[int], field: str) -> int:
    if value is None or isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(field, "must be an integer.")
    if value < 0:
        raise ValidationError(field, "must be a non-negative number.")
    return value


_TEAM_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")


def _require_team(value: Optional[str], field: str = "team_id") -> str:
    team = normalize_code(_require_text(value, field))
    if not _TEAM_ID_PATTERN.match(team):
        raise ValidationError(field, "may only contain letters, digits, '-' or '_'.")
    return team


class DepthChartService:
    """Entry point used by the API and CLI.

    Holds no state of its own: the ranking store, directory and reference
    data are injected and share one storage instance.
    """

    def __init__(
        self,
        rankings: RankingStore,
        directory: PlayerDirectory,
        reference: ReferenceData,
    ):
        self.rankings = rankings
        self.directory = directory
        self.reference = reference

    @classmethod
    def from_storage(cls, storage: SnapshotStore) -> "DepthChartService":
        return cls(RankingStore(storage), PlayerDirectory(storage), ReferenceData(storage))

    def add_player(
        self,
        team_id: str,
        position: str,
        player: Player,
        position_depth: Optional[int] = None,
    ) -> None:
        """Upsert ``player`` and place it at ``position`` (moving it if already ranked)."""

        team = _require_team(team_id)
        code = normalize_code(_require_text(position, "position"))
        number = _require_number(player.number, "player.number")
        name = _require_text(player.name, "player.name").strip()
        if position_depth is not None and (isinstance(position_depth, bool) or not isinstance(position_depth, int)):
            raise ValidationError("position_depth", "must be an integer.")

        record = Player(team_id=team, number=number, name=name)
        with self.rankings.storage.locked():
            self.directory.upsert(record)
            self.rankings.insert(team, code, number, position_depth)

    def upsert_player(self, player: Player) -> None:
        team = _require_team(player.team_id, "player.team_id")
        number = _require_number(player.number, "player.number")
        name = _require_text(player.name, "player.name").strip()
        self.directory.upsert(Player(team_id=team, number=number, name=name))

    def remove_player(self, team_id: str, position: str, player_number: int) -> Optional[Player]:
        """Remove a player from a position; None when it was not ranked there."""

        team = _require_team(team_id)
        code = normalize_code(_require_text(position, "position"))
        number = _require_number(player_number, "player_number")

        removed = self.rankings.remove(team, code, number)
        if removed is None:
            logger.info("Player #%s not found at %s/%s", number, team, code)
            return None
        return self.directory.resolve(team, removed.player_number)

    def get_backups(self, team_id: str, position: str, player_number: int) -> List[Player]:
        team = _require_team(team_id)
        code = normalize_code(_require_text(position, "position"))
        number = _require_number(player_number, "player_number")

        entries = self.rankings.backups(team, code, number)
        return self.directory.resolve_many(team, [entry.player_number for entry in entries])

    def get_raw_chart(self, team_id: str) -> Dict[str, List[Player]]:
        team = _require_team(team_id)
        with self.rankings.storage.locked():
            raw = self.rankings.full_chart(team)
            return {position: self.directory.resolve_many(team, numbers) for position, numbers in raw.items()}

    def get_full_chart(self, team_id: str, league: str) -> GroupedChart:
        """Team chart grouped by the league's position groups."""

        team = _require_team(team_id)
        league_code = normalize_code(_require_text(league, "league"))

        assembler = ChartAssembler(self.reference.position_catalog(), self.directory.resolve_many)
        with self.rankings.storage.locked():
            raw = self.rankings.full_chart(team)
            return assembler.assemble(team, league_code, raw)

    def list_teams(self) -> List[Team]:
        return self.reference.teams()

    def list_players(self, team_id: str) -> List[Player]:
        """Directory records for a team, ranked or not, by jersey number."""

        return self.directory.players_for_team(_require_team(team_id))

    def list_positions(self, league: str) -> List[PositionMetadata]:
        league_code = normalize_code(_require_text(league, "league"))
        return self.reference.position_catalog().for_league(league_code)
