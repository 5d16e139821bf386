"""Player directory: (team, jersey number) to display attributes."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from pydantic import ValidationError as PydanticValidationError

from depthchart.models import Player, player_key
from depthchart.persistence import PLAYERS_RESOURCE, SnapshotStore, StorageError


logger = logging.getLogger(__name__)


def placeholder_player(team_id: str, number: int) -> Player:
    """Stand-in for a ranked player with no directory record."""

    return Player(team_id=team_id, number=number, name=f"Player #{number}")


class PlayerDirectory:
    def __init__(self, storage: SnapshotStore):
        self.storage = storage

    def _load(self) -> Dict[str, Player]:
        raw = self.storage.load(PLAYERS_RESOURCE)
        if raw is None:
            return {}
        if not isinstance(raw, list):
            raise StorageError(PLAYERS_RESOURCE, "expected a list of players")
        try:
            players = [Player.model_validate(item) for item in raw]
        except PydanticValidationError as exc:
            raise StorageError(PLAYERS_RESOURCE, f"invalid player record: {exc}") from exc
        return {player.key: player for player in players}

    def _save(self, players: Dict[str, Player]) -> None:
        ordered = sorted(players.values(), key=lambda p: (p.team_id, p.number))
        self.storage.save(PLAYERS_RESOURCE, [player.model_dump() for player in ordered])

    def upsert(self, player: Player) -> None:
        with self.storage.locked():
            players = self._load()
            existed = player.key in players
            players[player.key] = player
            self._save(players)
        logger.info("%s player %s #%s (%s)", "Updated" if existed else "Added", player.team_id, player.number, player.name)

    def get(self, team_id: str, number: int) -> Optional[Player]:
        with self.storage.locked():
            return self._load().get(player_key(team_id, number))

    def resolve(self, team_id: str, number: int) -> Player:
        """Directory record for the player, or a placeholder when unknown."""

        found = self.get(team_id, number)
        return found if found is not None else placeholder_player(team_id, number)

    def resolve_many(self, team_id: str, numbers: Iterable[int]) -> List[Player]:
        """Resolve several numbers against a single directory snapshot."""

        with self.storage.locked():
            players = self._load()
        resolved: List[Player] = []
        for number in numbers:
            found = players.get(player_key(team_id, number))
            resolved.append(found if found is not None else placeholder_player(team_id, number))
        return resolved

    def players_for_team(self, team_id: str) -> List[Player]:
        with self.storage.locked():
            players = self._load()
        return sorted((p for p in players.values() if p.team_id == team_id), key=lambda p: p.number)
