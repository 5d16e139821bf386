"""Per-team ranking store built on snapshot storage."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError

from depthchart.models import RankEntry
from depthchart.persistence import SnapshotStore, StorageError, team_chart_resource
from depthchart.ranking.buckets import (
    Bucket,
    entries_behind,
    insert_entry,
    is_contiguous,
    normalize_bucket,
    remove_entry,
)


logger = logging.getLogger(__name__)

TeamChart = Dict[str, Bucket]


def _require(team_id: str, position: str, player_number: int | None = None) -> None:
    if not team_id or not team_id.strip():
        raise ValueError("team_id must be non-empty")
    if not position or not position.strip():
        raise ValueError("position must be non-empty")
    if player_number is not None and player_number < 0:
        raise ValueError("player_number must be non-negative")


class RankingStore:
    """Depth-ordered buckets keyed by (team, position).

    Every mutation loads the team's snapshot, rebuilds the affected bucket and
    saves the whole snapshot back while holding the storage lock, so readers
    only ever see complete, contiguous buckets.
    """

    def __init__(self, storage: SnapshotStore):
        self.storage = storage

    def _load_team(self, team_id: str) -> TeamChart:
        resource = team_chart_resource(team_id)
        raw = self.storage.load(resource)
        if raw is None:
            return {}
        if not isinstance(raw, dict):
            raise StorageError(resource, "expected a mapping of position to entries")
        chart: TeamChart = {}
        for position, entries in raw.items():
            try:
                parsed = [RankEntry.model_validate(item) for item in entries]
            except (PydanticValidationError, TypeError) as exc:
                raise StorageError(resource, f"invalid entries for {position}: {exc}") from exc
            if is_contiguous(parsed):
                bucket = sorted(parsed, key=lambda e: e.depth)
            else:
                logger.warning("Normalized stored %s bucket for team %s", position, team_id)
                bucket = normalize_bucket(parsed)
            if bucket:
                chart[position] = bucket
        return chart

    def _save_team(self, team_id: str, chart: TeamChart) -> None:
        payload: Dict[str, List[Dict[str, Any]]] = {
            position: [entry.model_dump() for entry in bucket]
            for position, bucket in chart.items()
            if bucket
        }
        self.storage.save(team_chart_resource(team_id), payload)

    def insert(
        self,
        team_id: str,
        position: str,
        player_number: int,
        requested_depth: Optional[int] = None,
    ) -> RankEntry:
        """Insert or move a player; returns the entry at its final depth."""

        _require(team_id, position, player_number)
        with self.storage.locked():
            chart = self._load_team(team_id)
            bucket, inserted = insert_entry(chart.get(position, []), player_number, requested_depth)
            chart[position] = bucket
            self._save_team(team_id, chart)
        if requested_depth is not None and requested_depth != inserted.depth:
            logger.info(
                "Clamped requested depth %s to %s for #%s at %s/%s",
                requested_depth,
                inserted.depth,
                player_number,
                team_id,
                position,
            )
        logger.info("Placed #%s at %s/%s depth %s", player_number, team_id, position, inserted.depth)
        return inserted

    def remove(self, team_id: str, position: str, player_number: int) -> Optional[RankEntry]:
        """Remove a player; returns the removed entry or None when absent."""

        _require(team_id, position, player_number)
        with self.storage.locked():
            chart = self._load_team(team_id)
            if position not in chart:
                return None
            bucket, removed = remove_entry(chart[position], player_number)
            if removed is None:
                return None
            chart[position] = bucket
            self._save_team(team_id, chart)
        logger.info("Removed #%s from %s/%s (was depth %s)", player_number, team_id, position, removed.depth)
        return removed

    def bucket(self, team_id: str, position: str) -> Bucket:
        _require(team_id, position)
        with self.storage.locked():
            return list(self._load_team(team_id).get(position, []))

    def backups(self, team_id: str, position: str, player_number: int) -> Bucket:
        """Entries ranked strictly behind ``player_number``, shallowest first."""

        _require(team_id, position, player_number)
        return entries_behind(self.bucket(team_id, position), player_number)

    def full_chart(self, team_id: str) -> Dict[str, List[int]]:
        """Player numbers per non-empty position, ordered by depth."""

        if not team_id or not team_id.strip():
            raise ValueError("team_id must be non-empty")
        with self.storage.locked():
            chart = self._load_team(team_id)
        return {position: [entry.player_number for entry in bucket] for position, bucket in chart.items()}
