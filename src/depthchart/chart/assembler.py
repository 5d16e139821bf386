"""Group a raw team chart by league position taxonomy."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Mapping, Sequence, Tuple

from depthchart.config import PositionCatalog
from depthchart.models import Player, PositionMetadata


@dataclass(frozen=True)
class PositionChart:
    position: str
    name: str
    sort_order: int
    players: Tuple[Player, ...]


GroupedChart = Dict[str, List[PositionChart]]
ResolvePlayers = Callable[[str, Iterable[int]], List[Player]]

_Slot = Tuple[str, PositionMetadata, Sequence[int]]


class ChartAssembler:
    """Joins ranking output with the position catalog and player directory.

    Output maps group label to positions sorted by ``(sort_order, code)``.
    Groups are ordered by the smallest sort order they hold, then label, so
    repeated calls on unchanged input produce identical results.
    """

    def __init__(self, catalog: PositionCatalog, resolve_players: ResolvePlayers):
        self.catalog = catalog
        self.resolve_players = resolve_players

    def assemble(self, team_id: str, league: str, raw_chart: Mapping[str, Sequence[int]]) -> GroupedChart:
        grouped: Dict[str, List[_Slot]] = {}
        labels: Dict[str, str] = {}
        for code, numbers in raw_chart.items():
            metadata = self.catalog.metadata_for(league, code)
            group_key = metadata.group.casefold()
            labels.setdefault(group_key, metadata.group)
            grouped.setdefault(group_key, []).append((code, metadata, numbers))

        def slot_order(slot: _Slot) -> Tuple[int, str]:
            code, metadata, _ = slot
            return metadata.sort_order, code.casefold()

        def group_order(group_key: str) -> Tuple[int, str]:
            return min(metadata.sort_order for _, metadata, _ in grouped[group_key]), group_key

        result: GroupedChart = {}
        for group_key in sorted(grouped, key=group_order):
            result[labels[group_key]] = [
                PositionChart(
                    position=code,
                    name=metadata.name,
                    sort_order=metadata.sort_order,
                    players=tuple(self.resolve_players(team_id, numbers)),
                )
                for code, metadata, numbers in sorted(grouped[group_key], key=slot_order)
            ]
        return result
