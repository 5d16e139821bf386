"""Position catalog for supported leagues."""

from __future__ import annotations

import sys
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from depthchart.models import PositionMetadata


OTHER_GROUP = "Other"
OTHER_SORT_ORDER = sys.maxsize


def _nfl(code: str, name: str, group: str, sort_order: int) -> PositionMetadata:
    return PositionMetadata(league="NFL", code=code, name=name, group=group, sort_order=sort_order)


_DEFAULT_POSITIONS: Dict[str, Tuple[PositionMetadata, ...]] = {
    "NFL": (
        _nfl("QB", "Quarterback", "Offense", 1),
        _nfl("RB", "Running Back", "Offense", 2),
        _nfl("FB", "Fullback", "Offense", 3),
        _nfl("LWR", "Left Wide Receiver", "Offense", 10),
        _nfl("RWR", "Right Wide Receiver", "Offense", 11),
        _nfl("SWR", "Slot Wide Receiver", "Offense", 12),
        _nfl("TE", "Tight End", "Offense", 15),
        _nfl("LT", "Left Tackle", "Offense", 20),
        _nfl("LG", "Left Guard", "Offense", 21),
        _nfl("C", "Center", "Offense", 22),
        _nfl("RG", "Right Guard", "Offense", 23),
        _nfl("RT", "Right Tackle", "Offense", 24),
        _nfl("DE", "Defensive End", "Defense", 30),
        _nfl("DT", "Defensive Tackle", "Defense", 31),
        _nfl("NT", "Nose Tackle", "Defense", 32),
        _nfl("OLB", "Outside Linebacker", "Defense", 35),
        _nfl("ILB", "Inside Linebacker", "Defense", 36),
        _nfl("LB", "Linebacker", "Defense", 37),
        _nfl("CB", "Cornerback", "Defense", 40),
        _nfl("RCB", "Right Cornerback", "Defense", 41),
        _nfl("FS", "Free Safety", "Defense", 45),
        _nfl("SS", "Strong Safety", "Defense", 46),
        _nfl("K", "Kicker", "Special Teams", 50),
        _nfl("PK", "Place Kicker", "Special Teams", 50),
        _nfl("P", "Punter", "Special Teams", 51),
        _nfl("PT", "Punter", "Special Teams", 51),
        _nfl("LS", "Long Snapper", "Special Teams", 52),
        _nfl("KR", "Kick Returner", "Special Teams", 53),
        _nfl("PR", "Punt Returner", "Special Teams", 54),
        _nfl("H", "Holder", "Special Teams", 55),
        _nfl("KO", "Kickoff Specialist", "Special Teams", 56),
    ),
}


def iter_default_positions() -> Iterable[PositionMetadata]:
    """Return an iterator over every built-in position across leagues."""

    for positions in _DEFAULT_POSITIONS.values():
        yield from positions


def other_position(code: str, league: str = "") -> PositionMetadata:
    """Metadata for a code the catalog does not know; sorts after everything."""

    return PositionMetadata(
        league=league,
        code=code,
        name=code,
        group=OTHER_GROUP,
        sort_order=OTHER_SORT_ORDER,
    )


def position_sort_key(position: PositionMetadata) -> Tuple[int, str]:
    return position.sort_order, position.code.casefold()


class PositionCatalog:
    """Read-only lookup of league position metadata.

    Codes and leagues match case-insensitively. The catalog is built once
    from a snapshot and never mutated afterwards.
    """

    def __init__(self, positions: Iterable[PositionMetadata] = ()):
        by_league: Dict[str, Dict[str, PositionMetadata]] = {}
        for position in positions:
            league_positions = by_league.setdefault(position.league.casefold(), {})
            league_positions.setdefault(position.code.casefold(), position)
        self._by_league: Mapping[str, Mapping[str, PositionMetadata]] = by_league

    @classmethod
    def defaults(cls) -> "PositionCatalog":
        return cls(iter_default_positions())

    def __len__(self) -> int:
        return sum(len(positions) for positions in self._by_league.values())

    def for_league(self, league: str) -> List[PositionMetadata]:
        positions = self._by_league.get(league.strip().casefold(), {})
        return sorted(positions.values(), key=position_sort_key)

    def lookup(self, league: str, code: str) -> Optional[PositionMetadata]:
        positions = self._by_league.get(league.strip().casefold())
        if not positions:
            return None
        return positions.get(code.strip().casefold())

    def metadata_for(self, league: str, code: str) -> PositionMetadata:
        """Catalog metadata for ``code``, or a synthetic "Other" entry."""

        found = self.lookup(league, code)
        if found is not None:
            return found
        return other_position(code, league)
