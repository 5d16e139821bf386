"""Seed reference data and a sample chart into empty storage."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from depthchart.config import iter_default_positions
from depthchart.models import Player, Team
from depthchart.persistence import POSITIONS_RESOURCE, TEAMS_RESOURCE, PLAYERS_RESOURCE, SnapshotStore
from depthchart.ranking import RankingStore


logger = logging.getLogger(__name__)

DEFAULT_TEAMS: Tuple[Team, ...] = (
    Team(id="TB", name="Tampa Bay Buccaneers", league="NFL"),
    Team(id="NE", name="New England Patriots", league="NFL"),
    Team(id="KC", name="Kansas City Chiefs", league="NFL"),
    Team(id="GB", name="Green Bay Packers", league="NFL"),
    Team(id="BUF", name="Buffalo Bills", league="NFL"),
    Team(id="LAR", name="Los Angeles Rams", league="NFL"),
    Team(id="DAL", name="Dallas Cowboys", league="NFL"),
    Team(id="SF", name="San Francisco 49ers", league="NFL"),
)

DEFAULT_PLAYERS: Tuple[Player, ...] = (
    Player(team_id="TB", number=12, name="Tom Brady"),
    Player(team_id="TB", number=11, name="Blaine Gabbert"),
    Player(team_id="TB", number=2, name="Kyle Trask"),
    Player(team_id="TB", number=13, name="Mike Evans"),
    Player(team_id="TB", number=14, name="Chris Godwin"),
    Player(team_id="TB", number=1, name="Jaelon Darden"),
    Player(team_id="TB", number=10, name="Scott Miller"),
    Player(team_id="TB", number=7, name="Leonard Fournette"),
    Player(team_id="TB", number=27, name="Ronald Jones II"),
    Player(team_id="TB", number=87, name="Rob Gronkowski"),
    Player(team_id="TB", number=84, name="Cameron Brate"),
    Player(team_id="TB", number=45, name="Devin White"),
    Player(team_id="TB", number=54, name="Lavonte David"),
    Player(team_id="TB", number=24, name="Carlton Davis"),
    Player(team_id="TB", number=23, name="Sean Murphy-Bunting"),
    Player(team_id="TB", number=3, name="Ryan Succop"),
    Player(team_id="TB", number=8, name="Bradley Pinion"),
    Player(team_id="NE", number=12, name="Mac Jones"),
    Player(team_id="NE", number=1, name="Cam Newton"),
    Player(team_id="NE", number=87, name="Rob Gronkowski"),
    Player(team_id="KC", number=15, name="Patrick Mahomes"),
    Player(team_id="KC", number=87, name="Travis Kelce"),
)

# (position, player number) in depth order.
SAMPLE_CHARTS: dict[str, Sequence[Tuple[str, int]]] = {
    "TB": (
        ("QB", 12), ("QB", 11), ("QB", 2),
        ("LWR", 13), ("LWR", 1), ("LWR", 10),
        ("RB", 7), ("RB", 27),
        ("TE", 87), ("TE", 84),
        ("LB", 45), ("LB", 54),
        ("CB", 24), ("CB", 23),
        ("K", 3),
        ("P", 8),
    ),
}
_PLACEHOLDER_SLOT = ("QB", 1)


@dataclass
class SeedReport:
    created_resources: List[str] = field(default_factory=list)
    seeded_teams: List[str] = field(default_factory=list)
    skipped_teams: List[str] = field(default_factory=list)


def seed_reference_data(storage: SnapshotStore, report: SeedReport | None = None) -> SeedReport:
    """Write the default catalog, teams and players where missing."""

    report = report or SeedReport()
    defaults = {
        POSITIONS_RESOURCE: [p.model_dump() for p in iter_default_positions()],
        TEAMS_RESOURCE: [t.model_dump() for t in DEFAULT_TEAMS],
        PLAYERS_RESOURCE: [p.model_dump() for p in sorted(DEFAULT_PLAYERS, key=lambda p: (p.team_id, p.number))],
    }
    with storage.locked():
        for resource, payload in defaults.items():
            if storage.load(resource) is not None:
                continue
            logger.info("Creating %s snapshot...", resource)
            storage.save(resource, payload)
            report.created_resources.append(resource)
    return report


def seed_sample_charts(storage: SnapshotStore, report: SeedReport | None = None) -> SeedReport:
    """Seed a chart for every known team that has none yet."""

    report = report or SeedReport()
    rankings = RankingStore(storage)
    teams = storage.load(TEAMS_RESOURCE) or []
    for item in teams:
        team = Team.model_validate(item)
        with storage.locked():
            if rankings.full_chart(team.id):
                logger.info("%s depth chart already exists, skipping seed", team.name)
                report.skipped_teams.append(team.id)
                continue
            logger.info("Seeding %s depth chart...", team.name)
            slots = SAMPLE_CHARTS.get(team.id, (_PLACEHOLDER_SLOT,))
            for position, number in slots:
                rankings.insert(team.id, position, number)
        report.seeded_teams.append(team.id)
    return report


def seed_storage(storage: SnapshotStore, *, sample: bool = True) -> SeedReport:
    """Seed reference data, plus sample charts when ``sample`` is set."""

    logger.info("Starting data seeding...")
    report = seed_reference_data(storage)
    if sample:
        seed_sample_charts(storage, report)
    logger.info(
        "Data seeding completed: %s new resources, %s teams seeded",
        len(report.created_resources),
        len(report.seeded_teams),
    )
    return report

