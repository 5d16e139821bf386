from depthchart.directory import PlayerDirectory, placeholder_player
from depthchart.models import Player
from depthchart.persistence import PLAYERS_RESOURCE


def test_upsert_and_get(storage):
    directory = PlayerDirectory(storage)
    directory.upsert(Player(team_id="TB", number=12, name="Tom Brady"))
    directory.upsert(Player(team_id="TB", number=12, name="Thomas Brady"))

    assert directory.get("TB", 12) == Player(team_id="TB", number=12, name="Thomas Brady")
    assert directory.get("NE", 12) is None
    assert len(storage.load(PLAYERS_RESOURCE)) == 1


def test_resolve_falls_back_to_placeholder(storage):
    directory = PlayerDirectory(storage)
    directory.upsert(Player(team_id="TB", number=12, name="Tom Brady"))

    assert directory.resolve("TB", 12).name == "Tom Brady"
    unknown = directory.resolve("TB", 44)
    assert unknown == placeholder_player("TB", 44)
    assert unknown.name == "Player #44"


def test_resolve_many_keeps_order(storage):
    directory = PlayerDirectory(storage)
    directory.upsert(Player(team_id="TB", number=11, name="Blaine Gabbert"))
    names = [p.name for p in directory.resolve_many("TB", [99, 11])]
    assert names == ["Player #99", "Blaine Gabbert"]


def test_players_for_team_sorted_by_number(storage):
    directory = PlayerDirectory(storage)
    for number, name in [(87, "Rob Gronkowski"), (12, "Tom Brady")]:
        directory.upsert(Player(team_id="TB", number=number, name=name))
    directory.upsert(Player(team_id="KC", number=15, name="Patrick Mahomes"))
    assert [p.number for p in directory.players_for_team("TB")] == [12, 87]
