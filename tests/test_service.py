import pytest

from depthchart.models import Player
from depthchart.persistence import team_chart_resource
from depthchart.seed import seed_reference_data
from depthchart.service import DepthChartService, ValidationError, normalize_code


@pytest.fixture
def service(storage) -> DepthChartService:
    seed_reference_data(storage)
    return DepthChartService.from_storage(storage)


def _brady() -> Player:
    return Player(number=12, name="Tom Brady")


def test_normalize_code():
    assert normalize_code(" qb ") == "QB"


def test_add_player_upserts_record_and_ranks(service):
    service.add_player("TB", "QB", Player(number=5, name="New Guy"), 0)

    assert service.directory.get("TB", 5) == Player(team_id="TB", number=5, name="New Guy")
    assert service.rankings.full_chart("TB") == {"QB": [5]}


@pytest.mark.parametrize("position", ["qb", " QB ", "Qb"])
def test_position_codes_address_one_bucket(service, position):
    service.add_player("TB", "QB", _brady(), 0)
    service.add_player("TB", position, Player(number=11, name="Blaine Gabbert"))

    assert service.rankings.full_chart("TB") == {"QB": [12, 11]}


def test_team_ids_are_normalized(service, storage):
    service.add_player("tb", "QB", _brady())
    assert storage.load(team_chart_resource("TB")) is not None
    assert [p.number for p in service.get_raw_chart("TB")["QB"]] == [12]


@pytest.mark.parametrize("team_id", ["", "  ", None])
def test_add_player_invalid_team(service, team_id):
    with pytest.raises(ValidationError) as info:
        service.add_player(team_id, "QB", _brady(), 0)
    assert info.value.field == "team_id"
    assert "team_id" in str(info.value)


@pytest.mark.parametrize("position", ["", "  ", None])
def test_add_player_invalid_position(service, position):
    with pytest.raises(ValidationError) as info:
        service.add_player("TB", position, _brady(), 0)
    assert info.value.field == "position"


def test_add_player_negative_number(service):
    with pytest.raises(ValidationError) as info:
        service.add_player("TB", "QB", Player(number=-1, name="Tom Brady"), 0)
    assert info.value.field == "player.number"


@pytest.mark.parametrize("name", ["", "   "])
def test_add_player_invalid_name(service, name):
    with pytest.raises(ValidationError) as info:
        service.add_player("TB", "QB", Player(number=12, name=name), 0)
    assert info.value.field == "player.name"


def test_validation_failure_leaves_state_untouched(service):
    service.add_player("TB", "QB", _brady(), 0)
    with pytest.raises(ValidationError):
        service.add_player("TB", "QB", Player(number=55, name=""), 0)
    assert service.rankings.full_chart("TB") == {"QB": [12]}
    assert service.directory.get("TB", 55) is None


def test_validation_error_is_value_error():
    assert issubclass(ValidationError, ValueError)


def test_remove_player_returns_directory_record(service):
    service.add_player("TB", "QB", _brady(), 0)
    removed = service.remove_player("TB", "qb", 12)
    assert removed == Player(team_id="TB", number=12, name="Tom Brady")
    assert service.rankings.full_chart("TB") == {}
    # Removal from the chart keeps the directory record.
    assert service.directory.get("TB", 12) is not None


def test_remove_player_not_found_is_none(service):
    assert service.remove_player("TB", "QB", 99) is None


def test_remove_player_validates_number(service):
    with pytest.raises(ValidationError) as info:
        service.remove_player("TB", "QB", -3)
    assert info.value.field == "player_number"


def test_get_backups_scenario(service):
    service.add_player("TB", "QB", _brady(), 0)
    service.add_player("TB", "QB", Player(number=11, name="Blaine Gabbert"), 1)
    service.add_player("TB", "QB", Player(number=2, name="Kyle Trask"), 2)
    service.add_player("TB", "QB", Player(number=99, name="Fourth String"), 1)

    backups = service.get_backups("TB", "QB", 12)
    assert [p.number for p in backups] == [99, 11, 2]
    assert [p.name for p in backups] == ["Fourth String", "Blaine Gabbert", "Kyle Trask"]
    assert service.get_backups("TB", "QB", 2) == []
    assert service.get_backups("TB", "QB", 55) == []


def test_backups_decorate_unknown_players(service):
    service.rankings.insert("TB", "QB", 12)
    service.rankings.insert("TB", "QB", 77)
    backups = service.get_backups("TB", "QB", 12)
    assert backups[0].name == "Player #77"


def test_get_full_chart_groups_by_league(service):
    service.add_player("TB", "K", Player(number=3, name="Ryan Succop"))
    service.add_player("TB", "qb", _brady())
    service.add_player("TB", "CB", Player(number=24, name="Carlton Davis"))
    service.add_player("TB", "wildcat", Player(number=7, name="Leonard Fournette"))

    chart = service.get_full_chart("TB", "nfl")

    assert list(chart) == ["Offense", "Defense", "Special Teams", "Other"]
    assert chart["Offense"][0].position == "QB"
    assert chart["Offense"][0].players[0].name == "Tom Brady"
    assert chart["Other"][0].position == "WILDCAT"
    assert service.get_full_chart("TB", "NFL") == chart


def test_get_full_chart_requires_league(service):
    with pytest.raises(ValidationError) as info:
        service.get_full_chart("TB", " ")
    assert info.value.field == "league"


def test_upsert_player_requires_team(service):
    with pytest.raises(ValidationError) as info:
        service.upsert_player(Player(number=12, name="Tom Brady"))
    assert info.value.field == "player.team_id"
    service.upsert_player(Player(team_id="tb", number=12, name=" Tom Brady "))
    assert service.directory.get("TB", 12).name == "Tom Brady"


def test_list_teams_and_positions(service):
    assert "TB" in {team.id for team in service.list_teams()}
    positions = service.list_positions("nfl")
    assert positions[0].code == "QB"


def test_list_teams_empty_storage(storage):
    assert DepthChartService.from_storage(storage).list_teams() == []


@pytest.mark.parametrize("team_id", ["A/B", "../TB", "T B"])
def test_team_id_must_be_a_plain_code(service, storage, team_id):
    with pytest.raises(ValidationError) as info:
        service.add_player(team_id, "QB", _brady(), 0)
    assert info.value.field == "team_id"
    assert storage.load(team_chart_resource(team_id)) is None


def test_out_of_range_position_depth_is_clamped(service):
    service.add_player("TB", "QB", _brady())
    service.add_player("TB", "QB", Player(number=11, name="Blaine Gabbert"))
    service.add_player("TB", "QB", Player(number=2, name="Kyle Trask"), -5)
    service.add_player("TB", "QB", Player(number=99, name="Fourth String"), 99)

    assert service.rankings.full_chart("TB") == {"QB": [2, 12, 11, 99]}


def test_list_players_includes_unranked_records(service):
    service.upsert_player(Player(team_id="tb", number=55, name="Practice Squad"))

    numbers = [p.number for p in service.list_players("tb")]
    assert numbers[:3] == [1, 2, 3]
    assert 55 in numbers
    assert numbers == sorted(numbers)
    assert service.rankings.full_chart("TB") == {}
