import pytest
from pydantic import ValidationError

from depthchart.models import Player, RankEntry, player_key


def test_player_is_frozen():
    player = Player(team_id="TB", number=12, name="Tom Brady")

    assert player.key == "TB_12"

    with pytest.raises((TypeError, ValidationError)):
        player.number = 13  # type: ignore[misc]


def test_player_key_matches_model_key():
    assert player_key("NE", 87) == Player(team_id="NE", number=87, name="Rob Gronkowski").key


def test_rank_entry_rejects_negative_depth():
    with pytest.raises(ValidationError):
        RankEntry(player_number=12, depth=-1)
