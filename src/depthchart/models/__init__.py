"""Domain models shared by the ranking store, directory and API layers."""

from .player import Player, PositionMetadata, RankEntry, Team, player_key

__all__ = ["Player", "PositionMetadata", "RankEntry", "Team", "player_key"]
