"""Configuration helpers for league position taxonomies."""

from .positions import (
    OTHER_GROUP,
    OTHER_SORT_ORDER,
    PositionCatalog,
    iter_default_positions,
    other_position,
    position_sort_key,
)

__all__ = [
    "OTHER_GROUP",
    "OTHER_SORT_ORDER",
    "PositionCatalog",
    "iter_default_positions",
    "other_position",
    "position_sort_key",
]
