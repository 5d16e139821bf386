"""Ranking engine: contiguous depth buckets per (team, position)."""

from .buckets import (
    Bucket,
    clamp_depth,
    entries_behind,
    find_entry,
    insert_entry,
    is_contiguous,
    normalize_bucket,
    remove_entry,
)
from .store import RankingStore

__all__ = [
    "Bucket",
    "RankingStore",
    "clamp_depth",
    "entries_behind",
    "find_entry",
    "insert_entry",
    "is_contiguous",
    "normalize_bucket",
    "remove_entry",
]
