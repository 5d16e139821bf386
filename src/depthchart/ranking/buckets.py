"""Depth-ordered bucket algorithms.

A bucket is the list of :class:`RankEntry` for one (team, position) pair,
sorted by depth, with depths exactly ``0..len(bucket) - 1`` and at most one
entry per player number. Every function here takes a valid bucket and
returns a new valid bucket; inputs are never mutated.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple

from depthchart.models import RankEntry


Bucket = List[RankEntry]


def clamp_depth(requested: Optional[int], size: int) -> int:
    """Target depth for an insert into a bucket of ``size`` entries."""

    if requested is None:
        return size
    return max(0, min(requested, size))


def find_entry(bucket: Sequence[RankEntry], player_number: int) -> Optional[RankEntry]:
    for entry in bucket:
        if entry.player_number == player_number:
            return entry
    return None


def remove_entry(bucket: Sequence[RankEntry], player_number: int) -> Tuple[Bucket, Optional[RankEntry]]:
    """Drop ``player_number`` and close its slot.

    Returns the new bucket and the removed entry (None when the player was not
    in the bucket, in which case the bucket is returned unchanged).
    """

    removed = find_entry(bucket, player_number)
    if removed is None:
        return list(bucket), None

    remaining: Bucket = []
    for entry in bucket:
        if entry.player_number == player_number:
            continue
        if entry.depth > removed.depth:
            entry = RankEntry(player_number=entry.player_number, depth=entry.depth - 1)
        remaining.append(entry)
    remaining.sort(key=lambda e: e.depth)
    return remaining, removed


def insert_entry(
    bucket: Sequence[RankEntry],
    player_number: int,
    requested_depth: Optional[int] = None,
) -> Tuple[Bucket, RankEntry]:
    """Place ``player_number`` at ``requested_depth`` (clamped), moving it if present."""

    working, _ = remove_entry(bucket, player_number)
    target = clamp_depth(requested_depth, len(working))

    shifted: Bucket = []
    for entry in working:
        if entry.depth >= target:
            entry = RankEntry(player_number=entry.player_number, depth=entry.depth + 1)
        shifted.append(entry)

    inserted = RankEntry(player_number=player_number, depth=target)
    shifted.append(inserted)
    shifted.sort(key=lambda e: e.depth)
    return shifted, inserted


def entries_behind(bucket: Sequence[RankEntry], player_number: int) -> Bucket:
    """Entries strictly deeper than ``player_number``; empty when it is absent."""

    anchor = find_entry(bucket, player_number)
    if anchor is None:
        return []
    return sorted((e for e in bucket if e.depth > anchor.depth), key=lambda e: e.depth)


def is_contiguous(bucket: Sequence[RankEntry]) -> bool:
    depths = sorted(entry.depth for entry in bucket)
    numbers = {entry.player_number for entry in bucket}
    return depths == list(range(len(bucket))) and len(numbers) == len(bucket)


def normalize_bucket(entries: Iterable[RankEntry]) -> Bucket:
    """Rebuild a valid bucket from possibly gapped or duplicated entries.

    Relative order by depth is kept (ties keep input order); a repeated player
    keeps its shallowest slot.
    """

    ordered = sorted(enumerate(entries), key=lambda item: (item[1].depth, item[0]))
    seen: set[int] = set()
    bucket: Bucket = []
    for _, entry in ordered:
        if entry.player_number in seen:
            continue
        seen.add(entry.player_number)
        bucket.append(RankEntry(player_number=entry.player_number, depth=len(bucket)))
    return bucket
