import random

from depthchart.models import RankEntry
from depthchart.ranking import (
    clamp_depth,
    entries_behind,
    insert_entry,
    is_contiguous,
    normalize_bucket,
    remove_entry,
)


def _order(bucket):
    return [entry.player_number for entry in bucket]


def _build(*numbers):
    bucket = []
    for number in numbers:
        bucket, _ = insert_entry(bucket, number)
    return bucket


def test_clamp_depth():
    assert clamp_depth(None, 3) == 3
    assert clamp_depth(-4, 3) == 0
    assert clamp_depth(99, 3) == 3
    assert clamp_depth(1, 3) == 1


def test_insert_appends_without_depth():
    bucket = _build(12, 11, 2)
    assert _order(bucket) == [12, 11, 2]
    assert [e.depth for e in bucket] == [0, 1, 2]


def test_insert_at_depth_shifts_deeper_entries():
    bucket, inserted = insert_entry(_build(12, 11, 2), 99, 1)
    assert inserted == RankEntry(player_number=99, depth=1)
    assert _order(bucket) == [12, 99, 11, 2]
    assert is_contiguous(bucket)


def test_insert_existing_player_moves_it():
    bucket, inserted = insert_entry(_build(12, 11, 2), 2, 0)
    assert _order(bucket) == [2, 12, 11]
    assert inserted.depth == 0
    assert len(bucket) == 3


def test_reinsert_without_depth_moves_to_end():
    bucket, inserted = insert_entry(_build(12, 11, 2), 12)
    assert _order(bucket) == [11, 2, 12]
    assert inserted.depth == 2


def test_insert_does_not_mutate_input():
    original = _build(12, 11)
    snapshot = list(original)
    insert_entry(original, 99, 0)
    assert original == snapshot


def test_remove_closes_gap():
    bucket, removed = remove_entry(_build(12, 99, 11, 2), 99)
    assert removed == RankEntry(player_number=99, depth=1)
    assert _order(bucket) == [12, 11, 2]
    assert [e.depth for e in bucket] == [0, 1, 2]


def test_remove_missing_player_is_noop():
    start = _build(12, 11)
    bucket, removed = remove_entry(start, 7)
    assert removed is None
    assert bucket == start


def test_entries_behind():
    bucket = _build(12, 99, 11, 2)
    assert _order(entries_behind(bucket, 12)) == [99, 11, 2]
    assert _order(entries_behind(bucket, 11)) == [2]
    assert entries_behind(bucket, 2) == []
    assert entries_behind(bucket, 55) == []


def test_normalize_bucket_repairs_gaps_and_duplicates():
    raw = [
        RankEntry(player_number=5, depth=4),
        RankEntry(player_number=7, depth=0),
        RankEntry(player_number=5, depth=9),
        RankEntry(player_number=8, depth=2),
    ]
    bucket = normalize_bucket(raw)
    assert _order(bucket) == [7, 8, 5]
    assert is_contiguous(bucket)


def test_is_contiguous_detects_problems():
    assert is_contiguous([])
    assert not is_contiguous([RankEntry(player_number=1, depth=1)])
    assert not is_contiguous([RankEntry(player_number=1, depth=0), RankEntry(player_number=1, depth=1)])


def test_random_operations_keep_buckets_contiguous():
    rng = random.Random(1234)
    bucket = []
    for _ in range(500):
        number = rng.randint(0, 15)
        if rng.random() < 0.6:
            depth = rng.choice([None, rng.randint(-3, len(bucket) + 3)])
            before = len(bucket)
            present = any(e.player_number == number for e in bucket)
            bucket, inserted = insert_entry(bucket, number, depth)
            assert len(bucket) == before + (0 if present else 1)
            assert bucket[inserted.depth].player_number == number
        else:
            before = {e.player_number: e.depth for e in bucket}
            bucket, removed = remove_entry(bucket, number)
            if removed is not None:
                for entry in bucket:
                    old = before[entry.player_number]
                    expected = old - 1 if old > removed.depth else old
                    assert entry.depth == expected
        assert is_contiguous(bucket)
