from datetime import date

import numpy as np

from timeledger.ranges import (
    compute_gaps,
    day_segments,
    gaps,
    is_occupied,
    merge,
    occupancy,
    overlaps,
    time_options,
)
from timeledger.schema import TimeLog


def _gap_mask(spans):
    mask = np.zeros(48, dtype=bool)
    for start, end in spans:
        mask[start:end] = True
    return mask


def test_gaps_between_entries():
    existing = [("00:00", "06:00"), ("12:00", "13:00")]
    assert gaps(existing) == [(12, 24), (26, 48)]
    assert [(gap["start"], gap["end"]) for gap in compute_gaps(existing)] == [("06:00", "12:00"), ("13:00", "24:00")]
    assert compute_gaps(existing)[0]["label"] == "06:00 - 12:00"


def test_gaps_empty_and_full_day():
    assert gaps([]) == [(0, 48)]
    assert gaps([("00:00", "24:00")]) == []


def test_gaps_and_union_partition_the_day():
    cases = [
        [],
        [(0, 48)],
        [(3, 5), (10, 20), (20, 21), (47, 48)],
        [(0, 1), (46, 48)],
        [(12, 24), (0, 6)],
    ]
    for existing in cases:
        taken = occupancy(existing)
        free = _gap_mask(gaps(existing))
        assert not np.any(taken & free)
        assert np.all(taken | free)


def test_overlapping_input_never_yields_bad_gaps():
    spans = gaps([(2, 10), (4, 6), (8, 12)])
    assert spans == [(0, 2), (12, 48)]
    assert all(start < end for start, end in spans)


def test_overlaps_half_open_and_symmetric():
    pairs = [((18, 20), (20, 22)), ((18, 20), (19, 21)), ((0, 48), (10, 11)), ((5, 6), (6, 7)), ((5, 7), (6, 7))]
    for a, b in pairs:
        assert overlaps([a], *b) == overlaps([b], *a)
    assert not overlaps([("09:00", "10:00")], "10:00", "11:00")
    assert overlaps([("09:00", "10:00")], "09:30", "10:30")


def test_merge_joins_adjacent_and_overlapping():
    assert merge([(2, 4), (0, 2), (3, 6), (10, 12)]) == [(0, 6), (10, 12)]


def test_day_segments_alternate_occupied_and_free():
    segments = day_segments([("00:00", "06:00"), ("12:00", "13:00")])
    assert [(s["start"], s["end"], s["occupied"]) for s in segments] == [
        ("00:00", "06:00", True),
        ("06:00", "12:00", False),
        ("12:00", "13:00", True),
        ("13:00", "24:00", False),
    ]


def test_occupied_markers_accept_time_logs():
    log = TimeLog("l1", "u1", date(2025, 3, 12), "09:00", "10:00", "act_1", "sat_1")
    assert is_occupied([log], "09:00")
    assert is_occupied([log], "09:30")
    assert not is_occupied([log], "10:00")

    options = {option["time"]: option["occupied"] for option in time_options([log])}
    assert len(options) == 49
    assert options["09:30"] is True
    assert options["10:00"] is False


def test_empty_interval_does_not_split_a_gap():
    assert gaps([("10:00", "10:00")]) == [(0, 48)]
    assert gaps([(10, 10), (20, 24)]) == [(0, 20), (24, 48)]
