"""Interval arithmetic over one day's half-hour slots.

Intervals are half-open ``(start, end)`` slot pairs. Entries may be given as
:class:`~timeledger.schema.TimeLog` records or as ``(start, end)`` pairs of
slot indices or ``HH:MM`` strings.
"""

from __future__ import annotations

from typing import Iterable, Optional

import numpy as np

from timeledger.clock import SLOTS_PER_DAY, as_slot, to_time, time_options as _all_times

Interval = tuple[int, int]


def as_interval(entry) -> Interval:
    if hasattr(entry, "start_time") and hasattr(entry, "end_time"):
        return as_slot(entry.start_time), as_slot(entry.end_time)
    start, end = entry
    return as_slot(start), as_slot(end)


def _intervals(existing: Iterable) -> list[Interval]:
    return sorted(as_interval(entry) for entry in existing)


def find_overlap(existing: Iterable, candidate_start: int | str, candidate_end: int | str) -> Optional[Interval]:
    """Return the earliest existing interval sharing a slot with the candidate."""

    start, end = as_slot(candidate_start), as_slot(candidate_end)
    for other_start, other_end in _intervals(existing):
        if start < other_end and end > other_start:
            return other_start, other_end
    return None


def overlaps(existing: Iterable, candidate_start: int | str, candidate_end: int | str) -> bool:
    return find_overlap(existing, candidate_start, candidate_end) is not None


def gaps(existing: Iterable) -> list[Interval]:
    """Return the free spans of the day not claimed by any existing interval."""

    result: list[Interval] = []
    cursor = 0
    for start, end in _intervals(existing):
        if start >= end:
            continue
        if cursor < start:
            result.append((cursor, start))
        cursor = max(cursor, end)

    if cursor < SLOTS_PER_DAY:
        result.append((cursor, SLOTS_PER_DAY))
    return result


def merge(existing: Iterable) -> list[Interval]:
    """Union of the intervals as sorted, disjoint spans."""

    merged: list[Interval] = []
    for start, end in _intervals(existing):
        if start >= end:
            continue
        if merged and start <= merged[-1][1]:
            merged[-1] = (merged[-1][0], max(merged[-1][1], end))
        else:
            merged.append((start, end))
    return merged


def occupancy(existing: Iterable) -> np.ndarray:
    """Boolean mask of length 48, True where a slot is claimed."""

    mask = np.zeros(SLOTS_PER_DAY, dtype=bool)
    for start, end in _intervals(existing):
        mask[max(0, start):min(SLOTS_PER_DAY, end)] = True
    return mask


def is_occupied(existing: Iterable, slot: int | str) -> bool:
    value = as_slot(slot)
    return any(start <= value < end for start, end in _intervals(existing))


def _label(start: int, end: int) -> str:
    return f"{to_time(start)} - {to_time(end)}"


def compute_gaps(existing: Iterable) -> list[dict]:
    """Free spans as display records with ``HH:MM`` bounds."""

    return [
        {"start": to_time(start), "end": to_time(end), "label": _label(start, end)}
        for start, end in gaps(existing)
    ]


def day_segments(existing: Iterable) -> list[dict]:
    """Partition ``[00:00, 24:00)`` into ordered occupied and free segments."""

    entries = list(existing)
    spans = [(start, end, True) for start, end in merge(entries)]
    spans.extend((start, end, False) for start, end in gaps(entries))
    return [
        {
            "start": to_time(start),
            "end": to_time(end),
            "occupied": occupied,
            "label": _label(start, end),
        }
        for start, end, occupied in sorted(spans)
    ]


def time_options(existing: Iterable) -> list[dict]:
    """The 49 selectable times, each flagged when an existing entry covers it."""

    entries = list(existing)
    return [{"time": value, "occupied": is_occupied(entries, value)} for value in _all_times()]
