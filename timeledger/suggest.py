"""Default start/end proposal for the next entry of a day."""

from __future__ import annotations

from typing import Iterable

from timeledger.clock import SLOTS_PER_DAY, to_time
from timeledger.ranges import as_interval


def _tie_key(entry) -> str:
    return str(getattr(entry, "id", ""))


def suggest_next_slot(existing: Iterable) -> tuple[str, str]:
    """Propose one slot starting where the latest-ending entry stops.

    An empty day yields ``("00:00", "00:30")``. When the day already runs to
    24:00 the proposal is the empty ``("24:00", "24:00")``; the validator
    rejects it, so callers can treat it as "day full".
    """

    entries = list(existing)
    if not entries:
        return to_time(0), to_time(1)

    ranked = sorted(entries, key=lambda entry: (as_interval(entry)[1], _tie_key(entry)))
    start = as_interval(ranked[-1])[1]
    end = min(start + 1, SLOTS_PER_DAY)
    return to_time(start), to_time(end)
