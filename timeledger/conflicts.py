"""Double-booking validation for a new entry."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from timeledger.clock import SLOTS_PER_DAY, SlotRangeError, as_slot
from timeledger.ranges import Interval, find_overlap

MISALIGNED = "misaligned"
OUT_OF_RANGE = "out-of-range"
INVALID_ORDER = "invalid-order"
OVERLAP = "overlap"


@dataclass(frozen=True)
class Verdict:
    """Outcome of a validation; ``conflict`` is the clashing interval, if any."""

    ok: bool
    reason: Optional[str] = None
    conflict: Optional[Interval] = None


OK = Verdict(ok=True)


def check_range(candidate_start: int, candidate_end: int) -> Verdict:
    """Bounds check for callers holding raw slot indices."""

    for value in (candidate_start, candidate_end):
        if not 0 <= int(value) <= SLOTS_PER_DAY:
            return Verdict(ok=False, reason=OUT_OF_RANGE)
    return OK


def validate(existing: Iterable, candidate_start: int | str, candidate_end: int | str) -> Verdict:
    """Check a candidate against the day's entries; first failing rule wins.

    Candidate times that cannot be placed on the grid are reported as
    ``misaligned`` or ``out-of-range`` before the order and overlap rules.
    """

    try:
        start, end = as_slot(candidate_start), as_slot(candidate_end)
    except SlotRangeError:
        return Verdict(ok=False, reason=OUT_OF_RANGE)
    except ValueError:
        return Verdict(ok=False, reason=MISALIGNED)

    bounds = check_range(start, end)
    if not bounds.ok:
        return bounds
    if start >= end:
        return Verdict(ok=False, reason=INVALID_ORDER)

    conflict = find_overlap(existing, start, end)
    if conflict is not None:
        return Verdict(ok=False, reason=OVERLAP, conflict=conflict)
    return OK
