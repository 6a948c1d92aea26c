"""Half-hour clock grid shared by every ledger component."""

from __future__ import annotations

import re

SLOT_MINUTES = 30
SLOTS_PER_DAY = 48
DAY_END = "24:00"

_TIME_RE = re.compile(r"(\d{2}):(\d{2})")


class SlotRangeError(ValueError):
    """A well-formed time that falls outside 00:00-24:00."""


def to_slot(time: str) -> int:
    """Convert an ``HH:MM`` wall-clock string to a slot index in ``[0, 48]``.

    Only zero-padded ``HH:MM`` with minutes ``00`` or ``30`` is accepted.
    """

    match = _TIME_RE.fullmatch(time) if isinstance(time, str) else None
    if match is None:
        raise ValueError(f"Invalid time format: {time!r}")

    hours, minutes = int(match.group(1)), int(match.group(2))
    if minutes not in (0, 30):
        raise ValueError(f"Time {time!r} is not on a {SLOT_MINUTES}-minute boundary")
    slot = hours * 2 + minutes // SLOT_MINUTES
    if slot > SLOTS_PER_DAY:
        raise SlotRangeError(f"Time {time!r} is outside 00:00-{DAY_END}")
    return slot


def to_time(slot: int) -> str:
    """Inverse of :func:`to_slot`."""

    if not 0 <= slot <= SLOTS_PER_DAY:
        raise SlotRangeError(f"Slot {slot} is outside 0-{SLOTS_PER_DAY}")
    hours, half = divmod(int(slot), 2)
    return f"{hours:02d}:{half * SLOT_MINUTES:02d}"


def as_slot(value: int | str) -> int:
    if isinstance(value, str):
        return to_slot(value)
    return int(value)


def time_options() -> list[str]:
    """All 49 selectable times, 00:00 through 24:00."""

    return [to_time(slot) for slot in range(SLOTS_PER_DAY + 1)]


def duration_hours(start: int | str, end: int | str) -> float:
    return (as_slot(end) - as_slot(start)) * SLOT_MINUTES / 60.0
