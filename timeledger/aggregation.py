"""Chart-ready aggregations over a user's log history.

Every function takes an explicit ``now`` (a ``date`` or ``datetime``) for
"today", "yesterday" and "this week" framing. Weeks start on Monday.
"""

from __future__ import annotations

from collections import Counter, defaultdict
from datetime import date, datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from timeledger.clock import to_slot
from timeledger.lookup import tag_for, type_name
from timeledger.schema import ActivityType, SatisfactionTag, TimeLog, in_display_order

BENCHMARK_HOURS = 6
RECENT_DAYS = 7
HOURS_PER_DAY = 24
NEUTRAL_COLOR = "#9CA3AF"


def _as_date(now: date | datetime) -> date:
    if isinstance(now, datetime):
        return now.date()
    return now


def week_start(day: date | datetime) -> date:
    """Monday of the week containing ``day``."""

    value = _as_date(day)
    return value - timedelta(days=value.weekday())


def _hours_by_type(logs: Iterable[TimeLog]) -> Counter:
    totals: Counter = Counter()
    for log in logs:
        totals[log.activity_type_id] += log.duration
    return totals


def today_totals(
    logs: list[TimeLog],
    types: Iterable[ActivityType],
    now: date | datetime,
    benchmark_hours: float = BENCHMARK_HOURS,
) -> list[dict]:
    """Hours logged today per visible activity type, next to the benchmark."""

    today = _as_date(now)
    totals = _hours_by_type(log for log in logs if log.date == today)
    return [
        {
            "id": activity.id,
            "name": activity.name,
            "hours": totals.get(activity.id, 0.0),
            "benchmark": benchmark_hours,
            "fill": activity.color,
        }
        for activity in in_display_order(types)
    ]


def weekly_comparison(logs: list[TimeLog], types: Iterable[ActivityType], now: date | datetime) -> list[dict]:
    """Hours per visible type for this week and the week before."""

    this_week_start = week_start(now)
    last_week_start = this_week_start - timedelta(days=7)

    this_week = _hours_by_type(log for log in logs if log.date >= this_week_start)
    last_week = _hours_by_type(log for log in logs if last_week_start <= log.date < this_week_start)

    return [
        {
            "id": activity.id,
            "name": activity.name,
            "this_week": this_week.get(activity.id, 0.0),
            "last_week": last_week.get(activity.id, 0.0),
            "fill": activity.color,
        }
        for activity in in_display_order(types)
    ]


def round_half_up(value: float, places: int = 1) -> float:
    """Round with ties going up, e.g. 6.25 -> 6.3."""

    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def happy_rate(happy_hours: float, total_hours: float) -> float:
    if total_hours <= 0:
        return 0.0
    return round_half_up(happy_hours / total_hours * 100.0)


def happiness_trend(logs: list[TimeLog], tags: Iterable[SatisfactionTag]) -> list[dict]:
    """Weekly happy hours and happy share across the full history."""

    happy_tag_ids = {tag.id for tag in tags if tag.is_happy}
    weekly: dict[date, dict[str, float]] = defaultdict(lambda: {"total": 0.0, "happy": 0.0})

    for log in logs:
        bucket = weekly[week_start(log.date)]
        bucket["total"] += log.duration
        if log.satisfaction_tag_id in happy_tag_ids:
            bucket["happy"] += log.duration

    return [
        {
            "week": week.isoformat(),
            "happy_hours": round_half_up(weekly[week]["happy"]),
            "total_hours": weekly[week]["total"],
            "happy_rate": happy_rate(weekly[week]["happy"], weekly[week]["total"]),
        }
        for week in sorted(weekly)
    ]


def missing_yesterday(logs: list[TimeLog], now: date | datetime) -> dict:
    """Hours of yesterday not covered by any entry, by plain summation."""

    yesterday = _as_date(now) - timedelta(days=1)
    filled = sum(log.duration for log in logs if log.date == yesterday)
    return {
        "date": yesterday.isoformat(),
        "logged_hours": filled,
        "missing_hours": max(0.0, HOURS_PER_DAY - filled),
    }


def weekly_emotion_by_type(
    logs: list[TimeLog],
    types: Iterable[ActivityType],
    tags: Iterable[SatisfactionTag],
    now: date | datetime,
) -> list[dict]:
    """This week's hours per visible type, split by visible satisfaction tag."""

    this_week_start = week_start(now)
    split: dict[str, Counter] = defaultdict(Counter)
    for log in logs:
        if log.date >= this_week_start:
            split[log.activity_type_id][log.satisfaction_tag_id] += log.duration

    visible_tags = in_display_order(tags)
    result = []
    for activity in in_display_order(types):
        by_tag = split.get(activity.id, Counter())
        result.append(
            {
                "id": activity.id,
                "work_type": activity.name,
                "total": sum(by_tag.values(), 0.0),
                "data": [
                    {"name": tag.name, "value": by_tag.get(tag.id, 0.0), "fill": tag.color}
                    for tag in visible_tags
                ],
            }
        )
    return result


def weekly_type_distribution(logs: list[TimeLog], types: Iterable[ActivityType], now: date | datetime) -> list[dict]:
    """This week's hours per visible type, leaving out types with no hours."""

    return [
        {"name": row["name"], "value": row["this_week"], "fill": row["fill"]}
        for row in weekly_comparison(logs, types, now)
        if row["this_week"] > 0
    ]


def recent_logs(
    logs: list[TimeLog],
    now: date | datetime,
    all_time: bool = False,
    days: int = RECENT_DAYS,
) -> list[TimeLog]:
    """Entries newest first; only the last ``days`` days unless ``all_time``.

    The window is ``days`` calendar days ending today, so with the default
    of 7 an entry dated exactly a week ago is left out.
    """

    selected = list(logs)
    if not all_time:
        cutoff = _as_date(now) - timedelta(days=days)
        selected = [log for log in selected if log.date > cutoff]
    return sorted(selected, key=lambda log: (log.date, to_slot(log.start_time), log.id), reverse=True)


def log_table(
    logs: list[TimeLog],
    types: Iterable[ActivityType],
    tags: Iterable[SatisfactionTag],
    now: date | datetime,
    all_time: bool = False,
) -> list[dict]:
    """Rows for the entries table, with type and tag display fields resolved by id.

    Unknown types show their raw id; unknown tags show the raw id with no
    emoji and a neutral color.
    """

    types, tags = list(types), list(tags)
    rows = []
    for log in recent_logs(logs, now, all_time=all_time):
        tag = tag_for(tags, log.satisfaction_tag_id)
        rows.append(
            {
                "id": log.id,
                "date": log.date.isoformat(),
                "start_time": log.start_time,
                "end_time": log.end_time,
                "duration": log.duration,
                "activity": type_name(types, log.activity_type_id),
                "satisfaction": tag.name if tag is not None else log.satisfaction_tag_id,
                "emoji": tag.emoji if tag is not None else "",
                "color": tag.color if tag is not None else NEUTRAL_COLOR,
                "details": log.details,
            }
        )
    return rows
