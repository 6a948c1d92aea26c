"""Entry recording and dashboard assembly on top of the stores."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from timeledger import aggregation
from timeledger.conflicts import Verdict, validate
from timeledger.ranges import compute_gaps
from timeledger.schema import TimeLog
from timeledger.store import CatalogStore, LogStore
from timeledger.suggest import suggest_next_slot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecordResult:
    verdict: Verdict
    log: Optional[TimeLog] = None


def new_log_id() -> str:
    return f"log_{uuid.uuid4().hex[:12]}"


def record_entry(
    store: LogStore,
    user_id: str,
    day: date,
    start_time: str,
    end_time: str,
    activity_type_id: str,
    satisfaction_tag_id: str,
    details: str = "",
    created_at: Optional[datetime] = None,
) -> RecordResult:
    """Validate a new entry against the day and insert it when accepted.

    The check and the insert are two separate store calls; the store must
    serialize writers per user and day if it is shared.
    """

    existing = store.list_logs_for_day(user_id, day)
    verdict = validate(existing, start_time, end_time)
    if not verdict.ok:
        logger.info(
            "Rejected %s-%s on %s for user %s: %s %s",
            start_time,
            end_time,
            day,
            user_id,
            verdict.reason,
            verdict.conflict or "",
        )
        return RecordResult(verdict=verdict)

    log = TimeLog(
        id=new_log_id(),
        user_id=user_id,
        date=day,
        start_time=start_time,
        end_time=end_time,
        activity_type_id=activity_type_id,
        satisfaction_tag_id=satisfaction_tag_id,
        details=details,
        created_at=created_at or datetime.now(),
    )
    stored = store.insert_log(log)
    logger.info("Recorded %s (%s-%s, %.1fh) for user %s", stored.id, start_time, end_time, stored.duration, user_id)
    return RecordResult(verdict=verdict, log=stored)


def suggest_for_day(store: LogStore, user_id: str, day: date) -> tuple[str, str]:
    return suggest_next_slot(store.list_logs_for_day(user_id, day))


def gaps_for_day(store: LogStore, user_id: str, day: date) -> list[dict]:
    return compute_gaps(store.list_logs_for_day(user_id, day))


def dashboard(
    store: LogStore,
    catalog: CatalogStore,
    user_id: str,
    now: date | datetime,
    benchmark_hours: float = aggregation.BENCHMARK_HOURS,
    all_time: bool = False,
) -> dict:
    """Collect every dashboard series for one user at reference time ``now``."""

    logs = store.list_logs(user_id)
    types = catalog.list_activity_types()
    tags = catalog.list_satisfaction_tags()
    return {
        "today": aggregation.today_totals(logs, types, now, benchmark_hours=benchmark_hours),
        "weekly_comparison": aggregation.weekly_comparison(logs, types, now),
        "weekly_distribution": aggregation.weekly_type_distribution(logs, types, now),
        "weekly_emotion": aggregation.weekly_emotion_by_type(logs, types, tags, now),
        "happiness_trend": aggregation.happiness_trend(logs, tags),
        "missing_yesterday": aggregation.missing_yesterday(logs, now),
        "logs": aggregation.log_table(logs, types, tags, now, all_time=all_time),
    }
