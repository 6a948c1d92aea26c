"""JSON adapter for ledger snapshots (logs plus the category/tag catalog)."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import date, datetime

from timeledger.schema import ActivityType, SatisfactionTag, TimeLog

logger = logging.getLogger(__name__)

_LOG_FIELDS = ("id", "userId", "date", "startTime", "endTime", "activityTypeId", "satisfactionTagId")
_CATALOG_FIELDS = ("id", "name")


@dataclass
class Snapshot:
    logs: list[TimeLog] = field(default_factory=list)
    activity_types: list[ActivityType] = field(default_factory=list)
    satisfaction_tags: list[SatisfactionTag] = field(default_factory=list)


def _require(item: dict, fields: tuple, label: str) -> None:
    if not isinstance(item, dict):
        raise ValueError(f"{label}: expected an object")
    missing = [name for name in fields if item.get(name) in (None, "")]
    if missing:
        raise ValueError(f"{label}: missing required fields {missing}")


def _int_field(item: dict, key: str, default: int, label: str) -> int:
    value = item.get(key)
    if value is None:
        return default
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ValueError(f"{label}: {key} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{label}: {key} must be an integer") from exc


def _bool_field(item: dict, key: str, default: bool, label: str) -> bool:
    value = item.get(key)
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    if value in (0, 1):
        return bool(value)
    raise ValueError(f"{label}: {key} must be true or false")


def _parse_log(item: dict, index: int) -> TimeLog:
    label = f"Log {index}"
    _require(item, _LOG_FIELDS, label)

    try:
        day = date.fromisoformat(str(item["date"]))
    except ValueError as exc:
        raise ValueError(f"{label}: malformed date") from exc

    created_at = None
    if item.get("createdAt"):
        try:
            created_at = datetime.fromisoformat(str(item["createdAt"]).replace("Z", "+00:00"))
        except ValueError as exc:
            raise ValueError(f"{label}: malformed createdAt") from exc

    try:
        log = TimeLog(
            id=str(item["id"]),
            user_id=str(item["userId"]),
            date=day,
            start_time=str(item["startTime"]),
            end_time=str(item["endTime"]),
            activity_type_id=str(item["activityTypeId"]),
            satisfaction_tag_id=str(item["satisfactionTagId"]),
            details=str(item.get("details") or ""),
            created_at=created_at,
        )
    except ValueError as exc:
        raise ValueError(f"{label}: {exc}") from exc

    duration = item.get("duration")
    if duration is not None:
        try:
            stored = float(duration)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"{label}: invalid duration") from exc
        if abs(stored - log.duration) > 1e-9:
            raise ValueError(f"{label}: duration {stored} does not match {log.start_time}-{log.end_time}")
    return log


def _parse_activity_type(item: dict, index: int) -> ActivityType:
    label = f"Activity type {index}"
    _require(item, _CATALOG_FIELDS, label)
    return ActivityType(
        id=str(item["id"]),
        name=str(item["name"]),
        color=str(item.get("color", "")),
        is_visible=_bool_field(item, "isVisible", True, label),
        order=_int_field(item, "order", index, label),
    )


def _parse_satisfaction_tag(item: dict, index: int) -> SatisfactionTag:
    label = f"Satisfaction tag {index}"
    _require(item, _CATALOG_FIELDS, label)
    score = _int_field(item, "score", 0, label)
    if score not in (-1, 0, 1):
        raise ValueError(f"{label}: score must be -1, 0 or 1")
    return SatisfactionTag(
        id=str(item["id"]),
        name=str(item["name"]),
        color=str(item.get("color", "")),
        score=score,
        emoji=str(item.get("emoji", "")),
        is_visible=_bool_field(item, "isVisible", True, label),
        order=_int_field(item, "order", index, label),
    )


def parse(file_path: str) -> Snapshot:
    """Parse a snapshot file with ``logs``, ``activityTypes`` and ``satisfactionTags``."""

    with open(file_path, encoding="utf-8") as handle:
        payload = json.load(handle)

    if not isinstance(payload, dict):
        raise ValueError("JSON payload must be an object")

    snapshot = Snapshot(
        logs=[_parse_log(item, i) for i, item in enumerate(payload.get("logs") or [], start=1)],
        activity_types=[_parse_activity_type(item, i) for i, item in enumerate(payload.get("activityTypes") or [], start=1)],
        satisfaction_tags=[
            _parse_satisfaction_tag(item, i) for i, item in enumerate(payload.get("satisfactionTags") or [], start=1)
        ],
    )
    logger.debug(
        "Parsed snapshot from %s: %d logs, %d types, %d tags",
        file_path,
        len(snapshot.logs),
        len(snapshot.activity_types),
        len(snapshot.satisfaction_tags),
    )
    return snapshot
