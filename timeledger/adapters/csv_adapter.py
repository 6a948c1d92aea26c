"""CSV adapter for time logs."""

from __future__ import annotations

import csv
import logging
from datetime import date, datetime

from timeledger.schema import TimeLog

logger = logging.getLogger(__name__)

_REQUIRED_FIELDS = ("id", "user_id", "date", "start_time", "end_time", "activity_type_id", "satisfaction_tag_id")


def _parse_row(row: dict, row_number: int) -> TimeLog:
    missing = [field for field in _REQUIRED_FIELDS if not (row.get(field) or "").strip()]
    if missing:
        raise ValueError(f"Row {row_number}: missing required fields {missing}")

    try:
        day = date.fromisoformat(row["date"].strip())
    except ValueError as exc:
        raise ValueError(f"Row {row_number}: malformed date") from exc

    created_raw = (row.get("created_at") or "").strip()
    created_at = None
    if created_raw:
        try:
            created_at = datetime.fromisoformat(created_raw.replace("Z", "+00:00"))
        except ValueError as exc:
            raise ValueError(f"Row {row_number}: malformed created_at") from exc

    try:
        log = TimeLog(
            id=row["id"].strip(),
            user_id=row["user_id"].strip(),
            date=day,
            start_time=row["start_time"].strip(),
            end_time=row["end_time"].strip(),
            activity_type_id=row["activity_type_id"].strip(),
            satisfaction_tag_id=row["satisfaction_tag_id"].strip(),
            details=(row.get("details") or "").strip(),
            created_at=created_at,
        )
    except ValueError as exc:
        raise ValueError(f"Row {row_number}: {exc}") from exc

    duration_raw = (row.get("duration") or "").strip()
    if duration_raw:
        try:
            duration = float(duration_raw)
        except ValueError as exc:
            raise ValueError(f"Row {row_number}: invalid duration") from exc
        if abs(duration - log.duration) > 1e-9:
            raise ValueError(f"Row {row_number}: duration {duration} does not match {log.start_time}-{log.end_time}")

    return log


def parse(file_path: str) -> list[TimeLog]:
    """Parse a CSV file into a list of time logs."""

    with open(file_path, newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        if not reader.fieldnames:
            return []

        logs: list[TimeLog] = []
        for row_number, row in enumerate(reader, start=2):
            logs.append(_parse_row(row, row_number))

    logger.debug("Parsed %d logs from %s", len(logs), file_path)
    return logs
