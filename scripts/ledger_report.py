"""Print the dashboard report for one user from a JSON snapshot or CSV log file."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from timeledger.adapters import csv_adapter, json_adapter
from timeledger.aggregation import BENCHMARK_HOURS
from timeledger.ledger import dashboard
from timeledger.store import InMemoryStore
from timeledger.wellbeing import happiness_drivers, happy_rate_by_type


def _load_snapshot(path: Path) -> json_adapter.Snapshot:
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return json_adapter.Snapshot(logs=csv_adapter.parse(str(path)))
    if suffix == ".json":
        return json_adapter.parse(str(path))
    raise ValueError("Unsupported input format, expected .csv or .json")


def _parse_now(value: str | None) -> datetime:
    if not value:
        return datetime.now()
    return datetime.fromisoformat(value)


def main() -> None:
    parser = argparse.ArgumentParser(description="Build the time-ledger dashboard report")
    parser.add_argument("--data", required=True, help="Path to a JSON ledger snapshot or a CSV of logs")
    parser.add_argument("--user", required=True, help="User id to report on")
    parser.add_argument("--now", help="Reference date/time (ISO format), defaults to the current time")
    parser.add_argument("--benchmark-hours", type=float, default=BENCHMARK_HOURS)
    parser.add_argument("--all-time", action="store_true", help="List every entry in the logs table")
    parser.add_argument("--out", default="outputs/ledger_report.json", help="Where to write the report")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    snapshot = _load_snapshot(Path(args.data))
    store = InMemoryStore(
        logs=snapshot.logs,
        activity_types=snapshot.activity_types or None,
        satisfaction_tags=snapshot.satisfaction_tags or None,
    )
    now = _parse_now(args.now)

    report = dashboard(store, store, args.user, now, benchmark_hours=args.benchmark_hours, all_time=args.all_time)
    logs = store.list_logs(args.user)
    types = store.list_activity_types()
    tags = store.list_satisfaction_tags()
    report["happy_rate_by_type"] = happy_rate_by_type(logs, types, tags)
    report["happiness_drivers"] = happiness_drivers(logs, types, tags)
    report["user"] = args.user
    report["now"] = now.isoformat()
    report["n_logs"] = len(logs)

    print(json.dumps(report, indent=2))

    out_path = Path(args.out)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(json.dumps(report, indent=2), encoding="utf-8")
    print(f"Saved ledger report to {out_path}")


if __name__ == "__main__":
    main()
