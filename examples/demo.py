"""Demo script for timeledger."""

import sys
from datetime import date, datetime
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from timeledger.ledger import dashboard, gaps_for_day, record_entry, suggest_for_day
from timeledger.store import InMemoryStore


def main() -> None:
    store = InMemoryStore()
    day = date(2025, 3, 12)
    now = datetime(2025, 3, 12, 18, 0)

    record_entry(store, "u1", day, "09:00", "10:00", "act_1", "sat_1")
    record_entry(store, "u1", day, "10:00", "12:30", "act_1", "sat_2")
    rejected = record_entry(store, "u1", day, "09:30", "10:30", "act_2", "sat_1")

    print("Rejected:", rejected.verdict)
    print("Next slot:", suggest_for_day(store, "u1", day))
    print("Gaps:", gaps_for_day(store, "u1", day))
    print("Dashboard:", dashboard(store, store, "u1", now))


if __name__ == "__main__":
    main()
