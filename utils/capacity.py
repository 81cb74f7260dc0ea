"""Capacity aggregation over a rolling month window.

For every month in the window the summary reports:

  - allocation totals per capacity bucket (Vacation, Baseline, Strategic,
    Discretionary Project),
  - totalAllocated (sum of the buckets),
  - totalPeopleCapacity (sum of capacity rows, 0 if none),
  - remainingCapacity = totalPeopleCapacity - totalAllocated.

Remaining capacity is reported as-is; a negative value means the month is
over-allocated.  Months without data are zero-filled, never omitted.

The MongoDB pipelines are built by plain functions and the merge step is a
pure function over their output, so the arithmetic is testable without a
database.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from utils.categories import CAPACITY_BUCKETS, accumulate_totals
from utils.months import compute_window, current_month, format_month_label, parse_month

logger = logging.getLogger("rcm_api.capacity")

DEFAULT_WINDOW = 6

ALLOCATION_COLLECTION = "allocation"
CAPACITY_COLLECTION = "capacity"


@dataclass
class MonthCapacity:
    """Aggregated figures for one month of the window."""

    month: int
    categories: dict[str, float] = field(default_factory=dict)
    total_allocated: float = 0
    total_people_capacity: float = 0

    @property
    def remaining_capacity(self) -> float:
        return self.total_people_capacity - self.total_allocated


# ── Pipelines ─────────────────────────────────────────────────────────────────

def allocation_pipeline(months: list[int]) -> list[dict[str, Any]]:
    """Sum allocation amounts by (category, month), then nest per month.

    Produces documents shaped like
    ``{_id: 202501, categories: [{category: "Vacation", total: 10}, ...]}``.
    """
    return [
        {"$match": {"date": {"$in": months}}},
        {"$group": {
            "_id": {"category": "$category", "date": "$date"},
            "total": {"$sum": "$amount"},
        }},
        {"$group": {
            "_id": "$_id.date",
            "categories": {"$push": {"category": "$_id.category", "total": "$total"}},
        }},
    ]


def capacity_pipeline(months: list[int]) -> list[dict[str, Any]]:
    """Sum people capacity per month: ``{_id: 202501, totalPeopleCapacity: 42}``."""
    return [
        {"$match": {"date": {"$in": months}}},
        {"$group": {"_id": "$date", "totalPeopleCapacity": {"$sum": "$amount"}}},
    ]


# ── Merge ─────────────────────────────────────────────────────────────────────

def merge_window(
    months: list[int],
    allocation_rows: Iterable[Mapping[str, Any]],
    capacity_rows: Iterable[Mapping[str, Any]],
) -> list[MonthCapacity]:
    """Combine pipeline output into one MonthCapacity per window month."""
    allocation_by_month = {int(r["_id"]): r.get("categories") or [] for r in allocation_rows}
    capacity_by_month: dict[int, float] = {}
    for row in capacity_rows:
        capacity_by_month[int(row["_id"])] = row.get("totalPeopleCapacity") or 0

    merged = []
    for month in months:
        totals = accumulate_totals(allocation_by_month.get(month, []))
        merged.append(MonthCapacity(
            month=month,
            categories=totals,
            total_allocated=sum(totals.values()),
            total_people_capacity=capacity_by_month.get(month, 0),
        ))
    return merged


def summary_payload(merged: list[MonthCapacity]) -> dict[str, Any]:
    """Shape merged months into the parallel arrays charts consume."""
    return {
        "months": [format_month_label(m.month) for m in merged],
        "categories": [
            {"label": label, "values": [m.categories[label] for m in merged]}
            for label in CAPACITY_BUCKETS
        ],
        "totals": [m.total_allocated for m in merged],
        "peopleCapacity": [m.total_people_capacity for m in merged],
        "remainingCapacity": [m.remaining_capacity for m in merged],
    }


# ── Database access ───────────────────────────────────────────────────────────

def stored_months(db: Any) -> list[int]:
    """Return the distinct valid months present in allocation or capacity data."""
    found: set[int] = set()
    for name in (CAPACITY_COLLECTION, ALLOCATION_COLLECTION):
        for value in db[name].distinct("date"):
            try:
                found.add(parse_month(value))
            except ValueError:
                logger.debug("Skipping invalid month %r in %s", value, name)
    return sorted(found)


def detect_start_month(db: Any, current: int | None = None) -> int:
    """Pick the latest stored month not after *current* (default: now).

    Falls back to *current* itself when no stored month qualifies.
    """
    current = current if current is not None else current_month()
    candidates = [m for m in stored_months(db) if m <= current]
    return candidates[-1] if candidates else current


def build_capacity_summary(
    db: Any,
    start: int | None = None,
    window_size: int = DEFAULT_WINDOW,
    current: int | None = None,
) -> dict[str, Any]:
    """Run both pipelines for the window and return the summary payload."""
    if start is None:
        start = detect_start_month(db, current)
    months = compute_window(start, window_size)
    logger.debug("Capacity summary window: %s", months)

    allocation_rows = list(db[ALLOCATION_COLLECTION].aggregate(allocation_pipeline(months)))
    capacity_rows = list(db[CAPACITY_COLLECTION].aggregate(capacity_pipeline(months)))
    return summary_payload(merge_window(months, allocation_rows, capacity_rows))
