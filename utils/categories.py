"""Activity category buckets.

Allocation rows carry free-text category names ("Baseline Work",
"Vacation Days", ...).  Two views fold them into fixed buckets:

  - capacity totals use ``CAPACITY_BUCKETS`` and fuzzy substring matching,
  - the calendar view groups activity names under ``CALENDAR_BUCKETS`` by
    exact category, keeping unknown categories under their literal name.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

VACATION = "Vacation"
BASELINE = "Baseline"
STRATEGIC = "Strategic"
DISCRETIONARY_PROJECT = "Discretionary Project"

# Display order for capacity charts and tables
CAPACITY_BUCKETS: tuple[str, ...] = (VACATION, BASELINE, STRATEGIC, DISCRETIONARY_PROJECT)

# Display order for the calendar view
CALENDAR_BUCKETS: tuple[str, ...] = ("Baseline", "Strategic", "Discretionary", "Vacation")

FALLBACK_CATEGORY = "Other"

# Substring -> bucket.  Rules are applied in order and a later match
# overrides an earlier one ("Strategic Vacation" lands in Strategic).
_SUBSTRING_RULES: tuple[tuple[str, str], ...] = (
    ("Vacation", VACATION),
    ("Baseline", BASELINE),
    ("Strategic", STRATEGIC),
    ("Discretionary", DISCRETIONARY_PROJECT),
)


def normalize_category(name: str | None) -> str | None:
    """Map a raw category name onto a capacity bucket, or None if none match."""
    if not isinstance(name, str) or not name:
        return None
    bucket = None
    for needle, label in _SUBSTRING_RULES:
        if needle in name:
            bucket = label
    return bucket


def empty_totals() -> dict[str, float]:
    """Return a zeroed CategoryTotals mapping in display order."""
    return {label: 0 for label in CAPACITY_BUCKETS}


def accumulate_totals(rows: Iterable[Mapping[str, Any]]) -> dict[str, float]:
    """Sum ``{category, total}`` rows into the four capacity buckets.

    Rows whose category matches no bucket are ignored.
    """
    totals = empty_totals()
    for row in rows:
        bucket = normalize_category(row.get("category"))
        if bucket is not None:
            totals[bucket] += row.get("total") or 0
    return totals


def unique_activities(rows: Iterable[Mapping[str, Any]]) -> list[dict[str, Any]]:
    """Deduplicate rows by ``(activity, category)``, keeping first-seen order."""
    seen: set[tuple[Any, Any]] = set()
    unique: list[dict[str, Any]] = []
    for row in rows:
        key = (row.get("activity"), row.get("category"))
        if key in seen:
            continue
        seen.add(key)
        unique.append({"activity": key[0], "category": key[1]})
    return unique


def group_by_category(activities: Iterable[Mapping[str, Any]]) -> list[dict[str, Any]]:
    """Bucket activity names under the calendar categories.

    The four fixed buckets come first in ``CALENDAR_BUCKETS`` order, followed by
    any unrecognised categories in first-seen order.  Rows with no category
    fall under ``"Other"``.  Empty buckets are left out.
    """
    groups: dict[str, list[Any]] = {name: [] for name in CALENDAR_BUCKETS}
    for activity in activities:
        category = activity.get("category") or FALLBACK_CATEGORY
        groups.setdefault(category, []).append(activity.get("activity"))
    return [
        {"category": name, "activities": names}
        for name, names in groups.items()
        if names
    ]
