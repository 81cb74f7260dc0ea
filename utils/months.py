"""Calendar-month helpers shared by the calendar and capacity endpoints.

Months are carried everywhere as ``YYYYMM`` integers (202501 = January 2025).
Integer comparison orders them chronologically; ``month_to_index`` maps them
onto a gap-free linear scale so adjacency is a simple ``+1`` test.

Provides:
  - month_to_index / index_to_month: YYYYMM <-> linear month index
  - compute_window: n sequential months starting at a given month
  - format_month_label: 202501 -> "Jan-25" (the single label formatter)
  - current_month: wall-clock month as YYYYMM
  - recent_months: filter a month list to the trailing year
  - parse_month: validate user-supplied YYYYMM values
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Iterable

logger = logging.getLogger("rcm_api.months")

_MONTH_ABBREVS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def month_to_index(yyyymm: int) -> int:
    """Convert YYYYMM into a continuous month index (``year * 12 + month``)."""
    return (yyyymm // 100) * 12 + (yyyymm % 100)


def index_to_month(index: int) -> int:
    """Inverse of :func:`month_to_index`."""
    year, month = divmod(index - 1, 12)
    return year * 100 + month + 1


def compute_window(start: int, count: int) -> list[int]:
    """Return *count* sequential YYYYMM values beginning at *start*.

    The month rolls over to January of the next year after December.

    Examples:
        compute_window(202501, 3) -> [202501, 202502, 202503]
        compute_window(202511, 4) -> [202511, 202512, 202601, 202602]
    """
    months: list[int] = []
    year, month = divmod(start, 100)
    for _ in range(max(count, 0)):
        months.append(year * 100 + month)
        month += 1
        if month > 12:
            month = 1
            year += 1
    return months


def format_month_label(yyyymm: int) -> str:
    """Format YYYYMM as ``"Mon-YY"``, e.g. 202501 -> ``"Jan-25"``."""
    year, month = divmod(int(yyyymm), 100)
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month in {yyyymm!r}")
    return f"{_MONTH_ABBREVS[month - 1]}-{year % 100:02d}"


def current_month(today: date | None = None) -> int:
    """Return the current calendar month as YYYYMM."""
    today = today or date.today()
    return today.year * 100 + today.month


def _as_month(value: Any) -> int | None:
    # Stored dates may arrive as Int32, float or numeric strings.
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def recent_months(months: Iterable[Any], current: int) -> list[int]:
    """Keep months from the same month one year ago through *current*.

    Values that are not valid YYYYMM months (non-numeric, or a month part
    outside 1-12) are dropped.  The result is sorted ascending with
    duplicates removed.
    """
    floor = current - 100
    kept: set[int] = set()
    for value in months:
        try:
            kept.add(parse_month(value))
        except ValueError:
            logger.debug("Skipping invalid month %r", value)
    return sorted(m for m in kept if floor <= m <= current)


def parse_month(value: Any) -> int:
    """Validate a YYYYMM value and return it as an int.

    Raises:
        ValueError: if *value* is not an integer with a month part of 1-12.
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid month {value!r}; expected YYYYMM")
    month = _as_month(value)
    if month is None or month < 100 or not 1 <= month % 100 <= 12:
        raise ValueError(f"Invalid month {value!r}; expected YYYYMM")
    return month
