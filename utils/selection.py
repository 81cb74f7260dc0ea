"""Contiguous month-window selection for the calendar view.

The calendar lets a user pick up to three consecutive months.  Clicks are fed
through :meth:`MonthWindowSelector.toggle`, which keeps the selection a gap-free
run at all times:

  - the first click starts a window,
  - clicking a month adjacent to either edge grows the window,
  - clicking an edge month shrinks the window,
  - clicking a middle month (or the only month) is rejected,
  - any other click, or growing past three months, starts a fresh window.

Rejections leave the state untouched; callers use the returned outcome to
drive UI feedback (the "shake" on an invalid removal).
"""

from __future__ import annotations

import enum
from typing import Iterable

from utils.months import month_to_index

MAX_WINDOW = 3


class ToggleOutcome(str, enum.Enum):
    """Result of a single toggle."""

    STARTED = "started"
    EXTENDED = "extended"
    SHRUNK = "shrunk"
    RESET = "reset"
    REJECTED = "rejected"


class MonthWindowSelector:
    """Selection state for up to ``MAX_WINDOW`` consecutive YYYYMM months."""

    def __init__(self) -> None:
        self._months: list[int] = []

    @classmethod
    def select(cls, months: Iterable[int]) -> "MonthWindowSelector":
        """Build a selector already holding *months*.

        Raises:
            ValueError: if the months are not a contiguous run of at most
                ``MAX_WINDOW`` distinct months.
        """
        ordered = sorted(set(months))
        if len(ordered) > MAX_WINDOW:
            raise ValueError(f"At most {MAX_WINDOW} months may be selected")
        indices = [month_to_index(m) for m in ordered]
        if any(b - a != 1 for a, b in zip(indices, indices[1:])):
            raise ValueError(f"Months {ordered} are not contiguous")
        selector = cls()
        selector._months = ordered
        return selector

    @property
    def months(self) -> tuple[int, ...]:
        return tuple(self._months)

    @property
    def first(self) -> int | None:
        return self._months[0] if self._months else None

    @property
    def last(self) -> int | None:
        return self._months[-1] if self._months else None

    def __len__(self) -> int:
        return len(self._months)

    def __contains__(self, month: object) -> bool:
        return month in self._months

    def __repr__(self) -> str:
        return f"MonthWindowSelector({self._months!r})"

    def toggle(self, month: int) -> ToggleOutcome:
        """Apply a click on *month* and report what happened."""
        if not self._months:
            self._months = [month]
            return ToggleOutcome.STARTED

        first, last = self._months[0], self._months[-1]
        size = len(self._months)

        if month in self._months:
            if month == first and size > 1:
                self._months = self._months[1:]
                return ToggleOutcome.SHRUNK
            if month == last and size > 1:
                self._months = self._months[:-1]
                return ToggleOutcome.SHRUNK
            # Middle month or the only month
            return ToggleOutcome.REJECTED

        idx = month_to_index(month)
        before_first = idx == month_to_index(first) - 1
        after_last = idx == month_to_index(last) + 1

        if not (before_first or after_last) or size >= MAX_WINDOW:
            self._months = [month]
            return ToggleOutcome.RESET

        if before_first:
            self._months = [month] + self._months
        else:
            self._months = self._months + [month]
        return ToggleOutcome.EXTENDED
