"""Utilities for turning CLI month/year choices into concrete days."""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta
from typing import Protocol


class Clock(Protocol):
    def __call__(self) -> datetime: ...


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _today(clock: Clock) -> date:
    now = clock()
    if now.tzinfo is None:
        now = now.replace(tzinfo=UTC)
    return now.astimezone(UTC).date()


@dataclass(frozen=True)
class MonthWindow:
    """A calendar month; only days that are fully over are ever fetched."""

    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise ValueError(f"Month must be between 1 and 12, got {self.month}")

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def last_day(self) -> date:
        return date(self.year, self.month, calendar.monthrange(self.year, self.month)[1])

    def days(self, *, clock: Clock = _utcnow) -> list[date]:
        """Days of the month strictly before today."""
        today = _today(clock)
        days: list[date] = []
        current = self.first_day
        while current <= self.last_day and current < today:
            days.append(current)
            current += timedelta(days=1)
        return days

    def previous(self) -> MonthWindow:
        if self.month == 1:
            return MonthWindow(self.year - 1, 12)
        return MonthWindow(self.year, self.month - 1)

    def next(self) -> MonthWindow:
        if self.month == 12:
            return MonthWindow(self.year + 1, 1)
        return MonthWindow(self.year, self.month + 1)


def resolve_month(
    month: int | None = None,
    year: int | None = None,
    *,
    clock: Clock = _utcnow,
) -> MonthWindow:
    """Resolve a possibly partial month selection.

    Without a month the previous calendar month is used. Without a year the
    most recent occurrence of that month that has already started is used.
    """

    today = _today(clock)
    if month is None:
        if year is not None:
            raise ValueError("A year was given without a month")
        return MonthWindow(today.year, today.month).previous()
    window = MonthWindow(year if year is not None else today.year, month)
    if year is None and window.first_day > today:
        window = MonthWindow(today.year - 1, month)
    return window


def months_between(start: MonthWindow, end: MonthWindow) -> list[MonthWindow]:
    """Inclusive list of months from ``start`` to ``end``."""
    if (start.year, start.month) > (end.year, end.month):
        raise ValueError("Month range start must be before end")
    months: list[MonthWindow] = []
    current = start
    while (current.year, current.month) <= (end.year, end.month):
        months.append(current)
        current = current.next()
    return months


__all__ = ["Clock", "MonthWindow", "months_between", "resolve_month"]
