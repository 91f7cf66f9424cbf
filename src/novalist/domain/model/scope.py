"""Period descriptors for playlists.

A scope says which slice of time a playlist covers. It also decides the
playlist's title and file stem, which double as the skip-if-exists marker, so
the naming here must stay stable across runs.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Final

from novalist.domain.model.enums import ScopeKind

MONTH_NAMES: Final[tuple[str, ...]] = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def month_name(month: int) -> str:
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be between 1 and 12, got {month}")
    return MONTH_NAMES[month - 1]


def month_from_name(name: str) -> int:
    try:
        return MONTH_NAMES.index(name.strip().capitalize()) + 1
    except ValueError as exc:
        raise ValueError(f"Unknown month name: {name}") from exc


@dataclass(frozen=True, slots=True)
class Scope:
    kind: ScopeKind
    year: int | None = None
    month: int | None = None
    day: int | None = None
    name: str | None = None

    def __post_init__(self) -> None:
        if self.kind is ScopeKind.NAMED and not self.name:
            raise ValueError("Named scopes need a name")
        if self.kind in {ScopeKind.DAY, ScopeKind.MONTH, ScopeKind.YEAR} and self.year is None:
            raise ValueError(f"{self.kind} scopes need a year")
        if self.kind in {ScopeKind.DAY, ScopeKind.MONTH}:
            month_name(self.month or 0)
        if self.kind is ScopeKind.DAY:
            # raises on impossible dates such as February 30th
            date(self.year or 1, self.month or 1, self.day or 0)

    @classmethod
    def for_day(cls, value: date) -> Scope:
        return cls(ScopeKind.DAY, year=value.year, month=value.month, day=value.day)

    @classmethod
    def for_month(cls, year: int, month: int) -> Scope:
        return cls(ScopeKind.MONTH, year=year, month=month)

    @classmethod
    def for_year(cls, year: int) -> Scope:
        return cls(ScopeKind.YEAR, year=year)

    @classmethod
    def all_time(cls) -> Scope:
        return cls(ScopeKind.ALL_TIME)

    @classmethod
    def named(cls, name: str) -> Scope:
        return cls(ScopeKind.NAMED, name=name)

    @property
    def start(self) -> date | None:
        """First day covered by the scope; ``None`` for unbounded scopes."""
        match self.kind:
            case ScopeKind.DAY:
                return date(self.year or 1, self.month or 1, self.day or 1)
            case ScopeKind.MONTH:
                return date(self.year or 1, self.month or 1, 1)
            case ScopeKind.YEAR:
                return date(self.year or 1, 1, 1)
            case _:
                return None

    @property
    def title(self) -> str:
        match self.kind:
            case ScopeKind.DAY:
                return (self.start or date.min).isoformat()
            case ScopeKind.MONTH:
                return f"{month_name(self.month or 0)} {self.year}"
            case ScopeKind.YEAR:
                return str(self.year)
            case ScopeKind.ALL_TIME:
                return "All time"
            case ScopeKind.NAMED:
                return self.name or ""

    @property
    def slug(self) -> str:
        """Stable identifier used for file names and page names."""
        match self.kind:
            case ScopeKind.DAY:
                return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"
            case ScopeKind.MONTH:
                return f"{month_name(self.month or 0)}-{self.year}"
            case ScopeKind.YEAR:
                return str(self.year)
            case ScopeKind.ALL_TIME:
                return "all"
            case ScopeKind.NAMED:
                return self.name or ""

    @property
    def file_stem(self) -> str:
        return f"playlist-{self.slug}"

    def contains(self, other: Scope) -> bool:
        """Return True when ``other`` lies inside this scope."""
        if self.kind is ScopeKind.ALL_TIME:
            return other.kind in {ScopeKind.DAY, ScopeKind.MONTH, ScopeKind.YEAR}
        if self.kind is ScopeKind.YEAR:
            return other.kind in {ScopeKind.DAY, ScopeKind.MONTH} and other.year == self.year
        if self.kind is ScopeKind.MONTH:
            return (
                other.kind is ScopeKind.DAY
                and other.year == self.year
                and other.month == self.month
            )
        return False

    def __str__(self) -> str:
        return self.title
