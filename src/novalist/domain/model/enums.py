"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class ScopeKind(StrEnum):
    DAY = "day"
    MONTH = "month"
    YEAR = "year"
    ALL_TIME = "all"
    NAMED = "named"
