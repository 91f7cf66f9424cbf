from __future__ import annotations

from datetime import date

import pytest

from novalist.domain.model import Scope, ScopeKind, month_from_name, month_name


@pytest.mark.parametrize(
    ("scope", "title", "stem"),
    [
        (Scope.for_day(date(2024, 1, 5)), "2024-01-05", "playlist-2024-01-05"),
        (Scope.for_month(2024, 1), "January 2024", "playlist-January-2024"),
        (Scope.for_year(2024), "2024", "playlist-2024"),
        (Scope.all_time(), "All time", "playlist-all"),
        (Scope.named("summer"), "summer", "playlist-summer"),
    ],
)
def test_titles_and_file_stems(scope: Scope, title: str, stem: str) -> None:
    assert scope.title == title
    assert scope.file_stem == stem


def test_start_dates() -> None:
    assert Scope.for_month(2024, 3).start == date(2024, 3, 1)
    assert Scope.for_year(2024).start == date(2024, 1, 1)
    assert Scope.all_time().start is None
    assert Scope.named("x").start is None


def test_invalid_scopes_are_rejected() -> None:
    with pytest.raises(ValueError, match="Month must be between 1 and 12"):
        Scope.for_month(2024, 13)
    with pytest.raises(ValueError, match="need a name"):
        Scope(ScopeKind.NAMED)
    with pytest.raises(ValueError, match="day is out of range"):
        Scope(ScopeKind.DAY, year=2023, month=2, day=30)


def test_contains() -> None:
    year = Scope.for_year(2024)

    assert year.contains(Scope.for_month(2024, 6))
    assert not year.contains(Scope.for_month(2023, 6))
    assert Scope.for_month(2024, 6).contains(Scope.for_day(date(2024, 6, 2)))
    assert Scope.all_time().contains(Scope.for_month(1999, 1))
    assert not Scope.all_time().contains(Scope.named("x"))


def test_month_names() -> None:
    assert month_name(12) == "December"
    assert month_from_name("march") == 3
    with pytest.raises(ValueError, match="Unknown month"):
        month_from_name("Brumaire")
