"""Text normalisation applied to scraped artist and title strings."""

from __future__ import annotations

import re
import unicodedata

_ARTIST_SEPARATOR = "/"
_ARTIST_JOINER = " and "
_PARENTHETICAL = re.compile(r"\([^)]*\)")
_TIME_PATTERN = re.compile(r"^\s*(\d{1,2})\s*[:hH]\s*(\d{2})\s*$")


def _collapse_spaces(value: str) -> str:
    return " ".join(value.split())


def normalize_artist(value: str) -> str:
    """Lowercase the artist and spell collaborations out with "and"."""
    parts = [_collapse_spaces(part) for part in value.lower().split(_ARTIST_SEPARATOR)]
    return _ARTIST_JOINER.join(part for part in parts if part)


def normalize_title(value: str) -> str:
    return _collapse_spaces(value.lower())


def transliterate(value: str) -> str:
    decomposed = unicodedata.normalize("NFKD", value)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def clean_title(title: str) -> str:
    """Loose form of a title used to spot suspicious search matches.

    Accents and commas are dropped and the first parenthetical (usually
    "(feat. x)" or "(remastered)") is removed.
    """
    text = transliterate(title).lower().replace(",", "")
    text = _PARENTHETICAL.sub("", text, count=1)
    return _collapse_spaces(text)


def parse_time_of_day(value: str) -> tuple[int, int]:
    match = _TIME_PATTERN.match(value)
    if match is None:
        raise ValueError(f"Invalid time of day: {value!r}")
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        raise ValueError(f"Invalid time of day: {value!r}")
    return hour, minute
