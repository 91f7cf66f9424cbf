"""Parse Radio Nova's "c'etait quoi ce titre" HTML fragments."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from bs4 import BeautifulSoup

from novalist.domain.ports.fetching import RawTrack

if TYPE_CHECKING:
    from bs4 import Tag

ITEM_SELECTOR = "div.wwtt_content"
ARTIST_SELECTOR = "div.col-lg-7 > div > h2"
TITLE_SELECTOR = "div.col-lg-7 div p:not([class])"
TIME_SELECTOR = "div.col-lg-7 > div > p.time"
STORE_LINK_SELECTOR = "div.col-lg-7 > div > ul > li:nth-child(2) > a"
IMAGE_SELECTOR = "div.col-lg-5 div img"

_NONCE_PATTERN = re.compile(r'"ajax_nonce"\s*:\s*"([^"]+)"')


class NovaMarkupError(ValueError):
    """Raised when a page does not have the expected structure."""


def _last_text(item: Tag, selector: str) -> str:
    matches = item.select(selector)
    if not matches:
        return ""
    return matches[-1].get_text(" ", strip=True)


def _last_attr(item: Tag, selector: str, attr: str) -> str:
    matches = item.select(selector)
    if not matches:
        return ""
    value = matches[-1].get(attr)
    if isinstance(value, list):
        return " ".join(value)
    return value or ""


def parse_playlist_page(html: str) -> list[RawTrack]:
    """Extract every occurrence listed on one page, in page order."""

    soup = BeautifulSoup(html, "html.parser")
    tracks: list[RawTrack] = []
    for item in soup.select(ITEM_SELECTOR):
        artist = _last_text(item, ARTIST_SELECTOR)
        title = _last_text(item, TITLE_SELECTOR)
        if not artist and not title:
            continue
        tracks.append(
            RawTrack(
                artist=artist,
                title=title,
                time=_last_text(item, TIME_SELECTOR),
                image_url=_last_attr(item, IMAGE_SELECTOR, "src"),
                store_url=_last_attr(item, STORE_LINK_SELECTOR, "href"),
            )
        )
    return tracks


def has_playlist_items(html: str) -> bool:
    return "wwtt_content" in html


def extract_nonce(html: str) -> str:
    """Find the ajax nonce the playlist page embeds in its inline scripts."""

    soup = BeautifulSoup(html, "html.parser")
    for script in soup.find_all("script"):
        match = _NONCE_PATTERN.search(script.get_text())
        if match:
            return match.group(1)
    raise NovaMarkupError("No ajax nonce found on the playlist page")
