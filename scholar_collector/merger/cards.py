"""Locating and reading result cards."""

from __future__ import annotations

import re
from typing import List, Optional

from bs4 import BeautifulSoup, Tag

from scholar_collector.config import settings
from scholar_collector.merger.models import ResultCard
from scholar_collector.merger.parser import parse_html

_CITED_BY = re.compile(r"Cited by\s+(\d+)", re.IGNORECASE)


def find_cards(soup: BeautifulSoup | Tag, selector: Optional[str] = None) -> List[Tag]:
    """Return every element matching the card selector, in document order."""
    return soup.select(selector or settings.card_selector)


def _text(card: Tag, css: str) -> str:
    elem = card.select_one(css)
    return elem.get_text(" ", strip=True) if elem else ""


def _read_card(card: Tag) -> ResultCard:
    anchor = card.select_one(".gs_rt a")
    title = anchor.get_text(" ", strip=True) if anchor else _text(card, ".gs_rt")

    cited_by = 0
    for link in card.select(".gs_fl a"):
        match = _CITED_BY.search(link.get_text(" ", strip=True))
        if match:
            cited_by = int(match.group(1))
            break

    return ResultCard(
        title=title,
        link=anchor.get("href", "") if anchor else "",
        authors=_text(card, ".gs_a"),
        snippet=_text(card, ".gs_rs"),
        cited_by=cited_by,
        selected=settings.selected_class in card.get("class", []),
    )


def extract_cards(html: str | bytes, selector: Optional[str] = None) -> List[ResultCard]:
    """Parse *html* and return a :class:`ResultCard` for each card found."""
    soup = parse_html(html)
    return [_read_card(card) for card in find_cards(soup, selector)]


def count_cards(html: str | bytes, selector: Optional[str] = None) -> int:
    """Number of cards in *html*.  Empty documents hold none."""
    if not html:
        return 0
    return len(find_cards(parse_html(html), selector))
