"""Result-set merger: splice the result cards of one page into another.

The destination accumulates cards over many merges.  The first merge into an
empty destination adopts the source page wholesale; every later merge copies
only the source's cards, appending each one right after the destination's
current last card so the source order is kept.

A destination with no card at all has nowhere to anchor the insertion.  Such
cards are dropped and logged (``orphans="drop"``, the default) unless the
caller asks for them to be appended to ``<body>`` (``orphans="append"``).

Merging is not idempotent: merging the same source twice duplicates its cards.
"""

from __future__ import annotations

import copy
import logging
from typing import Optional

from scholar_collector.config import settings
from scholar_collector.merger.cards import find_cards
from scholar_collector.merger.models import MergeResult
from scholar_collector.merger.parser import as_text, parse_html

logger = logging.getLogger(__name__)

ORPHAN_POLICIES = ("drop", "append")


def merge_with_report(
    source: str | bytes,
    destination: str | bytes,
    selector: Optional[str] = None,
    orphans: Optional[str] = None,
) -> MergeResult:
    """Merge *source* into *destination* and report what happened.

    Args:
        source: HTML of the freshly captured page.
        destination: HTML of the accumulating collection; empty to bootstrap.
        selector: CSS selector identifying a result card.  Defaults to
            ``settings.card_selector``.
        orphans: ``"drop"`` or ``"append"``; what to do with a card when the
            destination holds no card to insert after.  Defaults to
            ``settings.orphan_cards``.

    Returns:
        A :class:`MergeResult` with the new destination HTML.

    Raises:
        ParseError: If either input cannot be parsed.  Both inputs are parsed
            before anything is inserted, so no partial result is produced.
        ValueError: If *orphans* is not a known policy.
    """
    policy = orphans or settings.orphan_cards
    if policy not in ORPHAN_POLICIES:
        raise ValueError(f"Unknown orphan policy {policy!r}; expected one of {ORPHAN_POLICIES}")

    if not destination:
        logger.info("Destination is empty; adopting source page")
        return MergeResult(html=as_text(source, "source"), bootstrapped=True)

    selector = selector or settings.card_selector
    source_soup = parse_html(source, which="source")
    incoming = find_cards(source_soup, selector)
    dest_soup = parse_html(destination, which="destination")

    if not incoming:
        logger.debug("Source holds no cards matching %r", selector)
        return MergeResult(html=as_text(destination, "destination"))

    appended = dropped = 0
    for card in incoming:
        # Re-query each time: the selector may be context dependent, so a
        # freshly inserted card is not guaranteed to be the new last match.
        existing = find_cards(dest_soup, selector)
        clone = copy.copy(card)
        if existing:
            existing[-1].insert_after(clone)
            appended += 1
        elif policy == "append":
            (dest_soup.body or dest_soup).append(clone)
            appended += 1
        else:
            dropped += 1

    if dropped:
        logger.warning(
            "Destination holds no card matching %r; dropped %d incoming card(s)",
            selector,
            dropped,
        )
    logger.info("Merged %d card(s) into destination", appended)

    return MergeResult(html=str(dest_soup), appended=appended, dropped=dropped)


def merge(
    source: str | bytes,
    destination: str | bytes,
    selector: Optional[str] = None,
    orphans: Optional[str] = None,
) -> str:
    """Return *destination* with the cards of *source* appended.

    See :func:`merge_with_report` for the arguments and failure modes.
    """
    return merge_with_report(source, destination, selector=selector, orphans=orphans).html
