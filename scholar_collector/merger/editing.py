"""In-place style edits of a collection document."""

from __future__ import annotations

import logging
import re
from typing import Optional

from bs4 import NavigableString

from scholar_collector.assets import ASSET_VERSION, selection_script, selection_stylesheet
from scholar_collector.config import settings
from scholar_collector.merger.parser import as_text, parse_html

logger = logging.getLogger(__name__)

ASSET_ATTR = "data-scholarly-asset"

_NO_HIGHLIGHT = ["script", "style", "textarea", "title", "mark"]


def remove_selected(html: str | bytes, selected_class: Optional[str] = None) -> str:
    """Return *html* without the elements the user marked as selected."""
    class_name = selected_class or settings.selected_class
    soup = parse_html(html)

    removed = 0
    for element in soup.find_all(class_=class_name):
        if element.decomposed:
            # Nested inside an element removed earlier in this loop.
            continue
        element.decompose()
        removed += 1

    logger.info("Removed %d selected element(s)", removed)
    return str(soup)


def _term_pattern(term: str) -> Optional[re.Pattern[str]]:
    # Each word is marked on its own, longest first so overlaps prefer it.
    words = sorted(set(term.split()), key=len, reverse=True)
    if not words:
        return None
    return re.compile("|".join(re.escape(w) for w in words), re.IGNORECASE)


def highlight_terms(html: str | bytes, term: str, class_name: Optional[str] = None) -> str:
    """Wrap every occurrence of the words of *term* in ``<mark>``.

    Earlier highlights carrying the same class are removed first, so calling
    this with an empty *term* simply clears them.  Matching ignores case and
    skips text inside scripts, styles and existing marks.
    """
    class_name = class_name or settings.highlight_class
    soup = parse_html(html)

    for mark in soup.find_all("mark", class_=class_name):
        mark.unwrap()
    soup.smooth()

    pattern = _term_pattern(term)
    if pattern is None:
        return str(soup)

    hits = 0
    for text in soup.find_all(string=pattern):
        if type(text) is not NavigableString:
            continue
        if text.find_parent(_NO_HIGHLIGHT) is not None:
            continue

        value = str(text)
        pieces = []
        pos = 0
        for match in pattern.finditer(value):
            if match.start() > pos:
                pieces.append(NavigableString(value[pos:match.start()]))
            mark = soup.new_tag("mark", attrs={"class": class_name})
            mark.string = match.group(0)
            pieces.append(mark)
            pos = match.end()
            hits += 1
        if pos < len(value):
            pieces.append(NavigableString(value[pos:]))
        text.replace_with(*pieces)

    logger.debug("Highlighted %d occurrence(s) of %r", hits, term)
    return str(soup)


def decorate_collection(html: str | bytes) -> str:
    """Add the selection and highlight assets to a bootstrapped collection.

    Adds the mark.js loader and the selection stylesheet to ``<head>`` and the
    click-to-select script to the end of ``<body>``.  Documents lacking either
    element, or already decorated, are returned as they are.
    """
    soup = parse_html(html)
    if soup.head is None or soup.body is None:
        logger.warning("Collection has no <head>/<body>; skipping decoration")
        return as_text(html)
    if soup.find(attrs={ASSET_ATTR: True}) is not None:
        return as_text(html)

    loader = soup.new_tag("script", src=settings.mark_js_url)
    loader[ASSET_ATTR] = "mark.js"
    soup.head.append(loader)

    style = soup.new_tag("style")
    style[ASSET_ATTR] = f"selection.css@{ASSET_VERSION}"
    style.string = selection_stylesheet()
    soup.head.append(style)

    script = soup.new_tag("script")
    script[ASSET_ATTR] = f"selection.js@{ASSET_VERSION}"
    script.string = selection_script()
    soup.body.append(script)

    return str(soup)
