"""HTTP fetcher for Google Scholar result pages."""

from __future__ import annotations

import logging
from urllib.parse import urlencode

import httpx

from scholar_collector.config import settings
from scholar_collector.scraper.models import RawPage

logger = logging.getLogger(__name__)

_DEFAULT_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
        "AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.0 Safari/605.1.15"
    ),
    "Accept-Language": "en",
}

# Scholar answers automated traffic with this CAPTCHA form instead of results.
_CAPTCHA_MARKERS = ('id="gs_captcha_f"', "id='gs_captcha_f'", "/sorry/index")


def is_blocked(html: str) -> bool:
    """Return ``True`` if *html* is Scholar's CAPTCHA / rate-limit page."""
    return any(marker in html for marker in _CAPTCHA_MARKERS)


def build_search_url(query: str, **params: str) -> str:
    """Return the Scholar search URL for *query*.

    Extra keyword arguments are added as query parameters (e.g. ``start="10"``).
    """
    args = {"hl": "en", "as_sdt": "0,5", "q": query, "btnG": ""}
    args.update(params)
    return f"{settings.scholar_base_url.rstrip('/')}/scholar?{urlencode(args)}"


def fetch_page(url: str) -> RawPage:
    """Fetch *url* and return a :class:`RawPage`.

    The body is decoded with the charset announced in ``Content-Type``
    (httpx falls back to UTF-8 detection when none is given).

    Raises:
        httpx.HTTPStatusError: If the server returns a 4xx/5xx status code.
    """
    logger.info("Fetching %s", url)
    with httpx.Client(
        headers=_DEFAULT_HEADERS,
        timeout=settings.request_timeout,
        follow_redirects=True,
    ) as client:
        response = client.get(url)
        response.raise_for_status()
        raw = RawPage(
            url=str(response.url),
            html=response.text,
            status_code=response.status_code,
            encoding=response.encoding,
        )

    raw.blocked = is_blocked(raw.html)
    if raw.blocked:
        logger.warning("Scholar served a CAPTCHA page for %s", url)
    return raw
