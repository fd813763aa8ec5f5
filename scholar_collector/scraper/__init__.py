"""Scraper package: fetch Scholar result pages."""

from scholar_collector.scraper.fetcher import build_search_url, fetch_page, is_blocked
from scholar_collector.scraper.models import RawPage

__all__ = ["fetch_page", "build_search_url", "is_blocked", "RawPage"]
