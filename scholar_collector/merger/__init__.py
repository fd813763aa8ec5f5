"""Merger package: result-card location, merging and collection edits."""

from scholar_collector.merger.cards import count_cards, extract_cards, find_cards
from scholar_collector.merger.editing import decorate_collection, highlight_terms, remove_selected
from scholar_collector.merger.merge import merge, merge_with_report
from scholar_collector.merger.models import MergeResult, ResultCard
from scholar_collector.merger.parser import ParseError, parse_html

__all__ = [
    "merge",
    "merge_with_report",
    "find_cards",
    "extract_cards",
    "count_cards",
    "remove_selected",
    "highlight_terms",
    "decorate_collection",
    "parse_html",
    "ParseError",
    "MergeResult",
    "ResultCard",
]
