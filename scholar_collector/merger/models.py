"""Data models for the merger pipeline."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ResultCard:
    """One Scholar search-result entry, as read from its card element."""

    title: str
    link: str = ""
    authors: str = ""
    snippet: str = ""
    cited_by: int = 0
    selected: bool = False


@dataclass
class MergeResult:
    """Outcome of a single merge of a source page into a destination."""

    html: str
    appended: int = 0
    dropped: int = 0
    bootstrapped: bool = False
