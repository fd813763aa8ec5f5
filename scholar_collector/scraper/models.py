"""Data models for the scraper pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class RawPage:
    """The raw HTTP response for a single Scholar page fetch."""

    url: str
    html: str
    status_code: int
    encoding: Optional[str] = None
    blocked: bool = False
