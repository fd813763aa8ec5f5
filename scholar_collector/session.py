"""Collector session: the state behind the two-pane browse/collect workflow.

A session holds the most recently captured Scholar page (the *source*), the
collection document, and the current search term.  Views never poke shared
flags; instead every state change that a view must react to is posted to a
one-shot command queue which the view drains on its next update.
"""

from __future__ import annotations

import enum
import logging
import threading
from collections import deque
from pathlib import Path
from typing import Deque, List, Optional

from scholar_collector.config import settings
from scholar_collector.document import HTMLDocument
from scholar_collector.merger import (
    MergeResult,
    decorate_collection,
    highlight_terms,
    merge_with_report,
    remove_selected,
)

logger = logging.getLogger(__name__)


class ViewCommand(str, enum.Enum):
    RELOAD = "reload"
    HIGHLIGHT = "highlight"
    REMOVE_SELECTIONS = "remove_selections"


class NothingCapturedError(RuntimeError):
    """Raised by :meth:`CollectorSession.transfer` before any page was captured."""


class CollectorSession:
    def __init__(self, document: Optional[HTMLDocument] = None) -> None:
        self.document = document or HTMLDocument()
        self.source_html: str = ""
        self.search_term: str = ""
        self._commands: Deque[ViewCommand] = deque()
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Command queue
    # ------------------------------------------------------------------
    def post(self, command: ViewCommand) -> None:
        with self._lock:
            self._commands.append(command)

    def drain(self) -> List[ViewCommand]:
        """Return pending commands in posting order and forget them."""
        with self._lock:
            pending = list(self._commands)
            self._commands.clear()
        return pending

    # ------------------------------------------------------------------
    # Workflow
    # ------------------------------------------------------------------
    def capture(self, source_html: str) -> None:
        """Record the HTML of the page currently shown in the browse pane."""
        self.source_html = source_html

    def transfer(self) -> MergeResult:
        """Merge the captured page into the collection.

        The first transfer into an empty collection copies the page and, when
        ``settings.decorate_bootstrap`` is set, decorates it with the
        selection/highlight assets.

        Raises:
            NothingCapturedError: If no page has been captured yet.
            ParseError: If either page cannot be parsed; the collection is
                left untouched and no command is posted.
        """
        if not self.source_html:
            raise NothingCapturedError("No page has been captured yet")

        with self._lock:
            result = merge_with_report(self.source_html, self.document.text)
            if result.bootstrapped and settings.decorate_bootstrap:
                result.html = decorate_collection(result.html)
            self.document.text = result.html
            self._commands.extend([ViewCommand.RELOAD, ViewCommand.HIGHLIGHT])

        logger.info(
            "Transfer complete: appended=%d dropped=%d bootstrapped=%s",
            result.appended,
            result.dropped,
            result.bootstrapped,
        )
        return result

    def remove_selections(self) -> None:
        """Drop the cards the user selected in the collection pane."""
        if self.document.is_empty:
            return
        with self._lock:
            self.document.text = remove_selected(self.document.text)
            self._commands.extend([ViewCommand.REMOVE_SELECTIONS, ViewCommand.RELOAD])

    def set_search(self, term: str) -> None:
        self.search_term = term
        self.post(ViewCommand.HIGHLIGHT)

    def highlighted(self) -> str:
        """The collection with the current search term marked up."""
        if self.document.is_empty:
            return ""
        return highlight_terms(self.document.text, self.search_term)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def load(self, path: Path | str) -> None:
        self.document = HTMLDocument.read(path)
        self.post(ViewCommand.RELOAD)

    def save(self, path: Path | str | None = None) -> Path:
        return self.document.write(path)
