"""HTML parsing shared by every merger operation."""

from __future__ import annotations

from typing import Optional

from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup


class ParseError(ValueError):
    """Raised when a document cannot be parsed as HTML.

    ``which`` names the offending input (``"source"`` / ``"destination"``)
    when the error comes out of a merge.
    """

    def __init__(self, message: str, which: Optional[str] = None) -> None:
        super().__init__(message)
        self.which = which


def as_text(markup: str | bytes, which: Optional[str] = None) -> str:
    """Return *markup* as text.  Bytes must be valid UTF-8."""
    if isinstance(markup, bytes):
        try:
            return markup.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ParseError(f"{which or 'document'} is not valid UTF-8: {exc}", which) from exc
    return markup


def parse_html(markup: str | bytes, which: Optional[str] = None) -> BeautifulSoup:
    """Parse *markup* into a BeautifulSoup tree using ``html.parser``.

    Raises:
        ParseError: If the bytes are not UTF-8 or the parser rejects the markup.
    """
    text = as_text(markup, which)
    try:
        return BeautifulSoup(text, "html.parser")
    except ParserRejectedMarkup as exc:
        raise ParseError(f"{which or 'document'} could not be parsed: {exc}", which) from exc
