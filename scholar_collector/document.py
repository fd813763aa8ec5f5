"""The collection document: an HTML text persisted as a UTF-8 file."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


class DocumentReadError(OSError):
    """Raised when a collection file cannot be read or is not UTF-8."""


class DocumentWriteError(OSError):
    """Raised when a collection cannot be written."""


@dataclass
class HTMLDocument:
    """Accumulating collection page.  A new document starts with no text."""

    text: str = ""
    path: Optional[Path] = None

    @property
    def is_empty(self) -> bool:
        return self.text == ""

    @classmethod
    def read(cls, path: Path | str) -> HTMLDocument:
        """Load the document stored at *path*."""
        path = Path(path)
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise DocumentReadError(f"Cannot read {path}: {exc}") from exc
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DocumentReadError(f"{path} is not valid UTF-8") from exc
        logger.debug("Read %d bytes from %s", len(data), path)
        return cls(text=text, path=path)

    @classmethod
    def read_or_new(cls, path: Path | str) -> HTMLDocument:
        """Load *path* if it exists, otherwise start an empty document bound to it."""
        path = Path(path)
        if not path.exists():
            return cls(path=path)
        return cls.read(path)

    def write(self, path: Path | str | None = None) -> Path:
        """Write the document as UTF-8 and remember *path* for later saves.

        Returns:
            The path written to.
        """
        target = Path(path) if path is not None else self.path
        if target is None:
            raise DocumentWriteError("No path given and the document has never been saved")
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(self.text, encoding="utf-8")
        except OSError as exc:
            raise DocumentWriteError(f"Cannot write {target}: {exc}") from exc
        self.path = target
        logger.info("Saved collection to %s", target)
        return target
