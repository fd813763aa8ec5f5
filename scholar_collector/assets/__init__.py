"""Script and style assets injected into collection pages.

Assets are plain text files shipped next to this module.  Placeholders are
written as ``{{ name }}`` and filled by :func:`render_asset`; values going
into JavaScript must already be JSON-encoded by the caller, which the
``*_script`` helpers below take care of.
"""

from __future__ import annotations

import json
import re
from typing import Any

from scholar_collector.config import settings

ASSET_VERSION = "1"

ASSETS = {
    "selection.css": "selection.css",
    "selection.js": "selection.js",
    "highlight.js": "highlight.js",
    "remove_selected.js": "remove_selected.js",
}

_PLACEHOLDER = re.compile(r"\{\{\s*(\w+)\s*\}\}")


class UnknownAssetError(KeyError):
    """Raised when an asset name is not registered in :data:`ASSETS`."""


def load_asset(name: str) -> str:
    """Return the raw text of asset *name*."""
    try:
        filename = ASSETS[name]
    except KeyError:
        raise UnknownAssetError(name) from None
    return (settings.assets_dir / filename).read_text(encoding="utf-8")


def render_asset(name: str, **values: Any) -> str:
    """Return asset *name* with its ``{{ placeholders }}`` replaced.

    Raises:
        KeyError: If the asset uses a placeholder missing from *values*.
    """
    text = load_asset(name)

    def _fill(match: re.Match[str]) -> str:
        return str(values[match.group(1)])

    return _PLACEHOLDER.sub(_fill, text)


def selection_stylesheet() -> str:
    return render_asset("selection.css", selected_class=settings.selected_class)


def selection_script() -> str:
    return render_asset(
        "selection.js",
        card_selector=json.dumps(settings.card_selector),
        selected_class=json.dumps(settings.selected_class),
    )


def highlight_script(term: str) -> str:
    """JavaScript that re-marks *term* in a live page with mark.js."""
    return render_asset(
        "highlight.js",
        term=json.dumps(term),
        class_name=json.dumps(settings.highlight_class),
    )


def remove_selected_script() -> str:
    """JavaScript that drops selected cards and returns the page's HTML."""
    return render_asset("remove_selected.js", selected_class=json.dumps(settings.selected_class))
