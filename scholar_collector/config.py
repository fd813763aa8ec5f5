"""Centralised settings for the Scholarly collector.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (two levels up from this file)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Workspace / storage
    # ------------------------------------------------------------------
    workspace_dir: Path = field(
        default_factory=lambda: Path(
            os.environ.get("COLLECTOR_WORKSPACE", Path.home() / ".scholarly")
        )
    )
    cli_config_dir: Path = field(
        default_factory=lambda: Path(
            os.environ.get("CLI_CONFIG_DIR", Path.home() / ".scholarly_cli")
        )
    )
    collection_path_override: str = field(
        default_factory=lambda: os.environ.get("COLLECTION_PATH", "")
    )

    @property
    def collection_path(self) -> Path:
        """Default collection file used by the API session."""
        if self.collection_path_override:
            return Path(self.collection_path_override)
        return self.workspace_dir / "collection.html"

    @property
    def assets_dir(self) -> Path:
        """Directory holding the script/style assets bundled with the package."""
        return Path(__file__).resolve().parent / "assets"

    # ------------------------------------------------------------------
    # Result cards
    # ------------------------------------------------------------------
    card_selector: str = field(
        default_factory=lambda: os.environ.get("CARD_SELECTOR", "div.gs_r.gs_or.gs_scl")
    )
    selected_class: str = field(
        default_factory=lambda: os.environ.get("SELECTED_CLASS", "selected")
    )
    highlight_class: str = field(
        default_factory=lambda: os.environ.get("HIGHLIGHT_CLASS", "highlight")
    )
    # "drop" keeps the historical behaviour; "append" adds orphans to <body>.
    orphan_cards: str = field(
        default_factory=lambda: os.environ.get("ORPHAN_CARDS", "drop")
    )
    decorate_bootstrap: bool = field(
        default_factory=lambda: _env_flag("DECORATE_BOOTSTRAP", "true")
    )
    mark_js_url: str = field(
        default_factory=lambda: os.environ.get(
            "MARK_JS_URL",
            "https://cdnjs.cloudflare.com/ajax/libs/mark.js/8.11.1/mark.min.js",
        )
    )

    # ------------------------------------------------------------------
    # Scraper
    # ------------------------------------------------------------------
    scholar_base_url: str = field(
        default_factory=lambda: os.environ.get("SCHOLAR_BASE_URL", "https://scholar.google.com")
    )
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("REQUEST_TIMEOUT", "30.0"))
    )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    log_level: str = field(
        default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO")
    )

    def ensure_workspace(self) -> None:
        """Create the workspace directory if it does not exist."""
        self.workspace_dir.mkdir(parents=True, exist_ok=True)


# Module-level singleton, import this everywhere:
#   from scholar_collector.config import settings
settings = Settings()
