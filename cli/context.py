"""Persistent state management for the Scholarly CLI.

Tracks the "active collection" file so commands can omit it.
Stored in `~/.scholarly_cli/context.json`.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional

import typer
from scholar_collector.config import settings


@dataclass
class CliContext:
    active_collection: str | None = None

    def to_json(self) -> str:
        return json.dumps(asdict(self), indent=2)

    @classmethod
    def from_json(cls, data: str) -> CliContext:
        try:
            raw = json.loads(data)
            return cls(**raw)
        except (json.JSONDecodeError, TypeError):
            return cls()


def _get_context_path() -> Path:
    """Return the path to the context JSON file."""
    return settings.cli_config_dir / "context.json"


def load_context() -> CliContext:
    """Load the CLI context from disk. Returns defaults if missing/corrupt."""
    path = _get_context_path()
    if not path.exists():
        return CliContext()
    try:
        return CliContext.from_json(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError):
        return CliContext()


def save_context(ctx: CliContext) -> None:
    """Save the CLI context to disk."""
    settings.cli_config_dir.mkdir(parents=True, exist_ok=True)
    _get_context_path().write_text(ctx.to_json(), encoding="utf-8")


def resolve_collection(path: Optional[Path]) -> Path:
    """Return *path*, or the active collection when *path* is omitted.

    Aborts the command when neither is available.
    """
    if path is not None:
        return path
    ctx = load_context()
    if not ctx.active_collection:
        typer.echo("❌ No collection given and no active collection selected.")
        typer.echo("Run 'collection use <file>' first or pass a file.")
        raise typer.Exit(code=1)
    return Path(ctx.active_collection)
