"""Scholarly CLI: entry-point for all collector operations.

Usage:
    python cli/main.py --help

Commands:
    merge       merge the result cards of one HTML file into another
    fetch       fetch a Scholar results page and merge it into a collection
    collection  inspect and edit a collection file
"""

from __future__ import annotations

import enum
import sys
from pathlib import Path

# Ensure the project root is on sys.path so that
# `from scholar_collector.xxx import ...` works when the CLI is invoked as
# `python cli/main.py` from any working directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from typing import Optional

import httpx
import typer
from soupsieve import SelectorSyntaxError

from scholar_collector.config import settings
from scholar_collector.document import DocumentReadError, DocumentWriteError, HTMLDocument
from scholar_collector.logging_config import configure_logging
from scholar_collector.merger import decorate_collection, merge_with_report
from scholar_collector.scraper import build_search_url, fetch_page

from cli.commands.collection import collection_app
from cli.context import resolve_collection

app = typer.Typer(
    name="scholarly",
    help="Collect Google Scholar result entries into one HTML document.",
    no_args_is_help=True,
)
app.add_typer(collection_app, name="collection")


class OrphanPolicy(str, enum.Enum):
    drop = "drop"
    append = "append"


@app.callback()
def main(
    log_level: str = typer.Option(settings.log_level, "--log-level", help="Logging level."),
) -> None:
    configure_logging(log_level)


def _merge_into(
    source: str,
    target: Path,
    output: Optional[Path],
    selector: Optional[str],
    orphans: Optional[str],
    decorate: bool,
) -> None:
    """Merge *source* into the document at *target* and write the result."""
    try:
        document = HTMLDocument.read_or_new(target)
        result = merge_with_report(source, document.text, selector=selector, orphans=orphans)
    except (DocumentReadError, ValueError, SelectorSyntaxError) as exc:
        typer.echo(f"❌ {exc}")
        raise typer.Exit(code=1)

    document.text = result.html
    if result.bootstrapped and decorate:
        document.text = decorate_collection(document.text)

    try:
        written = document.write(output or target)
    except DocumentWriteError as exc:
        typer.echo(f"❌ {exc}")
        raise typer.Exit(code=1)

    if result.bootstrapped:
        typer.echo(f"✅ Started collection {written}")
    else:
        typer.echo(f"✅ Appended {result.appended} card(s) to {written}")
    if result.dropped:
        typer.echo(
            f"⚠️  Dropped {result.dropped} card(s): the collection has no card to append after."
        )


# ---------------------------------------------------------------------------
# merge
# ---------------------------------------------------------------------------
@app.command("merge")
def merge_cmd(
    source: Path = typer.Argument(..., exists=True, dir_okay=False, help="HTML page to take cards from."),
    destination: Path = typer.Argument(..., dir_okay=False, help="Collection to append to (created if missing)."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write here instead of DESTINATION."),
    selector: Optional[str] = typer.Option(None, "--selector", help="CSS selector of a result card."),
    orphans: Optional[OrphanPolicy] = typer.Option(
        None, "--orphans", case_sensitive=False, help="What to do with cards when DESTINATION has none."
    ),
    decorate: bool = typer.Option(False, "--decorate/--no-decorate", help="Decorate a new collection."),
) -> None:
    """Append the result cards of SOURCE to DESTINATION."""
    try:
        source_text = HTMLDocument.read(source).text
    except DocumentReadError as exc:
        typer.echo(f"❌ {exc}")
        raise typer.Exit(code=1)
    _merge_into(source_text, destination, output, selector, orphans.value if orphans else None, decorate)


# ---------------------------------------------------------------------------
# fetch
# ---------------------------------------------------------------------------
@app.command("fetch")
def fetch_cmd(
    query: str = typer.Argument(..., help="Search query, or a full Scholar URL."),
    into: Optional[Path] = typer.Option(None, "--into", help="Collection file (defaults to the active one)."),
    start: int = typer.Option(0, "--start", help="Result offset (page * 10)."),
) -> None:
    """Fetch a Scholar results page and merge its cards into a collection."""
    target = resolve_collection(into)
    if query.startswith(("http://", "https://")):
        url = query
    else:
        url = build_search_url(query, start=str(start)) if start else build_search_url(query)

    typer.echo(f"🌐 Fetching {url}")
    try:
        raw = fetch_page(url)
    except httpx.HTTPError as exc:
        typer.echo(f"❌ Fetch failed: {exc}")
        raise typer.Exit(code=1)
    if raw.blocked:
        typer.echo("❌ Scholar answered with a CAPTCHA page; nothing merged.")
        raise typer.Exit(code=1)

    _merge_into(raw.html, target, None, None, None, settings.decorate_bootstrap)


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
