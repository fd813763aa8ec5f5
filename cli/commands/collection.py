"""Collection commands: pick, inspect and edit a collection file."""

from pathlib import Path
from typing import Optional

import typer

from scholar_collector.document import DocumentReadError, DocumentWriteError, HTMLDocument
from scholar_collector.merger import (
    ParseError,
    decorate_collection,
    extract_cards,
    highlight_terms,
    remove_selected,
)

from cli.context import load_context, resolve_collection, save_context

collection_app = typer.Typer(help="Inspect and edit collection files.")


def _read(path: Path) -> HTMLDocument:
    try:
        return HTMLDocument.read(path)
    except DocumentReadError as e:
        typer.echo(f"❌ {e}")
        raise typer.Exit(code=1)


def _write(document: HTMLDocument, output: Optional[Path] = None) -> Path:
    try:
        return document.write(output)
    except DocumentWriteError as e:
        typer.echo(f"❌ {e}")
        raise typer.Exit(code=1)


@collection_app.command("use")
def collection_use(
    path: Path = typer.Argument(..., dir_okay=False, help="Collection file (created on first merge)."),
) -> None:
    """Make PATH the active collection."""
    ctx = load_context()
    ctx.active_collection = str(path.resolve())
    save_context(ctx)
    typer.echo(f"📂 Active collection: {ctx.active_collection}")


@collection_app.command("show")
def collection_show(
    path: Optional[Path] = typer.Argument(None, help="Collection file (defaults to the active one)."),
) -> None:
    """List the result cards of a collection."""
    document = _read(resolve_collection(path))
    if document.is_empty:
        typer.echo("Collection is empty.")
        return
    try:
        cards = extract_cards(document.text)
    except ParseError as e:
        typer.echo(f"❌ {e}")
        raise typer.Exit(code=1)

    if not cards:
        typer.echo("No result cards found.")
        return

    typer.echo(f"{len(cards)} card(s) in {document.path}:")
    for i, card in enumerate(cards, start=1):
        marker = "*" if card.selected else " "
        cited = f"  [cited by {card.cited_by}]" if card.cited_by else ""
        typer.echo(f"{marker}{i:3d}. {card.title}{cited}")
        if card.authors:
            typer.echo(f"       {card.authors}")


@collection_app.command("prune")
def collection_prune(
    path: Optional[Path] = typer.Argument(None, help="Collection file (defaults to the active one)."),
) -> None:
    """Remove the cards marked as selected."""
    document = _read(resolve_collection(path))
    if document.is_empty:
        typer.echo("Collection is empty.")
        return
    try:
        document.text = remove_selected(document.text)
    except ParseError as e:
        typer.echo(f"❌ {e}")
        raise typer.Exit(code=1)
    written = _write(document)
    typer.echo(f"✅ Removed selected cards from {written}")


@collection_app.command("highlight")
def collection_highlight(
    term: str = typer.Argument(..., help="Words to highlight (empty string clears)."),
    path: Optional[Path] = typer.Argument(None, help="Collection file (defaults to the active one)."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write here instead of in place."),
) -> None:
    """Mark every occurrence of TERM in the collection."""
    document = _read(resolve_collection(path))
    try:
        document.text = highlight_terms(document.text, term)
    except ParseError as e:
        typer.echo(f"❌ {e}")
        raise typer.Exit(code=1)
    written = _write(document, output)
    typer.echo(f"✅ Highlighted {term!r} in {written}")


@collection_app.command("decorate")
def collection_decorate(
    path: Optional[Path] = typer.Argument(None, help="Collection file (defaults to the active one)."),
) -> None:
    """Add the selection and highlight scripts to a collection."""
    document = _read(resolve_collection(path))
    try:
        document.text = decorate_collection(document.text)
    except ParseError as e:
        typer.echo(f"❌ {e}")
        raise typer.Exit(code=1)
    written = _write(document)
    typer.echo(f"✅ Decorated {written}")
