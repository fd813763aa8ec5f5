"""Tests for the CLI context management module."""

from pathlib import Path

import pytest
import typer

from cli.context import (
    CliContext,
    _get_context_path,
    load_context,
    resolve_collection,
    save_context,
)


@pytest.fixture
def temp_context_dir(tmp_path, monkeypatch):
    """Override the config directory to use a temporary path."""
    context_dir = tmp_path / ".scholarly_cli"
    monkeypatch.setattr("cli.context.settings.cli_config_dir", context_dir)
    return context_dir


def test_load_default_context(temp_context_dir):
    """Should return defaults when no file exists."""
    ctx = load_context()
    assert isinstance(ctx, CliContext)
    assert ctx.active_collection is None


def test_save_and_load_roundtrip(temp_context_dir):
    """Should save context to disk (creating the directory) and load it back."""
    save_context(CliContext(active_collection="/tmp/collection.html"))

    assert _get_context_path() == temp_context_dir / "context.json"
    assert load_context().active_collection == "/tmp/collection.html"


def test_load_corrupt_context(temp_context_dir):
    """Should return defaults if the file is corrupt JSON."""
    temp_context_dir.mkdir()
    (temp_context_dir / "context.json").write_text("{invalid-json", encoding="utf-8")

    assert load_context().active_collection is None


def test_load_non_utf8_context(temp_context_dir):
    """A context file that is not UTF-8 also falls back to defaults."""
    temp_context_dir.mkdir()
    (temp_context_dir / "context.json").write_bytes(b"\xff\xfe{")

    assert load_context() == CliContext()


def test_load_unknown_keys(temp_context_dir):
    """Contexts written by other versions fall back to defaults."""
    temp_context_dir.mkdir()
    (temp_context_dir / "context.json").write_text('{"active_project_id": "x"}', encoding="utf-8")

    assert load_context() == CliContext()


def test_resolve_explicit_path_wins(temp_context_dir):
    save_context(CliContext(active_collection="/tmp/active.html"))
    assert resolve_collection(Path("given.html")) == Path("given.html")


def test_resolve_active_collection(temp_context_dir):
    save_context(CliContext(active_collection="/tmp/active.html"))
    assert resolve_collection(None) == Path("/tmp/active.html")


def test_resolve_without_active_collection_exits(temp_context_dir):
    with pytest.raises(typer.Exit) as excinfo:
        resolve_collection(None)
    assert excinfo.value.exit_code == 1
