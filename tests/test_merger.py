"""Tests for the result-set merger.

All documents are small hand-written Scholar-like pages; each card carries
its title in ``h3.gs_rt a`` so the resulting card order can be read back with
``extract_cards``.
"""

from __future__ import annotations

import logging

import pytest
from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup

from scholar_collector.merger import (
    MergeResult,
    ParseError,
    extract_cards,
    merge,
    merge_with_report,
)


# ---------------------------------------------------------------------------
# Fixtures / helpers
# ---------------------------------------------------------------------------

def _card(title: str, extra_class: str = "") -> str:
    classes = "gs_r gs_or gs_scl" + (f" {extra_class}" if extra_class else "")
    return (
        f'<div class="{classes}">'
        f'<h3 class="gs_rt"><a href="https://example.org/{title}">{title}</a></h3>'
        f"</div>"
    )


def _page(*cards: str) -> str:
    return (
        "<!DOCTYPE html>\n"
        "<html><head><title>Scholar</title><style>.gs_r{margin:0}</style></head>"
        "<body><header>Scholar header</header>"
        f'<div id="gs_res_ccl_mid">{"".join(cards)}</div>'
        "<footer>Scholar footer</footer>"
        "<script>var loaded = true;</script>"
        "</body></html>"
    )


def _titles(html: str) -> list[str]:
    return [card.title for card in extract_cards(html)]


# ---------------------------------------------------------------------------
# Bootstrap
# ---------------------------------------------------------------------------

class TestBootstrap:
    def test_both_empty(self) -> None:
        assert merge("", "") == ""

    def test_empty_destination_adopts_source_verbatim(self) -> None:
        source = "<html><body><div class='gs_r gs_or gs_scl'>A</div></body></html>"
        assert merge(source, "") == source

    def test_report_marks_bootstrap(self) -> None:
        result = merge_with_report(_page(_card("s1")), "")
        assert isinstance(result, MergeResult)
        assert result.bootstrapped is True
        assert result.appended == 0
        assert result.dropped == 0

    def test_bytes_source_is_decoded(self) -> None:
        source = _page(_card("café"))
        assert merge(source.encode("utf-8"), "") == source


# ---------------------------------------------------------------------------
# Appending
# ---------------------------------------------------------------------------

class TestAppend:
    def test_preserves_order(self) -> None:
        destination = _page(_card("d1"), _card("d2"))
        source = _page(_card("s1"), _card("s2"))

        assert _titles(merge(source, destination)) == ["d1", "d2", "s1", "s2"]

    def test_report_counts_appended_cards(self) -> None:
        result = merge_with_report(_page(_card("s1"), _card("s2")), _page(_card("d1")))
        assert result.appended == 2
        assert result.dropped == 0
        assert result.bootstrapped is False

    def test_inserts_after_last_card_across_containers(self) -> None:
        destination = (
            "<html><body>"
            f'<div id="first">{_card("d1")}</div>'
            f'<div id="second">{_card("d2")}</div>'
            "<p>tail</p>"
            "</body></html>"
        )
        result = merge(_page(_card("s1")), destination)

        soup = BeautifulSoup(result, "html.parser")
        second = soup.find(id="second")
        assert [c.title for c in extract_cards(str(second))] == ["d2", "s1"]
        assert soup.body.find_all(recursive=False)[-1].name == "p"

    def test_cardless_source_returns_destination_unchanged(self) -> None:
        destination = _page(_card("d1"))
        source = "<html><body><p>No results</p></body></html>"
        assert merge(source, destination) == destination

    def test_surrounding_content_untouched(self) -> None:
        destination = _page(_card("d1"))
        result = merge(_page(_card("s1")), destination)

        soup = BeautifulSoup(result, "html.parser")
        body_children = [tag.name for tag in soup.body.find_all(recursive=False)]
        assert body_children == ["header", "div", "footer", "script"]
        assert soup.find("header").get_text() == "Scholar header"
        assert soup.find("script").string == "var loaded = true;"
        assert soup.find("style").string == ".gs_r{margin:0}"
        assert soup.title.string == "Scholar"

    def test_source_page_shell_is_not_copied(self) -> None:
        source = _page(_card("s1")).replace("Scholar footer", "Source footer")
        result = merge(source, _page(_card("d1")))
        assert "Source footer" not in result

    def test_source_text_not_mutated(self) -> None:
        source = _page(_card("s1"))
        original = str(source)
        merge(source, _page(_card("d1")))
        assert source == original

    def test_double_merge_duplicates_cards(self) -> None:
        source = _page(_card("s1"), _card("s2"))
        destination = _page(_card("d1"))

        once = merge(source, destination)
        twice = merge(source, once)

        assert _titles(twice) == ["d1", "s1", "s2", "s1", "s2"]

    def test_bytes_inputs(self) -> None:
        result = merge(
            _page(_card("s1")).encode("utf-8"),
            _page(_card("d1")).encode("utf-8"),
        )
        assert isinstance(result, str)
        assert _titles(result) == ["d1", "s1"]


# ---------------------------------------------------------------------------
# Card signature
# ---------------------------------------------------------------------------

class TestSelector:
    def test_partial_class_match_is_not_a_card(self) -> None:
        source = '<html><body><div class="gs_r gs_or">not a card</div></body></html>'
        destination = _page(_card("d1"))
        assert merge(source, destination) == destination

    def test_extra_classes_still_match(self) -> None:
        source = _page(_card("s1", extra_class="selected"))
        assert _titles(merge(source, _page(_card("d1")))) == ["d1", "s1"]

    def test_custom_selector(self) -> None:
        destination = "<ul><li class='hit'>d1</li><li>other</li></ul>"
        source = "<ul><li class='hit'>s1</li><li class='hit'>s2</li></ul>"

        result = merge(source, destination, selector="li.hit")

        soup = BeautifulSoup(result, "html.parser")
        assert [li.get_text() for li in soup.find_all("li")] == ["d1", "s1", "s2", "other"]

    def test_selector_from_settings(self, monkeypatch) -> None:
        monkeypatch.setattr("scholar_collector.config.settings.card_selector", "article.entry")
        destination = "<main><article class='entry'>d1</article></main>"
        source = "<main><article class='entry'>s1</article></main>"

        result = merge(source, destination)

        soup = BeautifulSoup(result, "html.parser")
        assert [a.get_text() for a in soup.find_all("article")] == ["d1", "s1"]


# ---------------------------------------------------------------------------
# Destination without cards
# ---------------------------------------------------------------------------

class TestOrphans:
    _SOURCE = "<html><body><div class='gs_r gs_or gs_scl'>A</div></body></html>"
    _EMPTY_BODY = "<html><body></body></html>"

    def test_cards_dropped_by_default(self) -> None:
        result = merge_with_report(self._SOURCE, self._EMPTY_BODY)
        assert result.dropped == 1
        assert result.appended == 0
        assert "gs_scl" not in result.html

    def test_drop_is_logged(self, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="scholar_collector"):
            merge(self._SOURCE, self._EMPTY_BODY)
        assert any("dropped 1" in rec.getMessage() for rec in caplog.records)

    def test_append_policy_inserts_into_body(self) -> None:
        result = merge(self._SOURCE, self._EMPTY_BODY, orphans="append")

        soup = BeautifulSoup(result, "html.parser")
        cards = soup.select("div.gs_r.gs_or.gs_scl")
        assert len(cards) == 1
        assert cards[0].get_text() == "A"
        assert cards[0].parent.name == "body"

    def test_append_policy_keeps_order(self) -> None:
        source = _page(_card("s1"), _card("s2"), _card("s3"))
        result = merge(source, self._EMPTY_BODY, orphans="append")
        assert _titles(result) == ["s1", "s2", "s3"]

    def test_append_policy_without_body(self) -> None:
        result = merge(self._SOURCE, "<p>notes</p>", orphans="append")
        assert result.startswith("<p>notes</p>")
        assert result.count("gs_scl") == 1

    def test_policy_from_settings(self, monkeypatch) -> None:
        monkeypatch.setattr("scholar_collector.config.settings.orphan_cards", "append")
        assert merge_with_report(self._SOURCE, self._EMPTY_BODY).appended == 1

    def test_unknown_policy_rejected(self) -> None:
        with pytest.raises(ValueError, match="orphan policy"):
            merge(self._SOURCE, self._EMPTY_BODY, orphans="prepend")


# ---------------------------------------------------------------------------
# Parse failures
# ---------------------------------------------------------------------------

class TestParseErrors:
    def test_invalid_utf8_source(self) -> None:
        destination = _page(_card("d1"))
        before = str(destination)

        with pytest.raises(ParseError) as excinfo:
            merge(b"<html>\xff\xfe</html>", destination)

        assert excinfo.value.which == "source"
        assert destination == before

    def test_invalid_utf8_destination(self) -> None:
        with pytest.raises(ParseError) as excinfo:
            merge(_page(_card("s1")), b"\xc3\x28")
        assert excinfo.value.which == "destination"

    def test_parser_rejection_becomes_parse_error(self, monkeypatch) -> None:
        def _reject(*args, **kwargs):
            raise ParserRejectedMarkup("unrecoverable markup")

        monkeypatch.setattr("scholar_collector.merger.parser.BeautifulSoup", _reject)

        with pytest.raises(ParseError, match="unrecoverable markup"):
            merge(_page(_card("s1")), _page(_card("d1")))

    def test_parse_error_is_a_value_error(self) -> None:
        assert issubclass(ParseError, ValueError)
