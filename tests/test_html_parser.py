"""Tests for the article HTML parser."""

from __future__ import annotations

import logging

import pytest

from wiki2term.exceptions import EmptyDocumentError, MalformedDocumentError, ParseError
from wiki2term.html_parser import parse_article_html
from wiki2term.schemas import (
    ArticleMetadata,
    Divider,
    Heading,
    LinkSpan,
    ListItem,
    Paragraph,
    SpanStyle,
    TextSpan,
)


class TestParseErrors:
    """Inputs that cannot produce a Document."""

    def test_empty_string_raises(self) -> None:
        with pytest.raises(EmptyDocumentError):
            parse_article_html("")

    def test_empty_bytes_raises(self) -> None:
        with pytest.raises(EmptyDocumentError):
            parse_article_html(b"")

    def test_invalid_utf8_raises_malformed(self) -> None:
        with pytest.raises(MalformedDocumentError, match="invalid UTF-8") as exc_info:
            parse_article_html(b"<p>caf\xe9</p>")

        assert isinstance(exc_info.value, ParseError)
        assert "byte 6" in exc_info.value.reason

    def test_deep_nesting_raises_malformed(self) -> None:
        with pytest.raises(MalformedDocumentError, match="nested too deeply"):
            parse_article_html("<div>" * 3000 + "deep" + "</div>" * 3000)

    def test_utf8_bytes_are_accepted(self) -> None:
        document = parse_article_html("<p>café</p>".encode("utf-8"))

        assert document.elements == [Paragraph(spans=[TextSpan(text="café")])]


class TestArticleStructure:
    """Block and inline structure of a full article page."""

    def test_extracts_title_and_skips_title_heading(self, article_html: str) -> None:
        document = parse_article_html(article_html)

        assert document.title == "Rust (programming language)"
        assert all(
            not (isinstance(element, Heading) and element.level == 1)
            for element in document.elements
        )

    def test_element_kinds_in_document_order(self, article_html: str) -> None:
        document = parse_article_html(article_html)

        kinds = [element.kind for element in document.elements]
        assert kinds == [
            "paragraph",
            "heading",
            "paragraph",
            "heading",
            "list_item",
            "list_item",
            "list_item",
            "divider",
            "heading",
            "paragraph",
            "paragraph",
        ]

    def test_paragraph_keeps_emphasis_and_links(self, article_html: str) -> None:
        document = parse_article_html(article_html)

        assert document.elements[0] == Paragraph(
            spans=[
                TextSpan(text="Rust", style=SpanStyle.BOLD),
                TextSpan(text=" is a "),
                LinkSpan(
                    link_id=0,
                    target="/wiki/General-purpose_programming_language",
                    text="general-purpose",
                ),
                TextSpan(text=" programming language emphasizing "),
                TextSpan(text="performance", style=SpanStyle.ITALIC),
                TextSpan(text="."),
            ]
        )

    def test_headings_carry_level_and_anchor(self, article_html: str) -> None:
        document = parse_article_html(article_html)

        headings = [element for element in document.elements if isinstance(element, Heading)]
        assert [(h.level, h.text, h.anchor) for h in headings] == [
            (2, "History", "History"),
            (3, "Early years", "Early_years"),
            (2, "See also", "See_also"),
        ]

    def test_lists_flatten_with_depth(self, article_html: str) -> None:
        document = parse_article_html(article_html)

        items = [element for element in document.elements if isinstance(element, ListItem)]
        assert [(item.depth, item.marker) for item in items] == [(0, "•"), (1, "•"), (0, "•")]
        assert items[0].spans == [
            TextSpan(text="First item with "),
            LinkSpan(link_id=3, target="/wiki/Compiler", text="compiler"),
        ]
        assert items[1].spans == [TextSpan(text="Nested item")]

    def test_ordered_list_markers_follow_start(self) -> None:
        document = parse_article_html('<ol start="3"><li>three</li><li>four</li></ol>')

        assert [item.marker for item in document.elements] == ["3.", "4."]

    def test_horizontal_rule_becomes_divider(self, article_html: str) -> None:
        document = parse_article_html(article_html)

        assert sum(isinstance(element, Divider) for element in document.elements) == 1


class TestLinks:
    """Link ids, targets and demotion."""

    def test_link_ids_follow_document_order(self, article_html: str) -> None:
        document = parse_article_html(article_html)

        assert [(link.link_id, link.target) for link in document.links()] == [
            (0, "/wiki/General-purpose_programming_language"),
            (1, "/wiki/Graydon_Hoare"),
            (2, "/wiki/Mozilla"),
            (3, "/wiki/Compiler"),
        ]

    def test_citation_and_edit_links_are_dropped(self, article_html: str) -> None:
        document = parse_article_html(article_html)

        targets = {link.target for link in document.links()}
        assert "#cite_note-1" not in targets
        assert not any("action=edit" in target for target in targets)

    def test_link_without_target_is_demoted_with_warning(
        self, article_html: str, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="wiki2term.html_parser"):
            document = parse_article_html(article_html)

        assert document.elements[9] == Paragraph(spans=[TextSpan(text="broken link text")])
        assert any("broken link" in warning for warning in document.warnings)
        assert "has no target" in caplog.text

    def test_blank_link_text_falls_back_to_target(self) -> None:
        document = parse_article_html('<p>see <a href="/wiki/Empty"> </a></p>')

        assert list(document.links()) == [LinkSpan(link_id=0, target="/wiki/Empty", text="/wiki/Empty")]

    def test_link_in_heading_is_reported(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="wiki2term.html_parser"):
            document = parse_article_html('<h2><a href="/wiki/X">X</a> stuff</h2>')

        assert document.elements == [Heading(level=2, text="X stuff")]
        assert list(document.links()) == []
        assert document.warnings == ["link to '/wiki/X' inside <h2> rendered as plain text"]
        assert "/wiki/X" in caplog.text

    def test_each_link_in_unknown_construct_is_reported(self) -> None:
        document = parse_article_html(
            '<table><tr><td><a href="/wiki/A">A</a></td><td><a href="/wiki/B">B</a></td></tr></table>'
        )

        assert document.elements == [Paragraph(spans=[TextSpan(text="A B")])]
        assert document.warnings == [
            "unsupported <table> rendered as plain text",
            "link to '/wiki/A' inside <table> rendered as plain text",
            "link to '/wiki/B' inside <table> rendered as plain text",
        ]

    def test_links_in_quotes_and_definitions_survive(self) -> None:
        document = parse_article_html(
            '<blockquote><p>quoted <a href="/wiki/Q">source</a></p></blockquote>'
            '<dl><dt>Term</dt><dd>see <a href="/wiki/D">definition</a></dd></dl>'
        )

        assert [(link.link_id, link.target) for link in document.links()] == [
            (0, "/wiki/Q"),
            (1, "/wiki/D"),
        ]
        assert document.elements[1] == Paragraph(spans=[TextSpan(text="Term")])
        assert document.warnings == []

    def test_loose_link_becomes_top_level_element(self) -> None:
        document = parse_article_html('<div><a href="/wiki/Alone">Alone</a></div><p>after</p>')

        assert document.elements[0] == LinkSpan(link_id=0, target="/wiki/Alone", text="Alone")


class TestDegradation:
    """Unknown and irregular markup degrades to text."""

    def test_unknown_construct_becomes_plain_paragraph(self, article_html: str) -> None:
        document = parse_article_html(article_html)

        assert document.elements[10] == Paragraph(spans=[TextSpan(text="Cell one Cell two")])
        assert any("<table>" in warning for warning in document.warnings)

    def test_loose_text_forms_implicit_paragraph(self) -> None:
        document = parse_article_html("<div>loose <b>text</b><br>next line<h2>Head</h2></div>")

        assert document.elements == [
            Paragraph(spans=[TextSpan(text="loose "), TextSpan(text="text", style=SpanStyle.BOLD)]),
            Paragraph(spans=[TextSpan(text="next line")]),
            Heading(level=2, text="Head"),
        ]

    def test_block_tags_inside_list_item_keep_words_apart(self) -> None:
        document = parse_article_html(
            "<ul><li><p>first</p><p>second</p><div><b>third</b></div></li></ul>"
        )

        assert document.elements == [
            ListItem(
                spans=[
                    TextSpan(text="first second "),
                    TextSpan(text="third", style=SpanStyle.BOLD),
                ]
            )
        ]

    def test_whitespace_is_collapsed(self) -> None:
        document = parse_article_html("<p>  many \n\n   spaces\there  </p>")

        assert document.elements == [Paragraph(spans=[TextSpan(text="many spaces here")])]

    def test_unclosed_tags_still_parse(self) -> None:
        document = parse_article_html("<p>first<p>second <b>bold")

        assert [element.kind for element in document.elements] == ["paragraph", "paragraph"]

    def test_plain_text_input(self) -> None:
        document = parse_article_html("just some text")

        assert document.elements == [Paragraph(spans=[TextSpan(text="just some text")])]
        assert document.toc is None


class TestTableOfContents:
    """TOC construction through the parser."""

    def test_toc_tree_points_at_headings(self, article_html: str) -> None:
        document = parse_article_html(article_html)

        assert document.toc is not None
        history, see_also = document.toc
        assert (history.number, history.title, history.element_index) == ("1", "History", 1)
        assert [(c.number, c.title, c.element_index) for c in history.children] == [
            ("1.1", "Early years", 3)
        ]
        assert (see_also.number, see_also.element_index) == ("2", 8)
        assert isinstance(document.elements[see_also.element_index], Heading)

    def test_toc_disabled(self, article_html: str) -> None:
        document = parse_article_html(article_html, toc_enabled=False)

        assert document.toc is None

    def test_toc_respects_min_level(self, article_html: str) -> None:
        document = parse_article_html(article_html, toc_min_level=3)

        assert document.toc is not None
        assert [entry.title for entry in document.iter_toc()] == ["Early years"]

    def test_toc_absent_without_sections(self) -> None:
        document = parse_article_html("<p>No sections here.</p>")

        assert document.toc is None


class TestMetadata:
    def test_metadata_is_attached_and_names_untitled_pages(self) -> None:
        metadata = ArticleMetadata(page_id=42, title="Answer", source_url="https://example.org/wiki/Answer")

        document = parse_article_html("<p>body</p>", metadata=metadata)

        assert document.metadata == metadata
        assert document.title == "Answer"
