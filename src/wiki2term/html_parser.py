"""Parse MediaWiki article HTML into a Document."""

from __future__ import annotations

import logging
import re
from typing import Iterable

from wiki2term.exceptions import EmptyDocumentError, MalformedDocumentError, ParseError
from wiki2term.html_utils import (
    collapse_whitespace,
    find_document_root,
    normalize_text,
    strip_noise,
)
from wiki2term.schemas import (
    ArticleMetadata,
    ContentElement,
    Divider,
    Document,
    Heading,
    InlineSpan,
    LinkSpan,
    ListItem,
    Paragraph,
    SpanStyle,
    TextSpan,
)
from wiki2term.toc import build_toc

try:
    from bs4 import BeautifulSoup
    from bs4.element import NavigableString, PreformattedString, Tag
except ImportError as exc:  # pragma: no cover - runtime dependency check
    raise ParseError(
        "BeautifulSoup4 is required for HTML parsing (pip install beautifulsoup4)."
    ) from exc

logger = logging.getLogger(__name__)

_HEADING_RE = re.compile(r"^h[1-6]$")
_TOO_DEEP = "markup is nested too deeply"
_CONTAINER_TAGS = {
    "article",
    "blockquote",
    "body",
    "center",
    "dd",
    "div",
    "dl",
    "dt",
    "footer",
    "header",
    "html",
    "main",
    "section",
}
_INLINE_TAGS = {
    "a",
    "abbr",
    "b",
    "bdi",
    "big",
    "cite",
    "code",
    "data",
    "dfn",
    "em",
    "font",
    "i",
    "kbd",
    "label",
    "mark",
    "q",
    "s",
    "samp",
    "small",
    "span",
    "strong",
    "sub",
    "sup",
    "time",
    "tt",
    "u",
    "var",
}
_BOLD_TAGS = {"b", "strong"}
_ITALIC_TAGS = {"i", "em"}
_LIST_TAGS = {"ul", "ol"}


def parse_article_html(
    raw: str | bytes,
    *,
    toc_enabled: bool = True,
    toc_min_level: int = 2,
    toc_max_level: int = 6,
    metadata: ArticleMetadata | None = None,
) -> Document:
    """Build a Document from raw article HTML.

    Malformed or unknown markup degrades to plain text instead of failing.

    Args:
        raw: Article HTML as text or UTF-8 bytes.
        toc_enabled: Whether to build a table of contents.
        toc_min_level: Shallowest heading level listed in the TOC.
        toc_max_level: Deepest heading level listed in the TOC.
        metadata: Retrieval metadata to attach to the Document.

    Returns:
        The parsed Document.

    Raises:
        EmptyDocumentError: If ``raw`` is zero-length.
        MalformedDocumentError: If ``raw`` cannot be decoded or tokenized,
            or nests elements too deeply to walk.
    """
    if len(raw) == 0:
        raise EmptyDocumentError()
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedDocumentError(f"invalid UTF-8 at byte {exc.start}") from exc

    try:
        soup = BeautifulSoup(raw, "lxml")
    except (ValueError, TypeError) as exc:
        raise MalformedDocumentError(str(exc)) from exc
    except RecursionError as exc:
        raise MalformedDocumentError(_TOO_DEEP) from exc

    builder = _DocumentBuilder()
    try:
        title = _extract_title(soup) or (metadata.title if metadata else None)
        removed = strip_noise(soup)
        logger.debug("removed %d non-content elements", removed)
        builder.walk_blocks(find_document_root(soup))
    except RecursionError as exc:
        raise MalformedDocumentError(_TOO_DEEP) from exc

    toc = None
    if toc_enabled:
        toc = build_toc(builder.elements, min_level=toc_min_level, max_level=toc_max_level)

    logger.info(
        "parsed article %r: %d elements, %d links, %d warnings",
        title,
        len(builder.elements),
        builder.link_count,
        len(builder.warnings),
    )
    return Document(
        title=title,
        elements=builder.elements,
        toc=toc,
        metadata=metadata,
        warnings=builder.warnings,
    )


def _extract_title(soup: BeautifulSoup) -> str | None:
    title_tag = soup.find("h1", id="firstHeading") or soup.find("h1", class_="firstHeading")
    if title_tag:
        return normalize_text(title_tag.get_text()) or None
    if soup.title:
        return normalize_text(soup.title.get_text()) or None
    return None


def _is_title_heading(heading: Tag) -> bool:
    return heading.get("id") == "firstHeading" or "firstHeading" in heading.get("class", [])


def _heading_anchor(heading: Tag) -> str | None:
    anchor = heading.get("id")
    if anchor:
        return anchor
    headline = heading.find(class_="mw-headline")
    if headline and headline.get("id"):
        return headline.get("id")
    return None


class _DocumentBuilder:
    """Accumulates elements while walking the HTML tree in document order."""

    def __init__(self) -> None:
        self.elements: list[ContentElement] = []
        self.warnings: list[str] = []
        self.link_count = 0
        # Loose inline nodes at block level, gathered into an implicit paragraph.
        self._pending: list[Tag | NavigableString] = []

    def warn(self, message: str, *args: object) -> None:
        logger.warning(message, *args)
        self.warnings.append(message % args)

    def walk_blocks(self, container: Tag) -> None:
        for child in container.children:
            if isinstance(child, PreformattedString):
                continue
            if isinstance(child, NavigableString):
                self._pending.append(child)
                continue
            if not isinstance(child, Tag):
                continue

            name = child.name
            if name in _INLINE_TAGS:
                self._pending.append(child)
                continue

            self._flush_pending()
            if name == "br":
                continue
            if _HEADING_RE.match(name):
                self._add_heading(child)
            elif name == "p":
                spans = self._inline_spans(child.children)
                if spans:
                    self.elements.append(Paragraph(spans=spans))
            elif name in _LIST_TAGS:
                self._add_list(child, depth=0)
            elif name == "hr":
                self.elements.append(Divider())
            elif name in _CONTAINER_TAGS:
                self.walk_blocks(child)
            else:
                self._add_unknown(child)

        self._flush_pending()

    def _flush_pending(self) -> None:
        if not self._pending:
            return
        nodes, self._pending = self._pending, []
        spans = self._inline_spans(nodes)
        if not spans:
            return
        if len(spans) == 1 and isinstance(spans[0], LinkSpan):
            self.elements.append(spans[0])
        else:
            self.elements.append(Paragraph(spans=spans))

    def _add_heading(self, heading: Tag) -> None:
        if _is_title_heading(heading):
            return
        self._warn_dropped_links(heading)
        text = normalize_text(heading.get_text())
        if not text:
            return
        self.elements.append(
            Heading(level=int(heading.name[1]), text=text, anchor=_heading_anchor(heading))
        )

    def _add_list(self, list_tag: Tag, depth: int) -> None:
        ordered = list_tag.name == "ol"
        try:
            number = int(list_tag.get("start", 1))
        except ValueError:
            number = 1

        for item in list_tag.find_all("li", recursive=False):
            inline_nodes: list[Tag | NavigableString] = []
            nested_lists: list[Tag] = []
            for child in item.children:
                if isinstance(child, Tag) and child.name in _LIST_TAGS:
                    nested_lists.append(child)
                else:
                    inline_nodes.append(child)

            marker = f"{number}." if ordered else "•"
            self.elements.append(
                ListItem(depth=depth, marker=marker, spans=self._inline_spans(inline_nodes))
            )
            number += 1
            for nested in nested_lists:
                self._add_list(nested, depth + 1)

    def _add_unknown(self, tag: Tag) -> None:
        text = normalize_text(tag.get_text(" "))
        if not text:
            return
        self.warn("unsupported <%s> rendered as plain text", tag.name)
        self._warn_dropped_links(tag)
        self.elements.append(Paragraph(spans=[TextSpan(text=text)]))

    def _warn_dropped_links(self, tag: Tag) -> None:
        for anchor in tag.find_all("a", href=True):
            target = anchor["href"].strip()
            if target:
                self.warn("link to %r inside <%s> rendered as plain text", target, tag.name)

    def _inline_spans(self, nodes: Iterable[Tag | NavigableString]) -> list[InlineSpan]:
        spans: list[InlineSpan] = []
        for node in nodes:
            spans.extend(self._inline(node, bold=False, italic=False))
        return _normalize_spans(spans)

    def _inline(self, node: Tag | NavigableString, *, bold: bool, italic: bool) -> list[InlineSpan]:
        if isinstance(node, PreformattedString):
            return []
        if isinstance(node, NavigableString):
            return [TextSpan(text=str(node), style=SpanStyle.for_emphasis(bold=bold, italic=italic))]
        if not isinstance(node, Tag):
            return []

        if node.name == "br":
            return [TextSpan(text=" ")]
        if node.name == "a":
            return self._link(node, bold=bold, italic=italic)

        bold = bold or node.name in _BOLD_TAGS
        italic = italic or node.name in _ITALIC_TAGS
        spans: list[InlineSpan] = []
        for child in node.children:
            spans.extend(self._inline(child, bold=bold, italic=italic))
        if node.name not in _INLINE_TAGS:
            # block content inside an inline run still separates words
            return [TextSpan(text=" "), *spans, TextSpan(text=" ")]
        return spans

    def _link(self, node: Tag, *, bold: bool, italic: bool) -> list[InlineSpan]:
        href = node.get("href") or ""
        target = href.strip() if isinstance(href, str) else ""
        text = normalize_text(node.get_text())

        if not target:
            self.warn("link %r has no target, rendered as plain text", text)
            spans: list[InlineSpan] = []
            for child in node.children:
                spans.extend(self._inline(child, bold=bold, italic=italic))
            return spans

        link = LinkSpan(link_id=self.link_count, target=target, text=text or target)
        self.link_count += 1
        return [link]


def _ends_with_space(span: InlineSpan) -> bool:
    return isinstance(span, TextSpan) and span.text.endswith(" ")


def _normalize_spans(spans: list[InlineSpan]) -> list[InlineSpan]:
    """Collapse whitespace across span boundaries, trim the ends, merge runs."""
    result: list[InlineSpan] = []
    for span in spans:
        if isinstance(span, LinkSpan):
            result.append(span)
            continue

        text = collapse_whitespace(span.text)
        if not result:
            text = text.lstrip()
        elif text.startswith(" ") and _ends_with_space(result[-1]):
            text = text[1:]
        if not text:
            continue

        previous = result[-1] if result else None
        if isinstance(previous, TextSpan) and previous.style == span.style:
            result[-1] = TextSpan(text=previous.text + text, style=span.style)
        else:
            result.append(TextSpan(text=text, style=span.style))

    while result and isinstance(result[-1], TextSpan):
        text = result[-1].text.rstrip()
        if text:
            result[-1] = TextSpan(text=text, style=result[-1].style)
            break
        result.pop()

    return result
