"""Wrap a Document into terminal rows and record where links land."""

from __future__ import annotations

import logging
import re

from wiki2term.schemas import (
    ContentElement,
    Divider,
    Document,
    Heading,
    Layout,
    Line,
    LineSpan,
    LinkOccurrence,
    LinkSpan,
    ListItem,
    Paragraph,
    SpanStyle,
)

logger = logging.getLogger(__name__)

_TOKEN_RE = re.compile(r"\S+|\s+")
DIVIDER_CHAR = "─"

# A run is (text, style, link_id).
_Run = tuple[str, SpanStyle, int | None]


def layout_document(document: Document, width: int) -> Layout:
    """Lay out ``document`` for a viewport ``width`` columns wide.

    Pure function: the same document and width always give an equal Layout.
    Consecutive elements are separated by one blank row, except consecutive
    list items. Every element produces at least one row.
    """
    width = max(width, 0)
    lines: list[Line] = []
    occurrences: list[LinkOccurrence] = []

    previous: ContentElement | None = None
    for index, element in enumerate(document.elements):
        if previous is not None and not (
            isinstance(previous, ListItem) and isinstance(element, ListItem)
        ):
            lines.append(Line())
        _layout_element(element, index, width, lines, occurrences)
        previous = element

    logger.debug(
        "laid out %d elements into %d lines at width %d",
        len(document.elements),
        len(lines),
        width,
    )
    return Layout(width=width, lines=lines, link_occurrences=occurrences)


def _layout_element(
    element: ContentElement,
    index: int,
    width: int,
    lines: list[Line],
    occurrences: list[LinkOccurrence],
) -> None:
    if isinstance(element, Divider):
        spans = [LineSpan(text=DIVIDER_CHAR * width, style=SpanStyle.DIVIDER)] if width else []
        lines.append(Line(spans=spans, source_element_index=index))
        return

    prefix = None
    if isinstance(element, ListItem):
        prefix = "  " * element.depth + element.marker + " "

    wrapper = _Wrapper(width, index, lines, occurrences, prefix=prefix)
    for text, style, link_id in _element_runs(element):
        wrapper.feed(text, style, link_id)
    wrapper.finish()


def _element_runs(element: ContentElement) -> list[_Run]:
    if isinstance(element, Heading):
        return [(element.text, SpanStyle.HEADING, None)]
    if isinstance(element, LinkSpan):
        return [(element.text, SpanStyle.LINK, element.link_id)]
    if isinstance(element, (Paragraph, ListItem)):
        runs: list[_Run] = []
        for span in element.spans:
            if isinstance(span, LinkSpan):
                runs.append((span.text, SpanStyle.LINK, span.link_id))
            else:
                runs.append((span.text, span.style, None))
        return runs
    return []


class _Wrapper:
    """Greedy word wrapper for the runs of a single element.

    Continuation rows are indented to the width of the first-row prefix.
    When no column is left after the indent, every word gets its own row.
    """

    def __init__(
        self,
        width: int,
        element_index: int,
        lines: list[Line],
        occurrences: list[LinkOccurrence],
        *,
        prefix: str | None = None,
    ) -> None:
        self.width = width
        self.element_index = element_index
        self.indent = len(prefix) if prefix else 0
        self.available = max(width - self.indent, 0)
        self._lines = lines
        self._occurrences = occurrences
        self._seen_links: set[int] = set()
        self._spans: list[LineSpan] = []
        self._x = 0
        if prefix:
            self._append(prefix, SpanStyle.BULLET, None)

    def feed(self, text: str, style: SpanStyle, link_id: int | None) -> None:
        for token in _TOKEN_RE.findall(text):
            if token.isspace():
                if not self._at_line_start():
                    self._append(" ", style, link_id)
                continue
            self._place_word(token, style, link_id)

        if link_id is not None and link_id not in self._seen_links:
            # every link gets exactly one occurrence, even with blank text;
            # trailing whitespace is stripped on commit, so stay on the text
            x = min(self._x, self._text_width(), max(self.width - 1, 0))
            self._record_link(link_id, x=x)

    def finish(self) -> None:
        self._commit()

    def _at_line_start(self) -> bool:
        return self._x <= self.indent

    def _place_word(self, word: str, style: SpanStyle, link_id: int | None) -> None:
        if self.available == 0:
            if not self._at_line_start():
                self._break()
            self._append_word(word, style, link_id)
            return

        while word:
            room = self.width - self._x
            if len(word) <= room:
                self._append_word(word, style, link_id)
                return
            if not self._at_line_start():
                self._break()
                continue
            chunk, word = word[:room], word[room:]
            self._append_word(chunk, style, link_id)
            self._break()

    def _append_word(self, word: str, style: SpanStyle, link_id: int | None) -> None:
        if link_id is not None and link_id not in self._seen_links:
            self._record_link(link_id)
        self._append(word, style, link_id)

    def _record_link(self, link_id: int, x: int | None = None) -> None:
        self._seen_links.add(link_id)
        x = self._x if x is None else x
        self._occurrences.append(LinkOccurrence(link_id=link_id, x=x, y=len(self._lines)))

    def _text_width(self) -> int:
        return len("".join(span.text for span in self._spans).rstrip())

    def _append(self, text: str, style: SpanStyle, link_id: int | None) -> None:
        last = self._spans[-1] if self._spans else None
        if last is not None and last.style == style and last.link_id == link_id:
            self._spans[-1] = LineSpan(text=last.text + text, style=style, link_id=link_id)
        else:
            self._spans.append(LineSpan(text=text, style=style, link_id=link_id))
        self._x += len(text)

    def _break(self) -> None:
        self._commit()
        if self.indent:
            self._append(" " * self.indent, SpanStyle.PLAIN, None)

    def _commit(self) -> None:
        spans = self._spans
        while spans:
            text = spans[-1].text.rstrip()
            if text:
                last = spans[-1]
                spans[-1] = LineSpan(text=text, style=last.style, link_id=last.link_id)
                break
            spans.pop()
        self._lines.append(Line(spans=spans, source_element_index=self.element_index))
        self._spans = []
        self._x = 0
