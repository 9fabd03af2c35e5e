"""Document models: parsed article content and its table of contents."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Iterator, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from wiki2term.schemas.request import ArticleMetadata


class SpanStyle(str, Enum):
    """Visual role of a run of text. Colors are resolved by the host theme."""

    PLAIN = "plain"
    BOLD = "bold"
    ITALIC = "italic"
    BOLD_ITALIC = "bold_italic"
    HEADING = "heading"
    LINK = "link"
    BULLET = "bullet"
    DIVIDER = "divider"

    @classmethod
    def for_emphasis(cls, *, bold: bool, italic: bool) -> "SpanStyle":
        if bold and italic:
            return cls.BOLD_ITALIC
        if bold:
            return cls.BOLD
        if italic:
            return cls.ITALIC
        return cls.PLAIN


class TextSpan(BaseModel):
    """A run of styled inline text."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["text"] = "text"
    text: str
    style: SpanStyle = SpanStyle.PLAIN


class LinkSpan(BaseModel):
    """A hyperlink with a document-unique id."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["link"] = "link"
    link_id: int = Field(..., ge=0)
    target: str = Field(..., min_length=1)
    text: str


InlineSpan = Annotated[Union[TextSpan, LinkSpan], Field(discriminator="kind")]


class Heading(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["heading"] = "heading"
    level: int = Field(..., ge=1, le=6)
    text: str
    anchor: str | None = None


class Paragraph(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["paragraph"] = "paragraph"
    spans: list[InlineSpan] = Field(default_factory=list)


class ListItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["list_item"] = "list_item"
    depth: int = Field(default=0, ge=0)
    marker: str = "•"
    spans: list[InlineSpan] = Field(default_factory=list)


class Divider(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["divider"] = "divider"


ContentElement = Annotated[
    Union[Heading, Paragraph, ListItem, LinkSpan, Divider],
    Field(discriminator="kind"),
]


class TocEntry(BaseModel):
    """A table of contents node pointing back into ``Document.elements``."""

    model_config = ConfigDict(frozen=True)

    level: int = Field(..., ge=1, le=6)
    title: str
    number: str
    element_index: int = Field(..., ge=0)
    anchor: str | None = None
    children: list["TocEntry"] = Field(default_factory=list)


class Document(BaseModel):
    """Parsed article content. Never mutated after parsing.

    Attributes:
        title: Article title, if one could be determined.
        elements: Content elements in document order.
        toc: Top-level TOC entries, or None when the TOC is disabled or the
            document declares no sections.
        metadata: Retrieval metadata passed through from the caller.
        warnings: Irregularities met while parsing (also logged).
    """

    model_config = ConfigDict(frozen=True)

    title: str | None = None
    elements: list[ContentElement] = Field(default_factory=list)
    toc: list[TocEntry] | None = None
    metadata: ArticleMetadata | None = None
    warnings: list[str] = Field(default_factory=list)

    def links(self) -> Iterator[LinkSpan]:
        """Yield every link in document order."""
        for element in self.elements:
            if isinstance(element, LinkSpan):
                yield element
            elif isinstance(element, (Paragraph, ListItem)):
                for span in element.spans:
                    if isinstance(span, LinkSpan):
                        yield span

    def link(self, link_id: int) -> LinkSpan | None:
        for link in self.links():
            if link.link_id == link_id:
                return link
        return None

    def iter_toc(self) -> Iterator[TocEntry]:
        """Walk the TOC depth-first, parents before children."""

        def _walk(entries: list[TocEntry]) -> Iterator[TocEntry]:
            for entry in entries:
                yield entry
                yield from _walk(entry.children)

        yield from _walk(self.toc or [])
