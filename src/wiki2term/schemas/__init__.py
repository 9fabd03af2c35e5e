"""Shared schemas for wiki2term."""

from wiki2term.schemas.document import (
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
    TocEntry,
)
from wiki2term.schemas.layout import Layout, Line, LineSpan, LinkOccurrence
from wiki2term.schemas.request import ArticleMetadata, ArticleRequest, RawArticle

__all__ = [
    "ArticleMetadata",
    "ArticleRequest",
    "ContentElement",
    "Divider",
    "Document",
    "Heading",
    "InlineSpan",
    "Layout",
    "Line",
    "LineSpan",
    "LinkOccurrence",
    "LinkSpan",
    "ListItem",
    "Paragraph",
    "RawArticle",
    "SpanStyle",
    "TextSpan",
    "TocEntry",
]
