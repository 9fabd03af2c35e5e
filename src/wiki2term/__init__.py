"""wiki2term: read encyclopedia articles in a terminal and navigate their links."""

from wiki2term.exceptions import (
    ArticleNotFoundError,
    EmptyDocumentError,
    FetchError,
    MalformedDocumentError,
    ParseError,
    RateLimitError,
    Wiki2termError,
)
from wiki2term.html_parser import parse_article_html
from wiki2term.layout import layout_document
from wiki2term.navigation import LinkNavigationIndex
from wiki2term.schemas import ArticleMetadata, ArticleRequest, Document, Layout, RawArticle
from wiki2term.view import (
    ArticleView,
    ArticleViewConfig,
    Command,
    CommandKind,
    Direction,
    LinkActivated,
    TocPosition,
    ViewState,
)

__all__ = [
    "ArticleMetadata",
    "ArticleNotFoundError",
    "ArticleRequest",
    "ArticleView",
    "ArticleViewConfig",
    "Command",
    "CommandKind",
    "Direction",
    "Document",
    "EmptyDocumentError",
    "FetchError",
    "Layout",
    "LinkActivated",
    "LinkNavigationIndex",
    "MalformedDocumentError",
    "ParseError",
    "RateLimitError",
    "RawArticle",
    "TocPosition",
    "ViewState",
    "Wiki2termError",
    "layout_document",
    "parse_article_html",
]
