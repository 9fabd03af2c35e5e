"""Retrieval-side models: what to fetch and what came back."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, model_validator


class ArticleRequest(BaseModel):
    """A request for one article, either by page id or by title.

    Attributes:
        page_id: Numeric MediaWiki page id.
        title: Human-readable article title (spaces, not underscores).
    """

    model_config = ConfigDict(frozen=True)

    page_id: int | None = None
    title: str | None = None

    @model_validator(mode="after")
    def _exactly_one_key(self) -> "ArticleRequest":
        if (self.page_id is None) == (self.title is None):
            raise ValueError("Provide exactly one of page_id or title")
        return self

    def describe(self) -> str:
        """Return a short label for logs and error messages."""
        if self.title is not None:
            return f"title '{self.title}'"
        return f"page id {self.page_id}"


class ArticleMetadata(BaseModel):
    """Where an article came from."""

    model_config = ConfigDict(frozen=True)

    page_id: int | None = None
    title: str | None = None
    source_url: str | None = None


class RawArticle(BaseModel):
    """Fetched article markup, not yet parsed."""

    model_config = ConfigDict(frozen=True)

    html: str
    metadata: ArticleMetadata
