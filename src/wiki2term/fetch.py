"""Fetch article HTML from the MediaWiki parse API."""

from __future__ import annotations

import json
import logging

import httpx

from wiki2term.config import WIKI2TERM_BASE_URL
from wiki2term.exceptions import ArticleNotFoundError, FetchError
from wiki2term.http_utils import fetch_with_retries
from wiki2term.schemas import ArticleMetadata, ArticleRequest, RawArticle
from wiki2term.targets import resolve_link_target

logger = logging.getLogger(__name__)

_NOT_FOUND_CODES = {"missingtitle", "nosuchpageid", "invalidtitle"}


def api_url(base_url: str) -> str:
    return f"{base_url.rstrip('/')}/w/api.php"


def article_url(base_url: str, title: str) -> str:
    return f"{base_url.rstrip('/')}/wiki/{title.replace(' ', '_')}"


def build_parse_params(request: ArticleRequest) -> dict[str, str]:
    """Query parameters for ``action=parse`` addressing one article."""
    params = {
        "action": "parse",
        "format": "json",
        "formatversion": "2",
        "prop": "text|displaytitle",
        "redirects": "1",
    }
    if request.page_id is not None:
        params["pageid"] = str(request.page_id)
    else:
        params["page"] = request.title or ""
    return params


async def fetch_article(
    request: ArticleRequest,
    *,
    base_url: str = WIKI2TERM_BASE_URL,
    client: httpx.AsyncClient | None = None,
) -> RawArticle:
    """Fetch the rendered HTML of one article.

    Args:
        request: Which article to fetch (by page id or by title).
        base_url: Base URL of the wiki.
        client: Optional shared httpx.AsyncClient.

    Returns:
        The article HTML with its metadata.

    Raises:
        ArticleNotFoundError: If the wiki has no such article.
        FetchError: If the request fails or the response is unusable.
    """
    logger.info("fetching the article with the %s", request.describe())
    body = await fetch_with_retries(
        api_url(base_url),
        params=build_parse_params(request),
        client=client,
        on_404=ArticleNotFoundError,
        on_404_message=f"No article found for {request.describe()}",
    )
    if isinstance(body, bytes):
        body = body.decode("utf-8")

    try:
        payload = json.loads(body)
    except json.JSONDecodeError as exc:
        raise FetchError(f"Invalid JSON from the parse API: {exc}") from exc

    if "error" in payload:
        error = payload["error"]
        code = error.get("code", "unknown")
        info = error.get("info", "no details")
        if code in _NOT_FOUND_CODES:
            raise ArticleNotFoundError(f"No article found for {request.describe()}: {info}")
        raise FetchError(f"Parse API error '{code}': {info}")

    parsed = payload.get("parse")
    if not isinstance(parsed, dict) or not isinstance(parsed.get("text"), str):
        raise FetchError("Parse API response has no article text")

    title = parsed.get("title") or request.title
    metadata = ArticleMetadata(
        page_id=parsed.get("pageid", request.page_id),
        title=title,
        source_url=article_url(base_url, title) if title else None,
    )
    logger.debug("fetched %d characters for %s", len(parsed["text"]), request.describe())
    return RawArticle(html=parsed["text"], metadata=metadata)


async def fetch_link_target(
    target: str,
    *,
    base_url: str = WIKI2TERM_BASE_URL,
    client: httpx.AsyncClient | None = None,
) -> RawArticle:
    """Fetch the article an activated link points to.

    Raises:
        ValueError: If the target does not name an article.
        ArticleNotFoundError: If the wiki has no such article.
        FetchError: If the request fails.
    """
    return await fetch_article(resolve_link_target(target), base_url=base_url, client=client)
