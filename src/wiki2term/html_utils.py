"""Shared HTML utilities for MediaWiki article processing."""

from __future__ import annotations

import re

try:
    from bs4 import BeautifulSoup
    from bs4.element import Tag
except ImportError as exc:  # pragma: no cover - runtime dependency check
    raise RuntimeError(
        "BeautifulSoup4 is required for HTML parsing (pip install beautifulsoup4)."
    ) from exc


_WHITESPACE_RE = re.compile(r"\s+")

# Elements that never carry article content.
NOISE_SELECTORS = (
    "head",
    "script",
    "style",
    "noscript",
    "link",
    "meta",
    "nav",
    ".mw-editsection",
    "sup.reference",
    ".navbox",
    ".mw-empty-elt",
)


def find_document_root(soup: BeautifulSoup) -> Tag:
    """Find the main content element of a MediaWiki HTML document.

    Searches for the document root in the following order:
    1. <div class="mw-parser-output">
    2. Any <article> element
    3. <body> element
    4. The soup itself as fallback
    """
    root = soup.find("div", class_="mw-parser-output")
    if root:
        return root
    article = soup.find("article")
    if article:
        return article
    if soup.body:
        return soup.body
    return soup


def strip_noise(soup: BeautifulSoup) -> int:
    """Remove non-content elements in place and return how many were dropped."""
    removed = 0
    for tag in soup.select(", ".join(NOISE_SELECTORS)):
        if tag.decomposed:
            continue
        tag.decompose()
        removed += 1
    return removed


def normalize_text(text: str) -> str:
    """Collapse whitespace runs to single spaces and strip the ends."""
    return _WHITESPACE_RE.sub(" ", text).strip()


def collapse_whitespace(text: str) -> str:
    """Collapse whitespace runs to single spaces without stripping."""
    return _WHITESPACE_RE.sub(" ", text)
