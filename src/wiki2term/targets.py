"""Turn link targets found in article HTML into article requests."""

from __future__ import annotations

from urllib.parse import parse_qs, unquote, urlparse

from wiki2term.schemas import ArticleRequest

_WIKI_PREFIX = "/wiki/"
_INDEX_PATH = "/w/index.php"


def human_readable_target(target: str) -> str:
    """Render a link target as a title, e.g. ``/wiki/Foo_Bar`` -> ``Foo Bar``."""
    try:
        request = resolve_link_target(target)
    except ValueError:
        # external and fragment-only targets are shown as written
        return unquote(target.strip())
    return request.title or ""


def resolve_link_target(target: str) -> ArticleRequest:
    """Resolve an activated link target into a request for the linked article.

    Handles ``/wiki/Title``, ``/w/index.php?title=Title``, Parsoid-style
    ``./Title``, absolute wiki URLs and bare titles. Fragments are dropped.

    Raises:
        ValueError: If the target names no article.
    """
    target = target.strip()
    if not target:
        raise ValueError("Link target is empty")

    parsed = urlparse(target)
    path = parsed.path
    if path.startswith(_WIKI_PREFIX):
        path = path[len(_WIKI_PREFIX):]
    elif path.startswith("./"):
        path = path[2:]
    elif path == _INDEX_PATH:
        # red links and edit links: /w/index.php?title=Foo&action=edit
        titles = parse_qs(parsed.query).get("title")
        if not titles:
            raise ValueError(f"Link target has no article title: {target}")
        path = titles[0]
    elif parsed.scheme or parsed.netloc or path.startswith("/"):
        raise ValueError(f"Unsupported link target: {target}")

    title = unquote(path).replace("_", " ").strip()
    if not title:
        raise ValueError(f"Link target has no article title: {target}")
    return ArticleRequest(title=title)
