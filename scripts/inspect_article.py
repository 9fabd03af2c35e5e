"""Inspect how an article is parsed, wrapped and linked at a given width."""

from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path

import httpx

from wiki2term.fetch import fetch_article
from wiki2term.html_parser import parse_article_html
from wiki2term.layout import layout_document
from wiki2term.schemas import ArticleRequest
from wiki2term.toc import render_toc


def main() -> None:
    parser = argparse.ArgumentParser(description="Show the layout and link positions of an article.")
    parser.add_argument("--url", help="URL of an article HTML page")
    parser.add_argument("--file", help="Local HTML file path")
    parser.add_argument("--title", help="Article title to fetch from the wiki API")
    parser.add_argument("--width", type=int, default=80, help="Viewport width in columns")
    parser.add_argument("--no-toc", action="store_true", help="Do not build a table of contents")
    parser.add_argument("--verbose", action="store_true", help="Log parser warnings and debug output")
    args = parser.parse_args()

    if not (args.url or args.file or args.title):
        parser.error("Provide --url, --file or --title")

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    html = load_html(url=args.url, file_path=args.file, title=args.title)
    document = parse_article_html(html, toc_enabled=not args.no_toc)
    layout = layout_document(document, args.width)

    print(f"Title: {document.title or '-'}")
    print(f"Elements: {len(document.elements)}")
    print(f"Links: {len(layout.link_occurrences)}")
    print(f"Warnings: {len(document.warnings)}")

    if document.toc:
        print("\nContents:")
        for line in render_toc(document.toc):
            print(line)

    print(f"\nLayout ({len(layout.lines)} lines at width {layout.width}):")
    for y, line in enumerate(layout.lines):
        print(f"{y:5d} | {line.text}")

    print("\nLink occurrences:")
    for occurrence in layout.link_occurrences:
        link = document.link(occurrence.link_id)
        target = link.target if link else "?"
        print(f"{occurrence.link_id:5d} @ ({occurrence.x}, {occurrence.y}) -> {target}")


def load_html(*, url: str | None, file_path: str | None, title: str | None) -> str:
    if title:
        return asyncio.run(fetch_article(ArticleRequest(title=title))).html

    if url:
        response = httpx.get(url, follow_redirects=True, timeout=15.0)
        response.raise_for_status()
        return response.text

    path = Path(file_path or "")
    if not path.is_file():
        raise FileNotFoundError(f"HTML file not found: {path}")
    return path.read_text(encoding="utf-8")


if __name__ == "__main__":
    main()
