"""Table of contents construction and formatting."""

from __future__ import annotations

from typing import Iterable, Sequence

from wiki2term.schemas import ContentElement, Heading, TocEntry


def build_toc(
    elements: Sequence[ContentElement],
    *,
    min_level: int = 2,
    max_level: int = 6,
) -> list[TocEntry] | None:
    """Nest headings with ``min_level <= level <= max_level`` into a tree.

    Each entry keeps the index of its heading in ``elements``. Returns None
    when no heading qualifies.
    """
    roots: list[TocEntry] = []
    stack: list[TocEntry] = []

    for index, element in enumerate(elements):
        if not isinstance(element, Heading):
            continue
        if not min_level <= element.level <= max_level:
            continue

        while stack and stack[-1].level >= element.level:
            stack.pop()

        siblings = stack[-1].children if stack else roots
        prefix = f"{stack[-1].number}." if stack else ""
        entry = TocEntry(
            level=element.level,
            title=element.text,
            number=f"{prefix}{len(siblings) + 1}",
            element_index=index,
            anchor=element.anchor,
        )
        siblings.append(entry)
        stack.append(entry)

    return roots or None


def flatten_toc(entries: Iterable[TocEntry]) -> list[TocEntry]:
    """Return entries depth-first, parents before their children."""
    result: list[TocEntry] = []
    for entry in entries:
        result.append(entry)
        result.extend(flatten_toc(entry.children))
    return result


def render_toc(
    entries: Iterable[TocEntry],
    indent: int = 0,
    *,
    item_format: str = "{number} {title}",
) -> list[str]:
    """Render the TOC as indented panel rows.

    ``item_format`` may reference ``{number}``, ``{title}`` and ``{level}``.
    """
    lines: list[str] = []
    for entry in entries:
        label = item_format.format(number=entry.number, title=entry.title, level=entry.level)
        lines.append("  " * indent + label)
        lines.extend(render_toc(entry.children, indent + 1, item_format=item_format))
    return lines
