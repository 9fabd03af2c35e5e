"""Directional link selection over a sparse 2-D layout."""

from __future__ import annotations

import logging
from typing import Iterable

from wiki2term.schemas import Layout, LinkOccurrence

logger = logging.getLogger(__name__)


class LinkNavigationIndex:
    """Tracks the selected link among the link occurrences of one Layout.

    Occurrences must be registered in reading order (top to bottom, then
    left to right); up/down moves rely on that ordering. Up/down work in
    row coordinates, left/right step through links in reading order.
    """

    def __init__(self, occurrences: Iterable[LinkOccurrence] = ()) -> None:
        self._links: list[LinkOccurrence] = list(occurrences)
        self._current = 0

    @classmethod
    def from_layout(cls, layout: Layout, *, preserve_link: int | None = None) -> "LinkNavigationIndex":
        """Build an index for ``layout``, optionally reselecting a link by id."""
        index = cls(layout.link_occurrences)
        if preserve_link is not None and index.registered_links():
            index.set_current_link(preserve_link)
        logger.debug("built a navigation index with %d links", index.registered_links())
        return index

    def registered_links(self) -> int:
        """Return the total number of registered links."""
        return len(self._links)

    @property
    def current_index(self) -> int | None:
        if not self._links:
            return None
        return self._current

    @property
    def links(self) -> list[LinkOccurrence]:
        return list(self._links)

    def push_link(self, link_id: int, x: int, y: int) -> None:
        """Register a link at the given position, after every link before it."""
        self._links.append(LinkOccurrence(link_id=link_id, x=x, y=y))

    def current_link(self) -> int | None:
        """Return the id of the selected link, or None if there are no links."""
        if not self._links:
            return None
        return self._links[self._current].link_id

    def current_link_pos(self) -> tuple[int, int] | None:
        """Return the (x, y) of the selected link, or None if there are no links."""
        if not self._links:
            return None
        link = self._links[self._current]
        return link.x, link.y

    def move_up(self, amount: int = 1) -> None:
        """Select the nearest preceding link at least ``amount`` rows higher.

        Falls back to the first link when no such link exists.
        """
        if not self._has_links("move_up"):
            return

        target_y = max(self._links[self._current].y - max(amount, 0), 0)
        for i in range(self._current - 1, -1, -1):
            if self._links[i].y <= target_y:
                self._current = i
                return

        self._current = 0

    def move_down(self, amount: int = 1) -> None:
        """Select the nearest following link at least ``amount`` rows lower.

        Falls back to the last link when no such link exists.
        """
        if not self._has_links("move_down"):
            return

        target_y = self._links[self._current].y + max(amount, 0)
        for i in range(self._current, len(self._links)):
            if self._links[i].y >= target_y:
                self._current = i
                return

        self._current = len(self._links) - 1

    def move_left(self, amount: int = 1) -> None:
        """Select the link ``amount`` places earlier in reading order."""
        if not self._has_links("move_left"):
            return

        self._current = max(self._current - max(amount, 0), 0)

    def move_right(self, amount: int = 1) -> None:
        """Select the link ``amount`` places later in reading order."""
        if not self._has_links("move_right"):
            return

        self._current = min(self._current + max(amount, 0), len(self._links) - 1)

    def set_current_link(self, link_id: int) -> None:
        """Select the link with ``link_id``; unknown ids select the first link."""
        if not self._has_links("set_current_link"):
            return

        new_selection = next(
            (i for i, link in enumerate(self._links) if link.link_id == link_id), 0
        )
        logger.info(
            "replacing the current link '%d' with '%d'", self._current, new_selection
        )
        self._current = new_selection

    def jump_to_line(self, y: int) -> None:
        """Select the first link on or below row ``y``, else the last link."""
        if not self._has_links("jump_to_line"):
            return

        for i, link in enumerate(self._links):
            if link.y >= y:
                self._current = i
                return

        self._current = len(self._links) - 1

    def _has_links(self, operation: str) -> bool:
        if self._links:
            return True
        logger.warning("%s: no links are registered, aborting", operation)
        return False
