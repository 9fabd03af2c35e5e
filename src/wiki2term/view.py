"""Article view: ties parsing, layout and link navigation to user input."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from wiki2term.html_parser import parse_article_html
from wiki2term.layout import layout_document
from wiki2term.navigation import LinkNavigationIndex
from wiki2term.render import Cell, render_grid
from wiki2term.schemas import ArticleMetadata, Document, Layout, Line, TocEntry
from wiki2term.targets import human_readable_target
from wiki2term.toc import flatten_toc, render_toc

logger = logging.getLogger(__name__)


class TocPosition(str, Enum):
    """Side of the article the TOC panel is drawn on."""

    LEFT = "left"
    RIGHT = "right"


class ViewState(str, Enum):
    EMPTY = "empty"
    DISPLAYING = "displaying"


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


class CommandKind(str, Enum):
    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    ACTIVATE = "activate"
    RESIZE = "resize"
    SCROLL = "scroll"
    TOGGLE_TOC = "toggle_toc"


_MOVE_DIRECTIONS = {
    CommandKind.MOVE_UP: Direction.UP,
    CommandKind.MOVE_DOWN: Direction.DOWN,
    CommandKind.MOVE_LEFT: Direction.LEFT,
    CommandKind.MOVE_RIGHT: Direction.RIGHT,
}

_MOVES: dict[Direction, Callable[[LinkNavigationIndex, int], None]] = {
    Direction.UP: LinkNavigationIndex.move_up,
    Direction.DOWN: LinkNavigationIndex.move_down,
    Direction.LEFT: LinkNavigationIndex.move_left,
    Direction.RIGHT: LinkNavigationIndex.move_right,
}


@dataclass(frozen=True)
class Command:
    """An input command for the article view.

    Attributes:
        kind: What to do.
        amount: Steps for moves, rows for scrolling.
        width: New viewport width for RESIZE.
        height: Optional new viewport height for RESIZE.
    """

    kind: CommandKind
    amount: int = 1
    width: int | None = None
    height: int | None = None

    @classmethod
    def move(cls, direction: Direction, amount: int = 1) -> "Command":
        kind = next(kind for kind, value in _MOVE_DIRECTIONS.items() if value == direction)
        return cls(kind=kind, amount=amount)

    @classmethod
    def activate(cls) -> "Command":
        return cls(kind=CommandKind.ACTIVATE)

    @classmethod
    def resize(cls, width: int, height: int | None = None) -> "Command":
        return cls(kind=CommandKind.RESIZE, width=width, height=height)

    @classmethod
    def scroll(cls, amount: int) -> "Command":
        return cls(kind=CommandKind.SCROLL, amount=amount)


@dataclass(frozen=True)
class LinkActivated:
    """Emitted when the user commits to the selected link."""

    link_id: int
    target: str
    title: str


@dataclass
class ArticleViewConfig:
    """Options for the article view, passed in explicitly by the host.

    Attributes:
        toc_enabled: Build a table of contents when parsing.
        toc_min_level: Shallowest heading level shown in the TOC.
        toc_max_level: Deepest heading level shown in the TOC.
        toc_position: Side of the article the TOC panel sits on.
        toc_visible: Whether the TOC panel starts visible for new articles.
        toc_item_format: Format of TOC panel rows ({number}, {title}, {level}).
    """

    toc_enabled: bool = True
    toc_min_level: int = 2
    toc_max_level: int = 6
    toc_position: TocPosition = TocPosition.RIGHT
    toc_visible: bool = True
    toc_item_format: str = "{number} {title}"


class ArticleView:
    """Displays one article at a time and handles navigation input.

    The view owns the current Document, its Layout and the link index. It
    performs no I/O: activations are reported through ``on_link_activated``
    and rendering returns cells for the host to draw.
    """

    def __init__(
        self,
        config: ArticleViewConfig | None = None,
        *,
        width: int = 80,
        height: int = 24,
        on_link_activated: Callable[[LinkActivated], None] | None = None,
    ) -> None:
        self.config = config or ArticleViewConfig()
        self.width = max(width, 0)
        self.height = max(height, 0)
        self.document: Document | None = None
        self.layout: Layout | None = None
        self.links = LinkNavigationIndex()
        self.scroll_offset = 0
        self.toc_visible = False
        self._on_link_activated = on_link_activated
        logger.debug("created an article view (%dx%d)", self.width, self.height)

    @property
    def state(self) -> ViewState:
        if self.document is None:
            return ViewState.EMPTY
        return ViewState.DISPLAYING

    def load(self, document: Document) -> None:
        """Display ``document``, replacing any article shown before."""
        logger.info("displaying the article '%s'", document.title or "<untitled>")
        self.document = document
        self.layout = layout_document(document, self.width)
        self.links = LinkNavigationIndex.from_layout(self.layout)
        self.scroll_offset = 0
        self.toc_visible = self.config.toc_visible and document.toc is not None

    def load_markup(self, raw: str | bytes, metadata: ArticleMetadata | None = None) -> Document:
        """Parse ``raw`` and display it.

        Raises:
            ParseError: If the markup is empty or malformed. The article
                shown before stays displayed.
        """
        document = parse_article_html(
            raw,
            toc_enabled=self.config.toc_enabled,
            toc_min_level=self.config.toc_min_level,
            toc_max_level=self.config.toc_max_level,
            metadata=metadata,
        )
        self.load(document)
        return document

    def resize(self, width: int, height: int | None = None) -> None:
        """Re-layout for a new viewport size, keeping the selected link."""
        self.width = max(width, 0)
        if height is not None:
            self.height = max(height, 0)
        if self.document is None:
            logger.debug("resize: no article is displayed, storing the size only")
            return

        selected = self.links.current_link()
        self.layout = layout_document(self.document, self.width)
        self.links = LinkNavigationIndex.from_layout(self.layout, preserve_link=selected)
        self._clamp_scroll()
        self._scroll_to_selection()

    def navigate(self, direction: Direction, amount: int = 1) -> None:
        """Move the link selection and scroll it into view."""
        if self.layout is None:
            logger.warning("navigate: no article is displayed")
            return
        _MOVES[direction](self.links, amount)
        self._scroll_to_selection()

    def scroll_by(self, delta: int) -> None:
        self.scroll_offset += delta
        self._clamp_scroll()

    def jump_to_element(self, element_index: int) -> None:
        """Scroll an element to the top and select the first link from there."""
        if self.layout is None:
            logger.warning("jump_to_element: no article is displayed")
            return
        y = self.layout.first_line_of(element_index)
        if y is None:
            logger.warning("jump_to_element: element %d has no rendered lines", element_index)
            return
        self.scroll_offset = y
        self._clamp_scroll()
        if self.links.registered_links():
            self.links.jump_to_line(y)

    def jump_to_toc_entry(self, entry: TocEntry) -> None:
        self.jump_to_element(entry.element_index)

    def toggle_toc(self) -> None:
        if self.document is None or self.document.toc is None:
            logger.debug("toggle_toc: the article has no table of contents")
            return
        self.toc_visible = not self.toc_visible

    def activate(self) -> LinkActivated | None:
        """Report the selected link to the host, if any link is selected."""
        link_id = self.links.current_link()
        if link_id is None or self.document is None:
            logger.info("activate: no link is selected")
            return None

        link = self.document.link(link_id)
        if link is None:
            logger.warning("activate: link %d is not part of the article", link_id)
            return None

        event = LinkActivated(
            link_id=link_id, target=link.target, title=human_readable_target(link.target)
        )
        logger.info("activating the link '%d' with the target '%s'", link_id, link.target)
        if self._on_link_activated is not None:
            self._on_link_activated(event)
        return event

    def handle(self, command: Command) -> LinkActivated | None:
        """Apply one input command. Returns the event for ACTIVATE."""
        if command.kind in _MOVE_DIRECTIONS:
            self.navigate(_MOVE_DIRECTIONS[command.kind], command.amount)
        elif command.kind is CommandKind.ACTIVATE:
            return self.activate()
        elif command.kind is CommandKind.RESIZE:
            self.resize(self.width if command.width is None else command.width, command.height)
        elif command.kind is CommandKind.SCROLL:
            self.scroll_by(command.amount)
        elif command.kind is CommandKind.TOGGLE_TOC:
            self.toggle_toc()
        return None

    def visible_lines(self) -> list[Line]:
        if self.layout is None:
            return []
        return self.layout.lines[self.scroll_offset : self.scroll_offset + self.height]

    def selection_on_screen(self) -> tuple[int, int] | None:
        """Return the selected link's viewport coordinate if it is visible."""
        pos = self.links.current_link_pos()
        if pos is None:
            return None
        x, y = pos
        if not self.scroll_offset <= y < self.scroll_offset + self.height:
            return None
        return x, y - self.scroll_offset

    def toc_entries(self) -> list[TocEntry]:
        if self.document is None or self.document.toc is None:
            return []
        return flatten_toc(self.document.toc)

    def toc_lines(self) -> list[str]:
        if self.document is None or self.document.toc is None:
            return []
        return render_toc(self.document.toc, item_format=self.config.toc_item_format)

    def render(self) -> list[list[Cell]]:
        return render_grid(
            self.visible_lines(),
            width=self.width,
            height=self.height,
            selected_link=self.links.current_link(),
        )

    def _max_scroll(self) -> int:
        if self.layout is None:
            return 0
        return max(len(self.layout.lines) - self.height, 0)

    def _clamp_scroll(self) -> None:
        self.scroll_offset = min(max(self.scroll_offset, 0), self._max_scroll())

    def _scroll_to_selection(self) -> None:
        pos = self.links.current_link_pos()
        if pos is None or self.height == 0:
            return
        _, y = pos
        if y < self.scroll_offset:
            self.scroll_offset = y
        elif y >= self.scroll_offset + self.height:
            self.scroll_offset = y - self.height + 1
