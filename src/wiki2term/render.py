"""Turn visible layout rows into a fixed-size grid of styled cells."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from wiki2term.schemas import Line, SpanStyle


@dataclass(frozen=True)
class Cell:
    """One character cell of the host's character grid."""

    char: str
    style: SpanStyle = SpanStyle.PLAIN
    highlighted: bool = False


BLANK_CELL = Cell(" ")


def render_grid(
    lines: Sequence[Line],
    *,
    width: int,
    height: int,
    selected_link: int | None = None,
) -> list[list[Cell]]:
    """Render ``lines`` into exactly ``height`` rows of ``width`` cells.

    Text past ``width`` is clipped, short rows are padded with blanks, and
    every cell belonging to ``selected_link`` is highlighted.
    """
    width = max(width, 0)
    height = max(height, 0)
    rows: list[list[Cell]] = []

    for line in list(lines)[:height]:
        row: list[Cell] = []
        for span in line.spans:
            highlighted = selected_link is not None and span.link_id == selected_link
            for char in span.text:
                if len(row) >= width:
                    break
                row.append(Cell(char, span.style, highlighted))
        row.extend([BLANK_CELL] * (width - len(row)))
        rows.append(row)

    while len(rows) < height:
        rows.append([BLANK_CELL] * width)
    return rows


def grid_to_text(grid: Sequence[Sequence[Cell]]) -> list[str]:
    """Return the plain characters of each grid row."""
    return ["".join(cell.char for cell in row) for row in grid]
