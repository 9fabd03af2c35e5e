"""Layout models: wrapped lines and link screen positions."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from wiki2term.schemas.document import SpanStyle


class LineSpan(BaseModel):
    """A styled run of text within one rendered row."""

    model_config = ConfigDict(frozen=True)

    text: str
    style: SpanStyle = SpanStyle.PLAIN
    link_id: int | None = None


class Line(BaseModel):
    """One terminal row. Separator rows have no spans and no source element."""

    model_config = ConfigDict(frozen=True)

    spans: list[LineSpan] = Field(default_factory=list)
    source_element_index: int | None = None

    @property
    def text(self) -> str:
        return "".join(span.text for span in self.spans)


class LinkOccurrence(BaseModel):
    """Column/row of the first rendered character of a link."""

    model_config = ConfigDict(frozen=True)

    link_id: int
    x: int = Field(..., ge=0)
    y: int = Field(..., ge=0)


class Layout(BaseModel):
    """Width-specific rendering of a Document."""

    model_config = ConfigDict(frozen=True)

    width: int = Field(..., ge=0)
    lines: list[Line] = Field(default_factory=list)
    link_occurrences: list[LinkOccurrence] = Field(default_factory=list)

    def first_line_of(self, element_index: int) -> int | None:
        """Return the row where an element starts, or None if absent."""
        for y, line in enumerate(self.lines):
            if line.source_element_index == element_index:
                return y
        return None

    def text_of(self, y: int) -> str:
        if 0 <= y < len(self.lines):
            return self.lines[y].text
        return ""
