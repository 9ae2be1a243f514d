"""Source location tracking for configuration elements.

Records the file, byte offsets, line and column where a configuration
construct was written, enabling source-mapped error messages.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Span(BaseModel):
    """Source range of a token, node or element.

    Attributes:
        file: Name of the configuration file (or a pseudo name like ``<string>``)
        start: Offset of the first character
        end: Offset one past the last character
        line: 1-indexed line number of ``start``
        column: 1-indexed column number of ``start``
    """

    file: str
    start: int
    end: int
    line: int
    column: int

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.column}"

    def to(self, other: Span) -> Span:
        """Return a span covering from the start of self to the end of other."""
        return Span(
            file=self.file,
            start=self.start,
            end=max(self.end, other.end),
            line=self.line,
            column=self.column,
        )

    def point_end(self) -> Span:
        """Zero-width span at the end of this one."""
        return self.model_copy(update={"start": self.end})
