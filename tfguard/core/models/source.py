"""
Source location models — where a diagnostic points.

Positions are 1-based (line and column). A range's end position is
exclusive, so a one-character token at column 5 spans 5..6.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class SourcePos(BaseModel):
    """A single position inside a source file."""

    model_config = ConfigDict(frozen=True)

    line: int = 1
    column: int = 1


class SourceRange(BaseModel):
    """A span of text in a named source file."""

    model_config = ConfigDict(frozen=True)

    filename: str
    start: SourcePos = SourcePos()
    end: SourcePos = SourcePos()

    @classmethod
    def span(
        cls,
        filename: str,
        start_line: int,
        start_column: int,
        end_line: int,
        end_column: int,
    ) -> SourceRange:
        """Build a range from four numbers."""
        return cls(
            filename=filename,
            start=SourcePos(line=start_line, column=start_column),
            end=SourcePos(line=end_line, column=end_column),
        )

    def __str__(self) -> str:
        return f"{self.filename}:{self.start.line},{self.start.column}-{self.end.line},{self.end.column}"
