"""
Diagnostic model — one finding emitted by a rule.

Diagnostics are produced by rules through the runner and never
mutated afterwards. Severity is always "warning" for the shipped rules.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

from tfguard.core.models.source import SourceRange

Severity = Literal["error", "warning", "notice"]


class Diagnostic(BaseModel):
    """A rule finding anchored to a source range."""

    model_config = ConfigDict(frozen=True)

    rule: str                       # name of the rule that emitted it
    message: str
    range: SourceRange
    severity: Severity = "warning"

    @property
    def sort_key(self) -> tuple[str, int, int, str]:
        """Stable ordering: file, line, column, rule."""
        return (
            self.range.filename,
            self.range.start.line,
            self.range.start.column,
            self.rule,
        )

    def to_dict(self) -> dict:
        return self.model_dump(mode="json")
