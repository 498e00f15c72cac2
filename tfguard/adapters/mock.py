"""
Mock adapter — documents built directly in Python, no parsing.

Used by tests to exercise rules against hand-made trees, including
shapes the parser never produces (an unavailable source, an expression
that fails to evaluate at a chosen range).
"""

from __future__ import annotations

from tfguard.adapters.base import Attribute, Document, DocumentSource, Expression, Value
from tfguard.core.models.source import SourceRange


class MockExpression(Expression):
    """An expression with a fixed evaluation result.

    ``value=None`` simulates an expression that cannot be evaluated.
    """

    def __init__(self, value: Value | None, rng: SourceRange):
        self._value = value
        self._range = rng
        self.evaluations = 0

    @property
    def range(self) -> SourceRange:
        return self._range

    def evaluate(self) -> Value | None:
        self.evaluations += 1
        return self._value


def mock_attribute(
    name: str,
    value: Value | str | None,
    filename: str = "main.tf",
    line: int = 1,
) -> Attribute:
    """Build an attribute whose expression sits on ``line``.

    A plain ``str`` is wrapped as a string value.
    """
    if isinstance(value, str):
        value = Value.string(value)
    start = len(name) + 4
    rng = SourceRange.span(filename, line, start, line, start + 8)
    return Attribute(
        name=name,
        expr=MockExpression(value, rng),
        range=SourceRange.span(filename, line, 1, line, start + 8),
    )


class MockSource(DocumentSource):
    """A source returning prepared documents, or raising a prepared error."""

    def __init__(self, documents: list[Document] | None = None, error: Exception | None = None):
        self._documents = list(documents or [])
        self._error = error
        self.load_count = 0

    @property
    def name(self) -> str:
        return "mock"

    def load(self) -> list[Document]:
        self.load_count += 1
        if self._error is not None:
            raise self._error
        return list(self._documents)
