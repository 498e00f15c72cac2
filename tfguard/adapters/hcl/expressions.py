"""
Expression nodes produced by the HCL parser.

Literal strings, numbers, booleans, null, and object/tuple constructors
made only of literals evaluate without context. Everything else is kept
as an opaque token run with a source range and evaluates to None.
"""

from __future__ import annotations

import logging

from tfguard.adapters.base import Expression, Value
from tfguard.core.models.source import SourceRange

logger = logging.getLogger(__name__)


class LiteralExpression(Expression):
    """A string, heredoc, number, bool, or null literal."""

    def __init__(self, value: Value, rng: SourceRange):
        self._value = value
        self._range = rng

    @property
    def range(self) -> SourceRange:
        return self._range

    def evaluate(self) -> Value | None:
        return self._value


class ObjectExpression(Expression):
    """``{ key = value, ... }``.

    A key of None marks a computed key (``(var.x) = 1``), which makes the
    whole object unknown.
    """

    def __init__(self, items: list[tuple[str | None, Expression]], rng: SourceRange):
        self._items = items
        self._range = rng

    @property
    def range(self) -> SourceRange:
        return self._range

    def evaluate(self) -> Value | None:
        attrs: dict[str, Value] = {}
        for key, expr in self._items:
            if key is None:
                return None
            if key in attrs:
                logger.debug("Duplicate object key %r at %s", key, self._range)
                return None
            value = expr.evaluate()
            if value is None:
                return None
            attrs[key] = value
        return Value.from_dict(attrs)


class TupleExpression(Expression):
    """``[ a, b, ... ]``."""

    def __init__(self, items: list[Expression], rng: SourceRange):
        self._items = items
        self._range = rng

    @property
    def range(self) -> SourceRange:
        return self._range

    def evaluate(self) -> Value | None:
        values = []
        for expr in self._items:
            value = expr.evaluate()
            if value is None:
                return None
            values.append(value)
        return Value("tuple", tuple(values))


class OpaqueExpression(Expression):
    """Any expression that needs an evaluation context.

    References, function calls, operators, conditionals, templates with
    interpolation, and ``for`` expressions all land here.
    """

    def __init__(self, text: str, rng: SourceRange):
        self.text = text
        self._range = rng

    @property
    def range(self) -> SourceRange:
        return self._range

    def evaluate(self) -> Value | None:
        logger.debug("Cannot evaluate %r at %s", self.text, self._range)
        return None
