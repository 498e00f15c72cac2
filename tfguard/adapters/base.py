"""
Adapter base — the document tree contract between rules and parsers.

Rules only read configuration through these types: documents made of
blocks, blocks made of attributes and nested blocks, attributes holding
expressions. How a document is produced (which parser, which files) is
the business of a ``DocumentSource`` implementation.

Expressions are the one parser-specific piece: each adapter decides how
to evaluate its own expression nodes into a ``Value``. An expression
that cannot be reduced to a literal (a variable reference, a function
call, an interpolated template) evaluates to ``None`` rather than raising.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Literal

from tfguard.core.models.source import SourceRange

ValueKind = Literal["string", "number", "bool", "null", "object", "tuple"]


@dataclass(frozen=True)
class Value:
    """A fully-known literal value.

    ``data`` holds the Python payload: ``str`` for strings, ``int`` or
    ``float`` for numbers, ``bool``, ``None`` for null, ``dict[str, Value]``
    for objects and ``tuple[Value, ...]`` for tuples.
    """

    kind: ValueKind
    data: Any = None

    @classmethod
    def string(cls, text: str) -> Value:
        return cls("string", text)

    @classmethod
    def null(cls) -> Value:
        return cls("null", None)

    @classmethod
    def from_dict(cls, attrs: dict[str, Value]) -> Value:
        return cls("object", dict(attrs))

    @property
    def is_null(self) -> bool:
        return self.kind == "null"

    def as_string(self) -> str | None:
        """The string payload, or None when this is not a string."""
        if self.kind == "string":
            return self.data
        return None

    def get_attr(self, name: str) -> Value | None:
        """An object attribute, or None when absent or not an object."""
        if self.kind != "object":
            return None
        return self.data.get(name)

    def to_python(self) -> Any:
        """Recursively unwrap into plain Python values."""
        if self.kind == "object":
            return {k: v.to_python() for k, v in self.data.items()}
        if self.kind == "tuple":
            return [v.to_python() for v in self.data]
        return self.data


class Expression(ABC):
    """An attribute value as written in the source."""

    @property
    @abstractmethod
    def range(self) -> SourceRange:
        """Where the expression sits in its file."""

    @abstractmethod
    def evaluate(self) -> Value | None:
        """Reduce the expression to a literal value.

        Returns None when the expression depends on anything that is not
        a literal. MUST never raise.
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.range}>"


@dataclass(frozen=True)
class Attribute:
    """``name = expr`` inside a block body."""

    name: str
    expr: Expression
    range: SourceRange


@dataclass(frozen=True)
class Block:
    """``type "label" ... { body }``.

    ``attributes`` keeps source order; ``blocks`` holds nested blocks in
    source order.
    """

    type: str
    labels: tuple[str, ...] = ()
    attributes: dict[str, Attribute] = field(default_factory=dict)
    blocks: tuple[Block, ...] = ()
    range: SourceRange | None = None

    def attribute(self, name: str) -> Attribute | None:
        """Look up an attribute by name."""
        return self.attributes.get(name)

    def blocks_of_type(self, block_type: str) -> list[Block]:
        """Nested blocks with the given type tag, in source order."""
        return [b for b in self.blocks if b.type == block_type]


@dataclass(frozen=True)
class Document:
    """One parsed configuration file."""

    filename: str
    blocks: tuple[Block, ...] = ()
    attributes: dict[str, Attribute] = field(default_factory=dict)

    def blocks_of_type(self, block_type: str) -> list[Block]:
        """Top-level blocks with the given type tag, in source order."""
        return [b for b in self.blocks if b.type == block_type]


class DocumentSource(ABC):
    """Abstract provider of parsed documents.

    To create a new source:
        1. Subclass DocumentSource
        2. Implement name and load
        3. Hand it to a Runner
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable description (a directory, "memory", ...)."""

    @abstractmethod
    def load(self) -> list[Document]:
        """Produce every document, ordered by filename.

        Failures here (unreadable files, syntax errors) are raised to the
        caller unchanged; they abort the whole check.
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
