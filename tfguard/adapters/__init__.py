"""
Adapters — document tree contract and its implementations.
"""

from tfguard.adapters.base import (
    Attribute,
    Block,
    Document,
    DocumentSource,
    Expression,
    Value,
)

__all__ = [
    "Attribute",
    "Block",
    "Document",
    "DocumentSource",
    "Expression",
    "Value",
]
