"""
HCL adapter errors.
"""

from __future__ import annotations

from tfguard.core.models.source import SourcePos


class SourceError(Exception):
    """Raised when configuration files cannot be discovered or read."""


class HclSyntaxError(Exception):
    """Raised when a file is not valid HCL native syntax."""

    def __init__(self, message: str, filename: str, pos: SourcePos):
        self.message = message
        self.filename = filename
        self.pos = pos
        super().__init__(f"{filename}:{pos.line},{pos.column}: {message}")
