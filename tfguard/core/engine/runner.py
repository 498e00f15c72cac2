"""
Check runner — what a rule sees while it runs.

The runner hands rules the parsed documents and collects the issues they
emit. Documents are loaded once per runner and shared by every rule in
the pass. A failure while loading propagates to the caller untouched:
there is nothing meaningful to check without the document tree.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tfguard.adapters.base import Document, DocumentSource
from tfguard.core.models.diagnostic import Diagnostic
from tfguard.core.models.source import SourceRange

if TYPE_CHECKING:
    from tfguard.core.rules.base import Rule

logger = logging.getLogger(__name__)


class Runner:
    """Document access plus an issue sink for one check pass."""

    def __init__(self, source: DocumentSource):
        self._source = source
        self._documents: list[Document] | None = None
        self._issues: list[Diagnostic] = []

    @property
    def source(self) -> DocumentSource:
        return self._source

    @property
    def issues(self) -> list[Diagnostic]:
        """Issues emitted so far, in emission order."""
        return list(self._issues)

    def get_documents(self) -> list[Document]:
        """The documents under check, loaded on first use."""
        if self._documents is None:
            self._documents = self._source.load()
            logger.debug("Loaded %d documents from %s", len(self._documents), self._source.name)
        return self._documents

    def emit_issue(self, rule: Rule, message: str, rng: SourceRange) -> None:
        """Record a finding for ``rule`` at ``rng``."""
        issue = Diagnostic(rule=rule.name, message=message, range=rng, severity=rule.severity)
        logger.debug("[%s] %s (%s)", rule.name, message, rng)
        self._issues.append(issue)
