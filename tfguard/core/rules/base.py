"""
Rule base — the contract every lint rule implements.

A rule reads documents from the runner and reports findings through
``runner.emit_issue``. Findings are data, not exceptions: ``check`` only
raises when the runner itself cannot supply documents.

To create a new rule:
    1. Subclass Rule
    2. Implement name and check
    3. Register it in the RuleRegistry
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from tfguard.core.engine.runner import Runner
from tfguard.core.models.diagnostic import Severity


class Rule(ABC):
    """Abstract base class for all rules."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Stable rule identifier (used in config and output)."""

    @property
    def enabled(self) -> bool:
        """Whether the rule runs when config says nothing about it."""
        return True

    @property
    def severity(self) -> Severity:
        return "warning"

    @property
    def link(self) -> str:
        """Documentation URL, empty when there is none."""
        return ""

    @abstractmethod
    def check(self, runner: Runner) -> None:
        """Inspect the runner's documents and emit issues."""

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "enabled": self.enabled,
            "severity": self.severity,
            "link": self.link,
        }

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
