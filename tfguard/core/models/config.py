"""
Lint configuration model — the validated shape of ``.tfguard.yml``.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class RuleConfig(BaseModel):
    """Per-rule overrides."""

    enabled: bool = True


class LintConfig(BaseModel):
    """Top-level lint configuration.

    All fields are optional; an empty file (or no file at all) means
    every rule enabled, top-level directory only.
    """

    recursive: bool = False
    exclude: list[str] = Field(default_factory=list)   # directory names to skip
    rules: dict[str, RuleConfig] = Field(default_factory=dict)

    def rule_enabled(self, name: str, default: bool = True) -> bool:
        """Whether a rule is enabled, falling back to the rule's own default."""
        override = self.rules.get(name)
        if override is None:
            return default
        return override.enabled
