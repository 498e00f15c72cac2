"""
Rule registry — the set of rules a check pass can run.

The registry owns rule lookup and decides which rules are active for a
given configuration. The use case never instantiates rules itself.
"""

from __future__ import annotations

import logging

from tfguard.core.models.config import LintConfig
from tfguard.core.rules.aws_module_version import AwsModuleVersionRule
from tfguard.core.rules.base import Rule
from tfguard.core.rules.rightmost_operator import RightmostOperatorRule

logger = logging.getLogger(__name__)


class UnknownRuleError(Exception):
    """Raised when a rule name is not registered."""


class RuleRegistry:
    """Named collection of rules, in registration order."""

    def __init__(self) -> None:
        self._rules: dict[str, Rule] = {}

    def register(self, rule: Rule) -> None:
        name = rule.name
        if name in self._rules:
            logger.warning("Overwriting existing rule: %s", name)
        self._rules[name] = rule
        logger.debug("Registered rule: %s", name)

    def get(self, name: str) -> Rule | None:
        return self._rules.get(name)

    def list_rules(self) -> list[Rule]:
        return list(self._rules.values())

    def names(self) -> list[str]:
        return list(self._rules)

    def active_rules(self, config: LintConfig, only: list[str] | None = None) -> list[Rule]:
        """Rules to run for ``config``.

        ``only`` restricts the pass to the named rules regardless of their
        enabled flag. Unknown names in ``only`` raise UnknownRuleError;
        unknown names in the config are logged and ignored.
        """
        for name in config.rules:
            if name not in self._rules:
                logger.warning("Config mentions unknown rule %r, ignoring", name)

        if only:
            missing = [n for n in only if n not in self._rules]
            if missing:
                raise UnknownRuleError(", ".join(missing))
            return [self._rules[n] for n in self._rules if n in only]

        return [
            rule for rule in self._rules.values()
            if config.rule_enabled(rule.name, default=rule.enabled)
        ]

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, name: object) -> bool:
        return name in self._rules


def default_registry() -> RuleRegistry:
    """A registry with every shipped rule."""
    registry = RuleRegistry()
    registry.register(RightmostOperatorRule())
    registry.register(AwsModuleVersionRule())
    return registry
