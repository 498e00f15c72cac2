"""
Check use case — one lint pass over a Terraform directory.

Flow:
    config → document source → active rules → runner → sorted diagnostics
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from tfguard.adapters.base import DocumentSource
from tfguard.adapters.hcl import DirectorySource, HclSyntaxError, SourceError
from tfguard.core.config.loader import ConfigError, load_config
from tfguard.core.engine.runner import Runner
from tfguard.core.models.diagnostic import Diagnostic
from tfguard.core.rules.base import Rule
from tfguard.core.rules.registry import RuleRegistry, UnknownRuleError, default_registry

logger = logging.getLogger(__name__)


@dataclass
class CheckResult:
    """Result of a lint pass."""

    target: str = ""
    diagnostics: list[Diagnostic] = field(default_factory=list)
    files_checked: int = 0
    rules_run: list[str] = field(default_factory=list)
    error: str | None = None     # set when the pass could not run at all

    @property
    def ok(self) -> bool:
        return self.error is None and not self.diagnostics

    @property
    def warning_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.severity == "warning")

    def to_dict(self) -> dict:
        return {
            "ok": self.ok,
            "target": self.target,
            "files_checked": self.files_checked,
            "rules_run": self.rules_run,
            "diagnostics": [d.to_dict() for d in self.diagnostics],
            "warnings": self.warning_count,
            "error": self.error,
        }


def run_rules(source: DocumentSource, rules: list[Rule]) -> tuple[list[Diagnostic], int]:
    """Run ``rules`` over ``source`` and return (sorted diagnostics, file count).

    Rules run in order against one shared runner. A failure to load the
    documents propagates unchanged.
    """
    runner = Runner(source)
    logger.debug("Checking %s", runner.source.name)
    for rule in rules:
        logger.debug("Running rule %s", rule.name)
        rule.check(runner)
    documents = runner.get_documents()
    return sorted(runner.issues, key=lambda d: d.sort_key), len(documents)


def run_check(
    path: Path,
    config_path: Path | None = None,
    only: list[str] | None = None,
    recursive: bool | None = None,
    registry: RuleRegistry | None = None,
) -> CheckResult:
    """Lint the Terraform files at ``path``.

    Args:
        path: Directory (or single ``.tf`` file) to check.
        config_path: Explicit config file; searched upward from ``path`` if None.
        only: Restrict the pass to these rule names.
        recursive: Override the config's ``recursive`` setting.
        registry: Rules to choose from (default: every shipped rule).

    Returns:
        CheckResult with diagnostics, or with ``error`` set when the
        configuration or the files could not be read.
    """
    result = CheckResult(target=str(path))
    registry = registry or default_registry()

    try:
        config = load_config(config_path, start_dir=path)
        rules = registry.active_rules(config, only=only)
    except ConfigError as e:
        result.error = str(e)
        return result
    except UnknownRuleError as e:
        result.error = f"Unknown rule: {e}"
        return result

    result.rules_run = [r.name for r in rules]
    source = DirectorySource(
        path,
        recursive=config.recursive if recursive is None else recursive,
        exclude=config.exclude,
    )

    try:
        # Each directory is its own Terraform module with its own providers
        for module_source in source.split_by_directory():
            diagnostics, count = run_rules(module_source, rules)
            result.diagnostics.extend(diagnostics)
            result.files_checked += count
    except (SourceError, HclSyntaxError) as e:
        logger.debug("Check aborted: %s", e)
        result.diagnostics = []
        result.files_checked = 0
        result.error = str(e)
        return result

    result.diagnostics.sort(key=lambda d: d.sort_key)

    logger.info(
        "Checked %d files with %d rules: %d issues",
        result.files_checked, len(rules), len(result.diagnostics),
    )
    return result
