"""
AWS module version rule — community modules must match the provider.

For every ``module`` block whose ``source`` is a known
``terraform-aws-modules`` module, checks that:

    1. a ``version`` is given at all,
    2. it uses the ``~> x.y`` format,
    3. its major version is the one paired with the AWS provider's
       major version in the compatibility table.

The provider version comes from ``terraform { required_providers }``.
Without one there is nothing to compare against and the rule does
nothing.
"""

from __future__ import annotations

import logging

from tfguard.adapters.base import Block, Document
from tfguard.core.engine.runner import Runner
from tfguard.core.rules.base import Rule
from tfguard.core.services.compatibility import (
    is_compatible,
    is_known_source,
    recommended_module_major,
)
from tfguard.core.services.constraints import extract_major, format_message, is_valid_format
from tfguard.core.services.provider_locator import (
    EXTERNAL_PROVIDER,
    find_external_version,
    find_provider_versions,
)

logger = logging.getLogger(__name__)


class AwsModuleVersionRule(Rule):
    """Checks module versions against the AWS provider major version."""

    @property
    def name(self) -> str:
        return "aws_module_version_rule"

    def check(self, runner: Runner) -> None:
        documents = runner.get_documents()

        provider_version = find_external_version(documents, EXTERNAL_PROVIDER)
        if provider_version is None:
            logger.debug("No %s provider version declared, skipping module checks", EXTERNAL_PROVIDER)
            return
        _log_conflicts(documents, provider_version)

        for document in documents:
            for block in document.blocks_of_type("module"):
                self._check_module_block(runner, block, provider_version)

    def _check_module_block(self, runner: Runner, block: Block, provider_version: str) -> None:
        source_attr = block.attribute("source")
        if source_attr is None:
            return
        value = source_attr.expr.evaluate()
        source = value.as_string() if value is not None else None
        if source is None or not is_known_source(source):
            return

        version_attr = block.attribute("version")
        if version_attr is None:
            runner.emit_issue(
                self,
                f"Module {source} should specify a version constraint",
                source_attr.expr.range,
            )
            return

        value = version_attr.expr.evaluate()
        module_version = value.as_string() if value is not None else None
        if module_version is None:
            logger.debug("Module %s version is not a literal string, skipping", source)
            return

        # Format and compatibility are reported independently
        if not is_valid_format(module_version):
            runner.emit_issue(
                self,
                format_message(f"Module {source}", module_version),
                version_attr.expr.range,
            )

        provider_major = extract_major(provider_version)
        if provider_major is None:
            logger.debug("Cannot read a major version from provider constraint %r", provider_version)
            return
        module_major = extract_major(module_version)
        if module_major is None:
            logger.debug("Cannot read a major version from module constraint %r", module_version)
            return

        if is_compatible(source, provider_major, module_major):
            return

        recommended = recommended_module_major(source, provider_major)
        if recommended is not None:
            message = (
                f"Module {source} version ~> {module_major}.0 is not compatible with "
                f"AWS provider version {provider_version}. Use module version "
                f"~> {recommended}.0 for AWS provider ~> {provider_major}.0"
            )
        else:
            message = (
                f"Module {source} version ~> {module_major}.0 does not have a known "
                f"compatibility mapping for AWS provider version {provider_version}"
            )
        runner.emit_issue(self, message, version_attr.expr.range)


def _log_conflicts(documents: list[Document], chosen: str) -> None:
    """Warn when several files pin the provider to different constraints.

    The first declaration (by filename, then source order) is used.
    """
    declarations = find_provider_versions(documents, EXTERNAL_PROVIDER)
    for other in declarations[1:]:
        if other.version != chosen:
            logger.warning(
                "Conflicting %s provider versions: using %r from %s, ignoring %r from %s",
                EXTERNAL_PROVIDER, chosen, declarations[0].filename,
                other.version, other.filename,
            )
