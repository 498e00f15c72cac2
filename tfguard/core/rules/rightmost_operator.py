"""
Rightmost operator rule — provider constraints must read ``~> x.y``.

Looks at two places a provider version can be pinned:

    terraform {
      required_providers {
        aws = { source = "hashicorp/aws", version = "~> 5.0" }
      }
    }

    provider "aws" {
      version = "~> 5.0"
    }

Values that are not literal strings (variables, function calls) are
skipped without a finding.
"""

from __future__ import annotations

import logging

from tfguard.adapters.base import Block, Document
from tfguard.core.engine.runner import Runner
from tfguard.core.rules.base import Rule
from tfguard.core.services.constraints import format_message, is_valid_format
from tfguard.core.services.provider_locator import iter_block_requirements

logger = logging.getLogger(__name__)


class RightmostOperatorRule(Rule):
    """Checks that provider version constraints use ``~> x.y``."""

    @property
    def name(self) -> str:
        return "rightmost_operator_rule"

    def check(self, runner: Runner) -> None:
        for document in runner.get_documents():
            self._check_document(runner, document)

    def _check_document(self, runner: Runner, document: Document) -> None:
        for block in document.blocks:
            if block.type == "terraform":
                self._check_terraform_block(runner, document.filename, block)
            elif block.type == "provider" and block.labels:
                self._check_provider_block(runner, block)

    def _check_terraform_block(self, runner: Runner, filename: str, block: Block) -> None:
        for req in iter_block_requirements(filename, block):
            if req.version is None:
                continue
            if not is_valid_format(req.version):
                runner.emit_issue(
                    self,
                    format_message(f"Provider {req.name}", req.version),
                    req.attribute.expr.range,
                )

    def _check_provider_block(self, runner: Runner, block: Block) -> None:
        attr = block.attribute("version")
        if attr is None:
            return
        value = attr.expr.evaluate()
        version = value.as_string() if value is not None else None
        if version is None:
            logger.debug("Provider %s version is not a literal string, skipping", block.labels[0])
            return
        if not is_valid_format(version):
            runner.emit_issue(
                self,
                format_message(f"Provider {block.labels[0]}", version),
                attr.expr.range,
            )
