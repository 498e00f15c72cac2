"""
Lint rules.
"""

from tfguard.core.rules.aws_module_version import AwsModuleVersionRule
from tfguard.core.rules.base import Rule
from tfguard.core.rules.registry import RuleRegistry, UnknownRuleError, default_registry
from tfguard.core.rules.rightmost_operator import RightmostOperatorRule

__all__ = [
    "AwsModuleVersionRule",
    "RightmostOperatorRule",
    "Rule",
    "RuleRegistry",
    "UnknownRuleError",
    "default_registry",
]
