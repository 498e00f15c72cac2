"""
Domain models — Pydantic types for the linter.

All models are re-exported here for convenient access:

    from tfguard.core.models import Diagnostic, LintConfig, SourceRange
"""

from tfguard.core.models.config import LintConfig, RuleConfig
from tfguard.core.models.diagnostic import Diagnostic, Severity
from tfguard.core.models.source import SourcePos, SourceRange

__all__ = [
    # diagnostic.py
    "Diagnostic",
    # config.py
    "LintConfig",
    "RuleConfig",
    "Severity",
    # source.py
    "SourcePos",
    "SourceRange",
]
