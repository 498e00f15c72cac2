"""
Tests for the pydantic models — source ranges, diagnostics, lint config.
"""

import json

import pytest
from pydantic import ValidationError

from tfguard.core.models import Diagnostic, LintConfig, RuleConfig, SourcePos, SourceRange


class TestSourceRange:
    def test_span(self):
        rng = SourceRange.span("main.tf", 3, 13, 3, 21)
        assert rng.start == SourcePos(line=3, column=13)
        assert rng.end == SourcePos(line=3, column=21)

    def test_str(self):
        assert str(SourceRange.span("main.tf", 4, 11, 7, 6)) == "main.tf:4,11-7,6"

    def test_frozen(self):
        rng = SourceRange(filename="main.tf")
        with pytest.raises(ValidationError):
            rng.filename = "other.tf"


class TestDiagnostic:
    def test_defaults_to_warning(self):
        d = Diagnostic(rule="r", message="m", range=SourceRange(filename="a.tf"))
        assert d.severity == "warning"

    def test_rejects_unknown_severity(self):
        with pytest.raises(ValidationError):
            Diagnostic(rule="r", message="m", range=SourceRange(filename="a.tf"), severity="fatal")

    def test_sort_key(self):
        diags = [
            Diagnostic(rule="b", message="m", range=SourceRange.span("b.tf", 1, 1, 1, 2)),
            Diagnostic(rule="z", message="m", range=SourceRange.span("a.tf", 9, 1, 9, 2)),
            Diagnostic(rule="a", message="m", range=SourceRange.span("a.tf", 2, 5, 2, 6)),
            Diagnostic(rule="b", message="m", range=SourceRange.span("a.tf", 2, 5, 2, 6)),
        ]
        ordered = sorted(diags, key=lambda d: d.sort_key)
        assert [(d.range.filename, d.rule) for d in ordered] == [
            ("a.tf", "a"), ("a.tf", "b"), ("a.tf", "z"), ("b.tf", "b"),
        ]

    def test_to_dict_is_json_safe(self):
        d = Diagnostic(rule="r", message="m", range=SourceRange.span("a.tf", 1, 2, 3, 4))
        data = d.to_dict()
        assert json.loads(json.dumps(data)) == {
            "rule": "r",
            "message": "m",
            "range": {
                "filename": "a.tf",
                "start": {"line": 1, "column": 2},
                "end": {"line": 3, "column": 4},
            },
            "severity": "warning",
        }


class TestLintConfig:
    def test_defaults(self):
        config = LintConfig()
        assert config.recursive is False
        assert config.exclude == []
        assert config.rule_enabled("anything") is True
        assert config.rule_enabled("anything", default=False) is False

    def test_rule_override(self):
        config = LintConfig(rules={"r": RuleConfig(enabled=False)})
        assert config.rule_enabled("r") is False

    def test_validation(self):
        config = LintConfig.model_validate({"rules": {"r": {}}, "exclude": ["examples"]})
        assert config.rules["r"].enabled is True
        assert config.exclude == ["examples"]

    def test_rejects_bad_shape(self):
        with pytest.raises(ValidationError):
            LintConfig.model_validate({"rules": ["r"]})
