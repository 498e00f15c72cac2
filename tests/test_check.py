"""
Tests for the check use case — config, source, rules, and result together.
"""

from pathlib import Path
from unittest.mock import patch

from tfguard.adapters.hcl import SourceError
from tfguard.core.use_cases.check import CheckResult, run_check

VERSIONS_TF = """
terraform {
  required_providers {
    aws = {
      source  = "hashicorp/aws"
      version = "~> 5.0"
    }
    google = {
      source  = "hashicorp/google"
      version = ">= 4.0"
    }
  }
}
"""

MAIN_TF = """
module "vpc" {
  source  = "terraform-aws-modules/vpc/aws"
  version = "~> 6.0"
}

module "s3" {
  source  = "terraform-aws-modules/s3-bucket/aws"
  version = "~> 4.0"
}
"""

AWS_VERSIONS_TF = """
terraform {{
  required_providers {{
    aws = {{
      source  = "hashicorp/aws"
      version = "{version}"
    }}
  }}
}}
"""

S3_MODULE = """
module "s3" {{
  source  = "terraform-aws-modules/s3-bucket/aws"
  version = "{version}"
}}
"""


def _project(write_tf) -> None:
    write_tf("versions.tf", VERSIONS_TF)
    write_tf("main.tf", MAIN_TF)


class TestRunCheck:
    def test_clean(self, write_tf, tmp_path: Path):
        write_tf("main.tf", 'provider "aws" {\n  region = "us-east-1"\n}\n')
        result = run_check(tmp_path)
        assert result.ok
        assert result.files_checked == 1
        assert result.rules_run == ["rightmost_operator_rule", "aws_module_version_rule"]

    def test_diagnostics_sorted(self, write_tf, tmp_path: Path):
        _project(write_tf)
        result = run_check(tmp_path)

        assert not result.ok
        assert result.error is None
        assert result.files_checked == 2
        assert [(d.range.filename, d.range.start.line, d.rule) for d in result.diagnostics] == [
            ("main.tf", 4, "aws_module_version_rule"),
            ("versions.tf", 8, "rightmost_operator_rule"),
        ]
        assert result.warning_count == 2

    def test_config_disables_rule(self, write_tf, tmp_path: Path):
        _project(write_tf)
        (tmp_path / ".tfguard.yml").write_text(
            "rules:\n  aws_module_version_rule:\n    enabled: false\n"
        )
        result = run_check(tmp_path)
        assert result.rules_run == ["rightmost_operator_rule"]
        assert [d.rule for d in result.diagnostics] == ["rightmost_operator_rule"]

    def test_only(self, write_tf, tmp_path: Path):
        _project(write_tf)
        result = run_check(tmp_path, only=["aws_module_version_rule"])
        assert [d.rule for d in result.diagnostics] == ["aws_module_version_rule"]

    def test_unknown_only(self, tmp_path: Path):
        result = run_check(tmp_path, only=["nope"])
        assert result.error == "Unknown rule: nope"
        assert result.diagnostics == []

    def test_recursive_from_config(self, write_tf, tmp_path: Path):
        write_tf("versions.tf", VERSIONS_TF)
        write_tf("stacks/app/main.tf", MAIN_TF)
        assert run_check(tmp_path).files_checked == 1

        (tmp_path / ".tfguard.yml").write_text("recursive: true\n")
        result = run_check(tmp_path)
        assert result.files_checked == 2
        # stacks/app declares no aws provider of its own, so its modules are not cross-checked
        assert [(d.range.filename, d.rule) for d in result.diagnostics] == [
            ("versions.tf", "rightmost_operator_rule"),
        ]

    def test_recursive_checks_each_directory_on_its_own(self, write_tf, tmp_path: Path):
        write_tf("versions.tf", AWS_VERSIONS_TF.format(version="~> 5.0"))
        write_tf("main.tf", S3_MODULE.format(version="~> 4.0"))
        write_tf("modules/child/versions.tf", AWS_VERSIONS_TF.format(version="~> 6.0"))

        assert run_check(tmp_path).diagnostics == []
        result = run_check(tmp_path, recursive=True)
        assert result.files_checked == 3
        assert result.diagnostics == []

    def test_recursive_child_uses_its_own_provider(self, write_tf, tmp_path: Path):
        write_tf("versions.tf", AWS_VERSIONS_TF.format(version="~> 5.0"))
        write_tf("main.tf", S3_MODULE.format(version="~> 4.0"))
        write_tf("modules/child/versions.tf", AWS_VERSIONS_TF.format(version="~> 6.0"))
        write_tf("modules/child/main.tf", S3_MODULE.format(version="~> 4.0"))

        result = run_check(tmp_path, recursive=True)
        assert [(d.range.filename, d.message) for d in result.diagnostics] == [(
            "modules/child/main.tf",
            "Module terraform-aws-modules/s3-bucket/aws version ~> 4.0 is not compatible "
            "with AWS provider version ~> 6.0. Use module version ~> 5.0 for AWS provider ~> 6.0",
        )]

    def test_recursive_override(self, write_tf, tmp_path: Path):
        write_tf("a/main.tf", 'provider "aws" {\n  version = "5.0.0"\n}\n')
        result = run_check(tmp_path, recursive=True)
        assert result.files_checked == 1
        assert len(result.diagnostics) == 1

    def test_exclude_from_config(self, write_tf, tmp_path: Path):
        write_tf("examples/demo/main.tf", 'provider "aws" {\n  version = "5.0.0"\n}\n')
        (tmp_path / ".tfguard.yml").write_text("recursive: true\nexclude: [examples]\n")
        result = run_check(tmp_path)
        assert result.ok
        assert result.files_checked == 0

    def test_syntax_error(self, write_tf, tmp_path: Path):
        write_tf("broken.tf", 'module "x" {\n  source = "a"\n')
        result = run_check(tmp_path)
        assert result.error is not None
        assert result.error.startswith("broken.tf:")
        assert result.diagnostics == []

    def test_bad_config(self, tmp_path: Path):
        (tmp_path / ".tfguard.yml").write_text("- not a mapping\n")
        result = run_check(tmp_path)
        assert "Expected a YAML mapping" in result.error

    def test_explicit_config(self, write_tf, tmp_path: Path):
        _project(write_tf)
        config = tmp_path / "lint.yml"
        config.write_text("rules:\n  rightmost_operator_rule:\n    enabled: false\n")
        result = run_check(tmp_path, config_path=config)
        assert [d.rule for d in result.diagnostics] == ["aws_module_version_rule"]

    def test_source_failure(self, write_tf, tmp_path: Path):
        write_tf("main.tf", "")
        with patch(
            "tfguard.adapters.hcl.source.DirectorySource.load",
            side_effect=SourceError("Cannot read main.tf: permission denied"),
        ):
            result = run_check(tmp_path)
        assert result.error == "Cannot read main.tf: permission denied"


class TestCheckResult:
    def test_to_dict(self, write_tf, tmp_path: Path):
        _project(write_tf)
        data = run_check(tmp_path).to_dict()
        assert data["ok"] is False
        assert data["files_checked"] == 2
        assert data["warnings"] == 2
        assert data["error"] is None
        assert data["diagnostics"][0]["range"]["filename"] == "main.tf"

    def test_empty_is_ok(self):
        result = CheckResult(target=".")
        assert result.ok
        assert result.to_dict()["diagnostics"] == []

    def test_error_is_not_ok(self):
        assert not CheckResult(error="boom").ok
