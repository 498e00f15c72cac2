"""
Tests for provider version lookup in terraform/required_providers blocks.
"""

import textwrap

from tfguard.adapters.base import Block, Document, Value
from tfguard.adapters.hcl import InMemorySource, parse
from tfguard.adapters.mock import mock_attribute
from tfguard.core.services.provider_locator import (
    find_external_version,
    find_provider_versions,
    iter_required_providers,
)


def _docs(files: dict[str, str]) -> list[Document]:
    return InMemorySource({k: textwrap.dedent(v) for k, v in files.items()}).load()


VERSIONS_TF = """
terraform {
  required_providers {
    google = {
      source  = "hashicorp/google"
      version = "~> 4.0"
    }
    aws = {
      source  = "hashicorp/aws"
      version = "~> 5.0"
    }
  }
}
"""


class TestFindExternalVersion:
    def test_found(self):
        assert find_external_version(_docs({"versions.tf": VERSIONS_TF})) == "~> 5.0"

    def test_other_provider_name(self):
        assert find_external_version(_docs({"versions.tf": VERSIONS_TF}), "google") == "~> 4.0"

    def test_no_terraform_block(self):
        docs = _docs({"main.tf": 'provider "aws" {\n  version = "~> 5.0"\n}\n'})
        assert find_external_version(docs) is None

    def test_no_required_providers(self):
        docs = _docs({"main.tf": 'terraform {\n  required_version = ">= 1.5"\n}\n'})
        assert find_external_version(docs) is None

    def test_entry_without_version(self):
        docs = _docs({"main.tf": """
            terraform {
              required_providers {
                aws = {
                  source = "hashicorp/aws"
                }
              }
            }
        """})
        assert find_external_version(docs) is None

    def test_version_not_a_string(self):
        docs = _docs({"main.tf": """
            terraform {
              required_providers {
                aws = {
                  source  = "hashicorp/aws"
                  version = 5
                }
              }
            }
        """})
        assert find_external_version(docs) is None

    def test_unevaluable_entry_is_skipped(self):
        docs = _docs({"main.tf": """
            terraform {
              required_providers {
                aws = {
                  source  = "hashicorp/aws"
                  version = var.aws_version
                }
              }
            }
        """})
        assert find_external_version(docs) is None

    def test_legacy_string_entry_is_skipped(self):
        docs = _docs({"main.tf": """
            terraform {
              required_providers {
                aws = "~> 5.0"
              }
            }
        """})
        assert find_external_version(docs) is None

    def test_first_file_by_name_wins(self):
        docs = _docs({
            "b.tf": 'terraform {\n  required_providers {\n    aws = { version = "~> 6.0" }\n  }\n}\n',
            "a.tf": 'terraform {\n  required_providers {\n    aws = { version = "~> 5.0" }\n  }\n}\n',
        })
        assert [d.filename for d in docs] == ["a.tf", "b.tf"]
        assert find_external_version(docs) == "~> 5.0"

    def test_works_on_hand_built_documents(self):
        obj = Value.from_dict({"version": Value.string("~> 6.1")})
        required = Block(type="required_providers", attributes={"aws": mock_attribute("aws", obj)})
        doc = Document(filename="x.tf", blocks=(Block(type="terraform", blocks=(required,)),))
        assert find_external_version([doc]) == "~> 6.1"


class TestFindProviderVersions:
    def test_all_declarations_in_order(self):
        docs = _docs({
            "a.tf": 'terraform {\n  required_providers {\n    aws = { version = "~> 5.0" }\n  }\n}\n',
            "b.tf": 'terraform {\n  required_providers {\n    aws = { version = "~> 6.0" }\n  }\n}\n',
        })
        found = find_provider_versions(docs)
        assert [(r.filename, r.version) for r in found] == [("a.tf", "~> 5.0"), ("b.tf", "~> 6.0")]


class TestIterRequiredProviders:
    def test_yields_every_object_entry(self):
        doc = parse(textwrap.dedent(VERSIONS_TF), "versions.tf")
        reqs = list(iter_required_providers([doc]))
        assert [r.name for r in reqs] == ["google", "aws"]
        assert reqs[1].attribute.expr.range.start.line == 8
