"""
Tests for version constraint parsing — format check and major extraction.
"""

import pytest

from tfguard.core.services.constraints import extract_major, format_message, is_valid_format


class TestIsValidFormat:
    """is_valid_format() accepts exactly '~> major.minor'."""

    @pytest.mark.parametrize("constraint", [
        "~> 4.0",
        "~> 4.1",
        "~>4.0",
        "~>  5.0",
        "  ~> 5.0  ",
        "~>\t12.34",
        "~> 0.0",
    ])
    def test_accepts(self, constraint: str):
        assert is_valid_format(constraint) is True

    @pytest.mark.parametrize("constraint", [
        "~> 4.1.2",       # patch component
        ">= 4.0",         # other operator
        "= 4.0",
        "4.0",            # bare version
        "4.0.0",
        "~> 4",           # major only
        "~> 4.0 extra",   # trailing garbage
        "~> 4.0, < 6.0",  # range
        "~> v4.0",
        "",
    ])
    def test_rejects(self, constraint: str):
        assert is_valid_format(constraint) is False

    def test_rejects_trailing_newline_garbage(self):
        assert is_valid_format("~> 4.0\nfoo") is False


class TestExtractMajor:
    """extract_major() reads the leading number after '~>'."""

    def test_two_components(self):
        assert extract_major("~> 5.0") == 5

    def test_three_components(self):
        assert extract_major("~> 4.1.2") == 4

    def test_leading_whitespace(self):
        assert extract_major("   ~>   12.3") == 12

    def test_multi_digit(self):
        assert extract_major("~> 10.2") == 10

    @pytest.mark.parametrize("constraint", [">= 4.0", "4.0", "~> 4", "", "~>", "= 4.0.0"])
    def test_not_extractable(self, constraint: str):
        assert extract_major(constraint) is None

    def test_invalid_format_can_still_extract(self):
        """Format and major extraction are independent checks."""
        assert is_valid_format("~> 4.1.2") is False
        assert extract_major("~> 4.1.2") == 4


class TestFormatMessage:
    def test_message_text(self):
        msg = format_message("Provider aws", ">= 4.0")
        assert msg == (
            "Provider aws version constraint should use '~> x.y' format where x is the "
            "major version and y is the minor version (no patch version), got: >= 4.0"
        )
