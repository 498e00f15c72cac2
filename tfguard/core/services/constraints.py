"""
Version constraint parsing — the "~> x.y" house convention.

Two independent questions are asked of a constraint string:

    is_valid_format("~> 4.1")   → True    (strict: major.minor only)
    extract_major("~> 4.1.2")   → 4       (loose: patch allowed)

A constraint can fail the strict check and still yield a major version,
so a single value may produce a format warning and still take part in
the compatibility check.
"""

from __future__ import annotations

import re

# Rightmost operator with exactly major.minor, nothing else
_VALID_RE = re.compile(r"\s*~>\s*([0-9]+)\.([0-9]+)\s*", re.ASCII)

# Rightmost operator followed by "<major>." (any tail)
_MAJOR_RE = re.compile(r"\s*~>\s*([0-9]+)\.", re.ASCII)

EXPECTED_FORMAT = "~> x.y"


def is_valid_format(constraint: str) -> bool:
    """Whether ``constraint`` is exactly ``~> <major>.<minor>``.

    Surrounding whitespace and whitespace after the operator are allowed;
    a patch component, another operator, or trailing text are not.
    """
    return _VALID_RE.fullmatch(constraint) is not None


def extract_major(constraint: str) -> int | None:
    """The major version of a ``~>`` constraint, or None.

    Accepts ``~> 4.1`` and ``~> 4.1.2`` alike. Returns None when the
    string does not start with the rightmost operator and a number.
    """
    m = _MAJOR_RE.match(constraint)
    if m is None:
        return None
    return int(m.group(1))


def format_message(subject: str, constraint: str) -> str:
    """The warning text for a constraint that breaks the format."""
    return (
        f"{subject} version constraint should use '{EXPECTED_FORMAT}' format "
        "where x is the major version and y is the minor version "
        f"(no patch version), got: {constraint}"
    )
