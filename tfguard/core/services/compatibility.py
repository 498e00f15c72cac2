"""
Module/provider compatibility table.

Community ``terraform-aws-modules`` started tying their breaking releases
to breaking AWS provider releases only recently. This table records the
sanctioned pairs: for each module source, which module major goes with
which provider major. Order matters only for recommendations: the first
entry for a provider major is the recommended module major.

The table is data, not logic. Supporting a new module or a new provider
major is a new entry here.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, NamedTuple


class CompatibilityEntry(NamedTuple):
    """One sanctioned (provider major, module major) pair."""

    provider: int
    module: int


COMPATIBILITY_TABLE: Mapping[str, tuple[CompatibilityEntry, ...]] = MappingProxyType({
    "terraform-aws-modules/s3-bucket/aws": (
        CompatibilityEntry(provider=5, module=4),
        CompatibilityEntry(provider=6, module=5),
    ),
    "terraform-aws-modules/vpc/aws": (
        CompatibilityEntry(provider=5, module=5),
        CompatibilityEntry(provider=6, module=6),
    ),
    "terraform-aws-modules/lambda/aws": (
        CompatibilityEntry(provider=5, module=7),
        CompatibilityEntry(provider=6, module=8),
    ),
})


def is_known_source(source: str) -> bool:
    """Whether the table governs this module source."""
    return source in COMPATIBILITY_TABLE


def is_compatible(source: str, provider_major: int, module_major: int) -> bool:
    """Whether any entry for ``source`` matches both majors exactly."""
    return any(
        entry.provider == provider_major and entry.module == module_major
        for entry in COMPATIBILITY_TABLE.get(source, ())
    )


def recommended_module_major(source: str, provider_major: int) -> int | None:
    """The module major paired with ``provider_major``, or None.

    None means the table has no entry for that provider major at all,
    which is different from "a mapping exists but this pair is wrong".
    """
    for entry in COMPATIBILITY_TABLE.get(source, ()):
        if entry.provider == provider_major:
            return entry.module
    return None
