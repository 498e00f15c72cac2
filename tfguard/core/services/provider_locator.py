"""
Provider version lookup — ``terraform { required_providers { ... } }``.

Walks documents in order, then top-level blocks in order, then the
provider entries of each ``required_providers`` block in source order.
The first declaration found for a provider wins. Later declarations
are still visible through ``iter_required_providers`` for callers that
want to notice conflicts.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator

from tfguard.adapters.base import Attribute, Block, Document

logger = logging.getLogger(__name__)

# The external dependency whose major version gates module compatibility
EXTERNAL_PROVIDER = "aws"


@dataclass(frozen=True)
class ProviderRequirement:
    """One ``name = { source = ..., version = ... }`` entry."""

    name: str
    attribute: Attribute
    filename: str
    version: str | None     # None when absent, null, or not a literal string


def iter_block_requirements(filename: str, terraform: Block) -> Iterator[ProviderRequirement]:
    """Yield the required_providers entries of one ``terraform`` block.

    Entries whose expression cannot be evaluated, or is not an object,
    are skipped.
    """
    for required in terraform.blocks_of_type("required_providers"):
        for name, attr in required.attributes.items():
            value = attr.expr.evaluate()
            if value is None or value.kind != "object":
                logger.debug(
                    "Skipping required_providers entry %r in %s: not a literal object",
                    name, filename,
                )
                continue
            version = value.get_attr("version")
            yield ProviderRequirement(
                name=name,
                attribute=attr,
                filename=filename,
                version=version.as_string() if version is not None else None,
            )


def iter_required_providers(documents: Iterable[Document]) -> Iterator[ProviderRequirement]:
    """Yield every required_providers entry across all documents."""
    for document in documents:
        for terraform in document.blocks_of_type("terraform"):
            yield from iter_block_requirements(document.filename, terraform)


def find_provider_versions(
    documents: Iterable[Document],
    provider: str = EXTERNAL_PROVIDER,
) -> list[ProviderRequirement]:
    """Every declaration of ``provider`` that carries a version string."""
    return [
        req for req in iter_required_providers(documents)
        if req.name == provider and req.version is not None
    ]


def find_external_version(
    documents: Iterable[Document],
    provider: str = EXTERNAL_PROVIDER,
) -> str | None:
    """The first declared version constraint for ``provider``, or None."""
    for req in iter_required_providers(documents):
        if req.name == provider and req.version is not None:
            logger.debug("Found %s provider version %r in %s", provider, req.version, req.filename)
            return req.version
    return None
