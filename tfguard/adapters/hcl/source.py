"""
Document sources backed by the HCL parser.

``DirectorySource`` reads ``*.tf`` files from disk the way Terraform
loads a module: the top-level directory only, unless asked to recurse.
``InMemorySource`` parses a ``{filename: content}`` mapping and is what
tests and embedding callers use.

Both return documents sorted by filename so every check sees the same
order.
"""

from __future__ import annotations

import logging
from pathlib import Path

from tfguard.adapters.base import Document, DocumentSource
from tfguard.adapters.hcl.errors import SourceError
from tfguard.adapters.hcl.parser import parse

logger = logging.getLogger(__name__)

_SKIP_DIRS = frozenset({
    ".git", ".venv", "venv", "node_modules", "__pycache__",
    ".terraform",  # provider and module cache
})

TF_SUFFIX = ".tf"


class DirectorySource(DocumentSource):
    """Parse every ``.tf`` file under a directory.

    ``split_by_directory`` breaks a recursive source into one source per
    Terraform module directory. Each split source keeps display names
    relative to the original root.
    """

    def __init__(
        self,
        root: Path,
        recursive: bool = False,
        exclude: list[str] | None = None,
        files: list[Path] | None = None,
        label: str | None = None,
    ):
        self._root = Path(root)
        self._recursive = recursive
        self._skip = _SKIP_DIRS | frozenset(exclude or [])
        self._files = list(files) if files is not None else None
        self._label = label

    @property
    def name(self) -> str:
        return self._label or str(self._root)

    @property
    def root(self) -> Path:
        return self._root

    def discover(self) -> list[Path]:
        """Find the files this source will parse, sorted by relative path.

        Raises:
            SourceError: If the root is not a directory.
        """
        if self._files is not None:
            return list(self._files)
        if self._root.is_file():
            return [self._root] if self._root.suffix == TF_SUFFIX else []
        if not self._root.is_dir():
            raise SourceError(f"Not a directory: {self._root}")

        pattern = f"**/*{TF_SUFFIX}" if self._recursive else f"*{TF_SUFFIX}"
        found: list[Path] = []
        for tf_file in self._root.glob(pattern):
            if not tf_file.is_file():
                continue
            rel_parts = tf_file.relative_to(self._root).parts[:-1]
            if any(part in self._skip for part in rel_parts):
                continue
            found.append(tf_file)

        found.sort(key=lambda p: p.relative_to(self._root).as_posix())
        logger.debug("Discovered %d Terraform files under %s", len(found), self._root)
        return found

    def _display_name(self, path: Path) -> str:
        if self._root.is_file():
            return path.name
        return path.relative_to(self._root).as_posix()

    def load(self) -> list[Document]:
        """Read and parse every discovered file.

        Raises:
            SourceError: If a file cannot be read.
            HclSyntaxError: If a file is not valid HCL.
        """
        documents: list[Document] = []
        for path in self.discover():
            try:
                content = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                raise SourceError(f"Cannot read {path}: {e}") from e
            documents.append(parse(content, self._display_name(path)))
        return documents

    def split_by_directory(self) -> list[DirectorySource]:
        """One source per directory holding ``.tf`` files, root first.

        Terraform treats every directory as its own module, so a check
        pass runs once per directory rather than over the merged set.

        Raises:
            SourceError: If the root is not a directory.
        """
        if self._root.is_file():
            return [self]

        groups: dict[tuple[str, ...], list[Path]] = {}
        for path in self.discover():
            rel_dir = path.parent.relative_to(self._root)
            groups.setdefault(rel_dir.parts, []).append(path)

        sources = []
        for parts in sorted(groups):
            label = str(self._root.joinpath(*parts))
            sources.append(
                DirectorySource(self._root, files=groups[parts], label=label)
            )
        logger.debug("Split %s into %d module directories", self._root, len(sources))
        return sources


class InMemorySource(DocumentSource):
    """Parse documents from a ``{filename: content}`` mapping."""

    def __init__(self, files: dict[str, str]):
        self._files = dict(files)

    @property
    def name(self) -> str:
        return "memory"

    def load(self) -> list[Document]:
        return [parse(self._files[name], name) for name in sorted(self._files)]
