"""Discovery and resolution of OpenAPI spec files."""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Iterable, Iterator, List, Sequence, Tuple

_LOG = logging.getLogger(__name__)

SPEC_PATTERNS = (
    re.compile(r"\.openapi\.ya?ml\Z"),
    re.compile(r"\.openapi\.json\Z"),
    re.compile(r"^openapi\.ya?ml\Z"),
    re.compile(r"^openapi\.json\Z"),
)


def is_spec_file(filename: str) -> bool:
    return any(pattern.search(filename) for pattern in SPEC_PATTERNS)


class SpecLocator:
    """Find OpenAPI documents below a root directory or resolve explicit paths."""

    def __init__(
        self,
        root: str | os.PathLike[str] = ".",
        *,
        max_depth: int = 3,
        excluded_dirs: Iterable[str] = ("node_modules",),
    ) -> None:
        self.root = Path(root).resolve()
        self.max_depth = max_depth
        self.excluded_dirs = frozenset(excluded_dirs)

    def locate(self, explicit_paths: Sequence[str | os.PathLike[str]] | None = None) -> List[Path]:
        """Return explicit paths resolved against the root, or discovered specs."""

        if explicit_paths:
            # existence is checked by the linter, not here
            return [(self.root / Path(path)).resolve() for path in explicit_paths]

        return self._discover()

    # Discovery --------------------------------------------------------------------
    def _discover(self) -> List[Path]:
        found: List[Path] = []
        stack: List[Tuple[Iterator[Path], int]] = [
            (self._entries(self.root, self.max_depth), self.max_depth)
        ]

        while stack:
            entries, depth = stack[-1]
            entry = next(entries, None)
            if entry is None:
                stack.pop()
                continue

            if self._is_skipped(entry.name):
                continue

            try:
                is_file = entry.is_file()
                is_dir = not is_file and entry.is_dir()
            except OSError as exc:
                _LOG.debug("Skipping unreadable entry %s: %s", entry, exc)
                continue

            if is_file and is_spec_file(entry.name):
                found.append(entry)
            elif is_dir:
                stack.append((self._entries(entry, depth - 1), depth - 1))

        return found

    def _entries(self, directory: Path, depth: int) -> Iterator[Path]:
        if depth <= 0:
            return iter(())
        try:
            return iter(list(directory.iterdir()))
        except OSError as exc:
            _LOG.debug("Skipping unreadable directory %s: %s", directory, exc)
            return iter(())

    def _is_skipped(self, name: str) -> bool:
        return name.startswith(".") or name in self.excluded_dirs


__all__ = ["SPEC_PATTERNS", "SpecLocator", "is_spec_file"]
