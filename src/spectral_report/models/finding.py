"""Finding models shared across the linter adapter and aggregation layers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Tuple


class FindingSeverity(IntEnum):
    """Severity levels reported by Spectral, ordered from most to least severe."""

    ERROR = 0
    WARNING = 1
    INFO = 2
    HINT = 3

    @property
    def label(self) -> str:
        return self.name.lower()


PathSegment = str | int


@dataclass(frozen=True, slots=True)
class Finding:
    """A single issue reported by the external linter."""

    rule: str
    severity: FindingSeverity
    path: Tuple[PathSegment, ...] = ()
    message: str = ""
    line: int | None = None