"""Aggregated report models and their JSON wire representation."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Sequence

from .finding import FindingSeverity


@dataclass(frozen=True, slots=True)
class Location:
    """Example location of a finding, reduced for compact output."""

    path: str
    line: int | None
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {"path": self.path, "line": self.line, "message": self.message}


@dataclass(slots=True)
class RuleGroup:
    """All findings of a single rule within one spec file."""

    rule: str
    severity: FindingSeverity
    count: int = 0
    locations: list[Location] = field(default_factory=list)
    truncated_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "rule": self.rule,
            "severity": self.severity.label,
            "count": self.count,
            "locations": [location.to_dict() for location in self.locations],
        }
        if self.truncated_count > 0:
            payload["truncated"] = f"{self.truncated_count} more"
        return payload


@dataclass(frozen=True, slots=True)
class SeverityCounts:
    errors: int = 0
    warnings: int = 0
    total: int = 0

    def to_dict(self) -> dict[str, int]:
        return {"errors": self.errors, "warnings": self.warnings, "total": self.total}


@dataclass(slots=True)
class FileReport:
    """Lint outcome for a single specification file."""

    spec: Path
    counts: SeverityCounts
    rule_breakdown: list[RuleGroup] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return self.counts.errors == 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "spec": str(self.spec),
            "pass": self.passed,
            "counts": self.counts.to_dict(),
            "ruleBreakdown": [group.to_dict() for group in self.rule_breakdown],
        }


@dataclass(slots=True)
class LintReport:
    """Top-level result across every spec linted in one run."""

    results: Sequence[FileReport] = ()

    @property
    def all_pass(self) -> bool:
        return all(result.passed for result in self.results)

    def to_dict(self) -> dict[str, Any]:
        return {
            "allPass": self.all_pass,
            "results": [result.to_dict() for result in self.results],
        }
