"""Data models for linter findings and the aggregated lint report."""

from .finding import Finding, FindingSeverity
from .report import FileReport, LintReport, Location, RuleGroup, SeverityCounts

__all__ = [
    "FileReport",
    "Finding",
    "FindingSeverity",
    "LintReport",
    "Location",
    "RuleGroup",
    "SeverityCounts",
]
