"""Group raw linter findings into per-rule summaries for one spec file."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, List

from ..models import FileReport, Finding, FindingSeverity, Location, RuleGroup, SeverityCounts

LOCATION_LIMIT = 5
PATH_SEPARATOR = "."


class FindingAggregator:
    """Build :class:`FileReport` instances from a flat list of findings."""

    def __init__(self, location_limit: int = LOCATION_LIMIT) -> None:
        self.location_limit = location_limit

    def summarize(self, spec_path: Path, findings: Iterable[Finding]) -> FileReport:
        """Return the rule-grouped report for ``spec_path``."""

        findings = list(findings)
        errors = sum(1 for finding in findings if finding.severity == FindingSeverity.ERROR)
        warnings = sum(1 for finding in findings if finding.severity == FindingSeverity.WARNING)

        return FileReport(
            spec=spec_path,
            counts=SeverityCounts(errors=errors, warnings=warnings, total=len(findings)),
            rule_breakdown=self._group(findings),
        )

    # ------------------------------------------------------------------
    def _group(self, findings: List[Finding]) -> List[RuleGroup]:
        groups: Dict[str, RuleGroup] = {}
        for finding in findings:
            group = groups.get(finding.rule)
            if group is None:
                # the first finding decides the severity of the whole rule
                group = groups[finding.rule] = RuleGroup(
                    rule=finding.rule, severity=finding.severity
                )

            group.count += 1
            if len(group.locations) < self.location_limit:
                group.locations.append(self._location(finding))
            else:
                group.truncated_count += 1

        # sorted() is stable, so ties keep first-encounter order
        return sorted(groups.values(), key=lambda group: (group.severity, -group.count))

    def _location(self, finding: Finding) -> Location:
        return Location(
            path=PATH_SEPARATOR.join(str(segment) for segment in finding.path),
            line=finding.line,
            message=finding.message,
        )


def summarize(spec_path: Path, findings: Iterable[Finding]) -> FileReport:
    """Summarize ``findings`` with the default location limit."""

    return FindingAggregator().summarize(spec_path, findings)


__all__ = ["FindingAggregator", "LOCATION_LIMIT", "PATH_SEPARATOR", "summarize"]
