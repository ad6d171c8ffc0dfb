"""Helpers for publishing lint reports to GitHub Actions surfaces."""

from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Iterable, Mapping, Sequence

ANNOTATION_LEVELS = {
    "error": "error",
    "warning": "warning",
    "info": "notice",
    "hint": "notice",
}
RULE_DISPLAY_LIMIT = 10


def _spec_display(spec: str, workspace: Path | None) -> str:
    if workspace is None:
        return spec
    try:
        return str(Path(spec).relative_to(workspace))
    except ValueError:
        return spec


def format_summary(report: Mapping[str, object], workspace: Path | None = None) -> str:
    """Render a Markdown job summary for the provided report."""

    results: Sequence[Mapping[str, object]] = report.get("results") or []
    all_pass = bool(report.get("allPass", True))

    lines: list[str] = [
        "# OpenAPI Lint Report",
        "",
        f"**Result:** {'Pass' if all_pass else 'Fail'}",
        f"**Specs linted:** {len(results)}",
    ]

    if not results:
        lines.extend(["", "No OpenAPI spec files were linted.", ""])
        return "\n".join(lines)

    lines.extend(
        [
            "",
            "| Spec | Result | Errors | Warnings | Total |",
            "| --- | --- | ---: | ---: | ---: |",
        ]
    )
    for result in results:
        counts: Mapping[str, object] = result.get("counts") or {}
        spec = _spec_display(str(result.get("spec", "")), workspace)
        verdict = "Pass" if result.get("pass") else "Fail"
        lines.append(
            f"| `{spec}` | {verdict} | {int(counts.get('errors', 0))} "
            f"| {int(counts.get('warnings', 0))} | {int(counts.get('total', 0))} |"
        )

    for result in results:
        groups: Sequence[Mapping[str, object]] = result.get("ruleBreakdown") or []
        if not groups:
            continue

        spec = _spec_display(str(result.get("spec", "")), workspace)
        lines.extend(["", f"## `{spec}`", ""])
        for group in groups[:RULE_DISPLAY_LIMIT]:
            severity = str(group.get("severity", "info"))
            lines.append(
                f"- **{severity.title()}** `{group.get('rule', '')}` x{int(group.get('count', 0))}"
            )

        remaining = len(groups) - RULE_DISPLAY_LIMIT
        if remaining > 0:
            lines.append(f"- ...and {remaining} more rules.")

    lines.append("")
    return "\n".join(lines)


def iter_annotations(
    report: Mapping[str, object], workspace: Path | None = None
) -> Iterable[str]:
    """Generate GitHub Actions workflow command annotations for listed locations."""

    for result in report.get("results") or []:
        spec = _spec_display(str(result.get("spec", "")), workspace)
        for group in result.get("ruleBreakdown") or []:
            severity = str(group.get("severity", "info")).lower()
            level = ANNOTATION_LEVELS.get(severity, "notice")
            rule = str(group.get("rule", "")).strip()

            for location in group.get("locations") or []:
                message = str(location.get("message", "")).strip()
                path = str(location.get("path", "")).strip()
                line = location.get("line")

                body_parts = [message] if message else []
                if path:
                    body_parts.append(f"Path: {path}")
                if not body_parts:
                    body_parts.append("Lint finding reported without message.")
                body = _escape_data("; ".join(body_parts))

                attributes: list[str] = []
                if spec:
                    attributes.append(f"file={_escape_property(spec)}")
                if isinstance(line, int) and not isinstance(line, bool):
                    attributes.append(f"line={line}")
                if rule:
                    attributes.append(f"title={_escape_property(rule)}")

                attribute_segment = ""
                if attributes:
                    attribute_segment = " " + ",".join(attributes)

                yield f"::{level}{attribute_segment}::{body}"


def _escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "").replace("\n", "%0A")


def _escape_property(value: str) -> str:
    return _escape_data(value).replace(":", "%3A").replace(",", "%2C")


def _load_report(path: Path) -> Mapping[str, object]:
    raw = path.read_text(encoding="utf-8-sig")
    if not raw.strip():
        return {}

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Failed to parse report JSON from '{path}': {exc.msg}.") from exc

    if not isinstance(data, Mapping):
        raise ValueError("Report JSON must be an object.")
    return data


def _write_summary(
    report: Mapping[str, object], destination: Path | None, workspace: Path | None
) -> None:
    if destination is None:
        return

    content = format_summary(report, workspace)
    destination.parent.mkdir(parents=True, exist_ok=True)
    with destination.open("a", encoding="utf-8") as handle:
        handle.write(content)


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Publish an OpenAPI lint report as GitHub job summary and annotations."
    )
    parser.add_argument("report", type=Path, help="Path to the spectral-report JSON output.")
    parser.add_argument(
        "--summary-path",
        type=Path,
        default=None,
        help="Optional explicit path for the GitHub job summary output.",
    )

    args = parser.parse_args(argv)

    summary_path = args.summary_path
    if summary_path is None:
        summary_env = os.getenv("GITHUB_STEP_SUMMARY")
        if summary_env:
            summary_path = Path(summary_env)

    workspace_env = os.getenv("GITHUB_WORKSPACE")
    workspace = Path(workspace_env) if workspace_env else None

    try:
        report = _load_report(args.report)
    except (OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    _write_summary(report, summary_path, workspace)

    for command in iter_annotations(report, workspace):
        print(command)

    return 0


def run() -> None:  # pragma: no cover - wrapper for console entry point
    raise SystemExit(main())


if __name__ == "__main__":  # pragma: no cover - module execution guard
    run()
