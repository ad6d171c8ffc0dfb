"""Tests for GitHub Actions reporting helpers."""

from __future__ import annotations

import json
from pathlib import Path

from spectral_report.cli import github_reporting
from spectral_report.cli.github_reporting import format_summary, iter_annotations


def _build_report() -> dict[str, object]:
    return {
        "allPass": False,
        "results": [
            {
                "spec": "/repo/api/quotes.openapi.yaml",
                "pass": False,
                "counts": {"errors": 2, "warnings": 1, "total": 3},
                "ruleBreakdown": [
                    {
                        "rule": "operation-operationId",
                        "severity": "error",
                        "count": 2,
                        "locations": [
                            {
                                "path": "paths./quotes.post",
                                "line": 12,
                                "message": "Operation must have \"operationId\".",
                            },
                            {"path": "paths./quotes.get", "line": None, "message": ""},
                        ],
                    },
                    {
                        "rule": "operation-tags",
                        "severity": "warning",
                        "count": 1,
                        "locations": [
                            {
                                "path": "paths./quotes.get",
                                "line": 20,
                                "message": "Operation must have non-empty \"tags\" array.",
                            }
                        ],
                    },
                ],
            },
            {
                "spec": "/repo/openapi.json",
                "pass": True,
                "counts": {"errors": 0, "warnings": 0, "total": 0},
                "ruleBreakdown": [],
            },
        ],
    }


def test_format_summary_includes_key_sections() -> None:
    """Rendered summaries should include the verdict, per-spec counts and rules."""

    summary = format_summary(_build_report(), Path("/repo"))

    assert "# OpenAPI Lint Report" in summary
    assert "**Result:** Fail" in summary
    assert "**Specs linted:** 2" in summary
    assert "| `api/quotes.openapi.yaml` | Fail | 2 | 1 | 3 |" in summary
    assert "| `openapi.json` | Pass | 0 | 0 | 0 |" in summary
    assert "- **Error** `operation-operationId` x2" in summary


def test_format_summary_without_results() -> None:
    summary = format_summary({"allPass": True, "results": []})

    assert "**Result:** Pass" in summary
    assert "No OpenAPI spec files were linted." in summary


def test_iter_annotations_maps_severity_levels() -> None:
    """Workflow commands should map severities to the correct annotation levels."""

    annotations = list(iter_annotations(_build_report(), Path("/repo")))

    assert len(annotations) == 3
    assert annotations[0].startswith(
        "::error file=api/quotes.openapi.yaml,line=12,title=operation-operationId::"
    )
    assert "Path: paths./quotes.post" in annotations[0]

    assert "line=" not in annotations[1]
    assert annotations[1].endswith("::Path: paths./quotes.get")

    assert annotations[2].startswith("::warning")
    assert "non-empty" in annotations[2]


def test_main_writes_summary_and_annotations(tmp_path, monkeypatch, capsys) -> None:
    report_path = tmp_path / "report.json"
    report_path.write_text(json.dumps(_build_report()), encoding="utf-8")
    summary_path = tmp_path / "summary" / "step.md"
    monkeypatch.delenv("GITHUB_WORKSPACE", raising=False)

    exit_code = github_reporting.main([str(report_path), "--summary-path", str(summary_path)])

    assert exit_code == 0
    assert "# OpenAPI Lint Report" in summary_path.read_text(encoding="utf-8")
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].startswith("::error file=/repo/api/quotes.openapi.yaml,")


def test_main_rejects_invalid_report(tmp_path, capsys) -> None:
    report_path = tmp_path / "report.json"
    report_path.write_text("not json", encoding="utf-8")

    exit_code = github_reporting.main([str(report_path)])

    captured = capsys.readouterr()
    assert exit_code == 2
    assert captured.out == ""
    assert captured.err.startswith("Error: Failed to parse report JSON")


def test_main_rejects_missing_report(tmp_path, capsys) -> None:
    exit_code = github_reporting.main([str(tmp_path / "missing.json")])

    assert exit_code == 2
    assert "Error:" in capsys.readouterr().err
