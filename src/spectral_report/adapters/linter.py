"""Linter adapter interfaces and the Spectral CLI implementation."""

from __future__ import annotations

import json
import logging
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Mapping, Sequence

from ..models import Finding, FindingSeverity

_LOG = logging.getLogger(__name__)


class LintInvocationError(RuntimeError):
    """Raised when the linter cannot be run or its output cannot be understood."""

    def __init__(self, spec_path: Path, step: str, detail: str = "") -> None:
        self.spec_path = spec_path
        self.step = step
        message = f"Linting {spec_path} failed: {step}"
        if detail:
            message += f" ({detail})"
        super().__init__(message)


@dataclass(frozen=True, slots=True)
class LintFindings:
    findings: List[Finding]


@dataclass(frozen=True, slots=True)
class ToolError:
    reason: str


@dataclass(frozen=True, slots=True)
class NoOutput:
    reason: str


LintOutcome = LintFindings | ToolError | NoOutput


class LinterAdapter(ABC):
    """Abstract base class describing the linter contract."""

    @abstractmethod
    def lint(self, spec_path: Path) -> List[Finding]:
        """Lint a single spec file and return its findings."""


class SpectralAdapter(LinterAdapter):
    """Adapter that shells out to the ``spectral`` CLI.

    Spectral exits nonzero when it reports error-severity findings, so the exit
    status alone cannot tell a broken invocation from a failing spec. The
    captured standard output decides: a JSON array of findings is a result no
    matter how the process exited.
    """

    def __init__(
        self,
        *,
        spectral_executable: str = "spectral",
        ruleset: Path | None = None,
        timeout: float | None = 120.0,
    ) -> None:
        self.spectral_executable = spectral_executable
        self.ruleset = ruleset
        self.timeout = timeout

    # ------------------------------------------------------------------
    def lint(self, spec_path: Path) -> List[Finding]:
        command = self._build_command(spec_path)
        _LOG.debug("Running %s", " ".join(command))

        try:
            result = subprocess.run(  # noqa: S603 - deliberate invocation of external command
                command,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except FileNotFoundError as exc:
            raise LintInvocationError(
                spec_path, "executable not found", self.spectral_executable
            ) from exc
        except subprocess.TimeoutExpired as exc:
            raise LintInvocationError(
                spec_path, "timed out", f"after {self.timeout} seconds"
            ) from exc
        except OSError as exc:
            raise LintInvocationError(spec_path, "could not start linter", str(exc)) from exc

        outcome = self._classify(result.returncode, result.stdout, result.stderr)
        if isinstance(outcome, LintFindings):
            _LOG.debug(
                "%s: %d finding(s), exit code %d",
                spec_path,
                len(outcome.findings),
                result.returncode,
            )
            return outcome.findings
        if isinstance(outcome, NoOutput):
            raise LintInvocationError(spec_path, "no output", outcome.reason)
        raise LintInvocationError(spec_path, "unparseable output", outcome.reason)

    # ------------------------------------------------------------------
    def _build_command(self, spec_path: Path) -> List[str]:
        command = [
            self.spectral_executable,
            "lint",
            str(spec_path),
            "--format=json",
            "--fail-severity=error",
        ]
        if self.ruleset is not None:
            command.extend(["--ruleset", str(self.ruleset)])
        return command

    # ------------------------------------------------------------------
    def _classify(self, returncode: int, stdout: str | None, stderr: str | None) -> LintOutcome:
        if not (stdout or "").strip():
            if returncode == 0:
                return LintFindings([])
            detail = (stderr or "").strip() or f"exit code {returncode}"
            return NoOutput(detail)

        try:
            data = json.loads(stdout)
        except json.JSONDecodeError as exc:
            return ToolError(f"invalid JSON: {exc.msg}")

        if not isinstance(data, list):
            return ToolError("expected a JSON array of findings")

        try:
            return LintFindings(self._parse_findings(data))
        except (TypeError, ValueError) as exc:
            return ToolError(str(exc))

    def _parse_findings(self, records: Sequence[Any]) -> List[Finding]:
        findings: List[Finding] = []
        for record in records:
            if not isinstance(record, Mapping):
                raise ValueError("finding record is not an object")

            code = record.get("code")
            if code is None or code == "":
                raise ValueError("finding record has no rule code")

            path = record.get("path") or []
            if not isinstance(path, list):
                raise ValueError("finding path is not a list")

            findings.append(
                Finding(
                    rule=str(code),
                    severity=self._normalize_severity(record.get("severity")),
                    path=tuple(path),
                    message=str(record.get("message") or ""),
                    line=self._extract_line(record.get("range")),
                )
            )
        return findings

    # ------------------------------------------------------------------
    def _normalize_severity(self, level: object) -> FindingSeverity:
        if isinstance(level, bool) or not isinstance(level, int):
            raise ValueError(f"unsupported severity {level!r}")
        return FindingSeverity(level)

    def _extract_line(self, range_data: object) -> int | None:
        if not isinstance(range_data, Mapping):
            return None
        start = range_data.get("start")
        if not isinstance(start, Mapping):
            return None
        line = start.get("line")
        if isinstance(line, bool) or not isinstance(line, int):
            return None
        # Spectral reports zero-based lines
        return line + 1


__all__ = [
    "LintFindings",
    "LintInvocationError",
    "LintOutcome",
    "LinterAdapter",
    "NoOutput",
    "SpectralAdapter",
    "ToolError",
]
