"""Orchestration layer used by the CLI to lint specs and build the report."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable, List, Sequence

from .adapters import LinterAdapter, LintInvocationError, SpecLocator, SpectralAdapter
from .aggregation import FindingAggregator
from .config import ReportSettings
from .models import FileReport, LintReport

_LOG = logging.getLogger(__name__)

LinterFactory = Callable[[ReportSettings], LinterAdapter]


def _default_linter(settings: ReportSettings) -> LinterAdapter:
    return SpectralAdapter(
        spectral_executable=settings.spectral_bin,
        ruleset=settings.ruleset,
        timeout=settings.timeout,
    )


class ReportService:
    """High level service responsible for discovery, linting and aggregation."""

    def __init__(
        self,
        root: Path,
        *,
        settings: ReportSettings | None = None,
        linter_factory: LinterFactory | None = None,
    ) -> None:
        self.root = Path(root).resolve()
        self.settings = settings or ReportSettings()
        self._linter_factory = linter_factory or _default_linter
        self._locator = SpecLocator(
            self.root,
            max_depth=self.settings.max_depth,
            excluded_dirs=self.settings.excluded_dirs,
        )
        self._aggregator = FindingAggregator(self.settings.location_limit)

    # ------------------------------------------------------------------
    def locate(self, explicit_paths: Sequence[str | Path] | None = None) -> List[Path]:
        return self._locator.locate(explicit_paths)

    # ------------------------------------------------------------------
    def run(self, specs: Sequence[Path]) -> LintReport:
        """Lint every spec and return the aggregated report in ``specs`` order.

        Any :class:`LintInvocationError` aborts the whole run; a partial
        report is never returned.
        """

        linter = self._linter_factory(self.settings)

        def lint_one(spec: Path) -> FileReport:
            _LOG.info("Linting %s", spec)
            return self._aggregator.summarize(spec, linter.lint(spec))

        if self.settings.jobs <= 1 or len(specs) <= 1:
            results = [lint_one(spec) for spec in specs]
        else:
            workers = min(self.settings.jobs, len(specs))
            with ThreadPoolExecutor(max_workers=workers) as executor:
                # map() yields in submission order
                results = list(executor.map(lint_one, specs))

        return LintReport(results=results)


__all__ = ["LintInvocationError", "ReportService"]
