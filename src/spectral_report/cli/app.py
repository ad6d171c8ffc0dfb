"""Command-line interface implementation for the Spectral report wrapper."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Sequence, TextIO

from ..adapters import LintInvocationError
from ..config import ReportSettings, SettingsError, SettingsLoader
from ..models import LintReport
from ..service import ReportService

_LOG = logging.getLogger(__name__)

NO_SPECS_MESSAGE = "No OpenAPI spec files found. Pass a path or name files *.openapi.yaml"

EXIT_OK = 0
EXIT_LINT_ERRORS = 1
EXIT_FAILURE = 2


def build_parser() -> argparse.ArgumentParser:
    """Construct the CLI argument parser."""

    parser = argparse.ArgumentParser(
        prog="spectral-report",
        description="Lint OpenAPI specs with Spectral and print a rule-grouped JSON summary.",
    )
    parser.add_argument(
        "specs",
        nargs="*",
        help="Spec files to lint, relative to --root. Specs are discovered when omitted.",
    )
    parser.add_argument(
        "--root",
        type=Path,
        default=None,
        help="Directory used for discovery and for resolving relative spec paths.",
    )
    parser.add_argument(
        "--config",
        dest="configs",
        action="append",
        type=Path,
        default=None,
        help="YAML/JSON settings file. May be repeated; later files win.",
    )
    parser.add_argument(
        "--spectral-bin",
        default=None,
        help="Name or path of the Spectral executable.",
    )
    parser.add_argument(
        "--ruleset",
        type=Path,
        default=None,
        help="Spectral ruleset file passed through to every lint run, relative to --root.",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=None,
        help="Maximum directory depth searched during discovery.",
    )
    parser.add_argument(
        "--jobs",
        type=int,
        default=None,
        help="Number of specs linted in parallel.",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Seconds to wait for a single Spectral run before giving up.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log progress and discovery details to stderr.",
    )

    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def load_settings(args: argparse.Namespace, root: Path) -> ReportSettings:
    settings = SettingsLoader().load(args.configs)
    return settings.with_overrides(
        spectral_bin=args.spectral_bin,
        ruleset=(root / args.ruleset).resolve() if args.ruleset else None,
        max_depth=args.max_depth,
        jobs=args.jobs,
        timeout=args.timeout,
    )


def emit(report: LintReport, stream: TextIO | None = None) -> int:
    """Write ``report`` as the sole JSON document on ``stream``; return the exit code."""

    stream = stream or sys.stdout
    stream.write(json.dumps(report.to_dict(), indent=2))
    stream.write("\n")
    stream.flush()
    return EXIT_OK if report.all_pass else EXIT_LINT_ERRORS


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point used by tests and the console script."""

    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    root = args.root or Path.cwd()
    try:
        settings = load_settings(args, root)
    except SettingsError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_FAILURE

    service = ReportService(root, settings=settings)

    specs = service.locate(args.specs)
    if not specs:
        _LOG.warning(NO_SPECS_MESSAGE)
        return emit(LintReport())

    try:
        report = service.run(specs)
    except LintInvocationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_FAILURE

    return emit(report)


def run() -> None:  # pragma: no cover - thin wrapper for module execution
    """Execute the CLI and exit with the produced status code."""

    raise SystemExit(main())


if __name__ == "__main__":  # pragma: no cover - module execution guard
    run()
