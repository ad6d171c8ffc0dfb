"""Command-line interface package for the report tooling."""

from .app import NO_SPECS_MESSAGE, build_parser, emit, main, run

__all__ = [
    "NO_SPECS_MESSAGE",
    "build_parser",
    "emit",
    "main",
    "run",
]
