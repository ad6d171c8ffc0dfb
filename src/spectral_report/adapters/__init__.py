"""Adapter layer package for spec discovery and linter integration."""

from .linter import (
    LinterAdapter,
    LintFindings,
    LintInvocationError,
    NoOutput,
    SpectralAdapter,
    ToolError,
)
from .spec_locator import SpecLocator

__all__ = [
    "LinterAdapter",
    "LintFindings",
    "LintInvocationError",
    "NoOutput",
    "SpecLocator",
    "SpectralAdapter",
    "ToolError",
]
