"""Utilities for loading and merging report settings files."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, List, Mapping, Sequence

import yaml

DEFAULT_SPECTRAL_BIN = "spectral"
DEFAULT_MAX_DEPTH = 3
DEFAULT_EXCLUDED_DIRS = ("node_modules",)
DEFAULT_LOCATION_LIMIT = 5
DEFAULT_TIMEOUT = 120.0


class SettingsError(ValueError):
    """Raised when settings files cannot be loaded or contain invalid values."""


@dataclass(frozen=True, slots=True)
class ReportSettings:
    """Tunables for discovery, linter invocation and aggregation."""

    spectral_bin: str = DEFAULT_SPECTRAL_BIN
    ruleset: Path | None = None
    max_depth: int = DEFAULT_MAX_DEPTH
    excluded_dirs: tuple[str, ...] = DEFAULT_EXCLUDED_DIRS
    location_limit: int = DEFAULT_LOCATION_LIMIT
    timeout: float | None = DEFAULT_TIMEOUT
    jobs: int = 1

    def with_overrides(self, **overrides: Any) -> "ReportSettings":
        """Return a copy with every non-``None`` override applied."""

        changes = {key: value for key, value in overrides.items() if value is not None}
        if not changes:
            return self
        return _validated(replace(self, **changes))


class SettingsLoader:
    """Merge settings files in order; keys in later files win."""

    _KNOWN_KEYS = {
        "spectral_bin",
        "ruleset",
        "max_depth",
        "excluded_dirs",
        "location_limit",
        "timeout",
        "jobs",
    }

    def __init__(self, base: ReportSettings | None = None) -> None:
        self._base = base or ReportSettings()

    # ------------------------------------------------------------------
    def load(self, paths: Sequence[Path | str] | None = None) -> ReportSettings:
        """Return settings produced by layering ``paths`` over the defaults."""

        merged: Dict[str, Any] = {}
        for path in [Path(item) for item in paths or []]:
            data = self._load_file(path)
            merged.update(
                {key: value for key, value in data.items() if key in self._KNOWN_KEYS}
            )

        if not merged:
            return self._base

        try:
            changes = self._coerce(merged)
        except (TypeError, ValueError) as exc:
            raise SettingsError(f"Invalid settings value: {exc}") from exc
        return _validated(replace(self._base, **changes))

    # ------------------------------------------------------------------
    def _load_file(self, path: Path) -> Dict[str, Any]:
        if not path.exists():
            raise SettingsError(f"Settings file not found: {path}")

        try:
            content = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise SettingsError(f"Failed to read settings file {path}") from exc

        try:
            data = yaml.safe_load(content) or {}
        except yaml.YAMLError as exc:
            raise SettingsError(f"Invalid YAML in settings file {path}") from exc

        if not isinstance(data, Mapping):
            raise SettingsError(f"Settings file must be a mapping: {path}")

        # ruleset paths are relative to the file that names them
        if isinstance(data.get("ruleset"), str):
            ruleset = Path(data["ruleset"])
            data = dict(data)
            data["ruleset"] = ruleset if ruleset.is_absolute() else path.parent / ruleset

        return dict(data)

    def _coerce(self, raw: Mapping[str, Any]) -> Dict[str, Any]:
        changes: Dict[str, Any] = {}
        for key, value in raw.items():
            if key == "spectral_bin":
                if not isinstance(value, str) or not value.strip():
                    raise ValueError("spectral_bin must be a non-empty string")
                changes[key] = value.strip()
            elif key == "ruleset":
                changes[key] = Path(value) if value else None
            elif key in ("max_depth", "location_limit", "jobs"):
                if isinstance(value, bool):
                    raise ValueError(f"{key} must be an integer")
                changes[key] = int(value)
            elif key == "timeout":
                changes[key] = float(value) if value is not None else None
            elif key == "excluded_dirs":
                changes[key] = tuple(_ensure_string_list(value))
        return changes


def _ensure_string_list(value: object) -> List[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError("excluded_dirs must be a list of strings")
    return [str(item) for item in value]


def _validated(settings: ReportSettings) -> ReportSettings:
    if not settings.spectral_bin:
        raise SettingsError("spectral_bin must not be empty")
    if settings.max_depth < 0:
        raise SettingsError("max_depth must not be negative")
    if settings.location_limit < 0:
        raise SettingsError("location_limit must not be negative")
    if settings.jobs < 1:
        raise SettingsError("jobs must be at least 1")
    if settings.timeout is not None and settings.timeout <= 0:
        raise SettingsError("timeout must be positive")
    return settings


__all__ = [
    "DEFAULT_EXCLUDED_DIRS",
    "DEFAULT_LOCATION_LIMIT",
    "DEFAULT_MAX_DEPTH",
    "DEFAULT_SPECTRAL_BIN",
    "DEFAULT_TIMEOUT",
    "ReportSettings",
    "SettingsError",
    "SettingsLoader",
]
