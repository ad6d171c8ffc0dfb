"""Settings loading for the report tooling."""

from .settings import ReportSettings, SettingsError, SettingsLoader

__all__ = [
    "ReportSettings",
    "SettingsError",
    "SettingsLoader",
]
