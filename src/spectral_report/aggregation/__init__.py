"""Aggregation of linter findings into rule-grouped file reports."""

from .finding_aggregator import LOCATION_LIMIT, FindingAggregator, summarize

__all__ = ["FindingAggregator", "LOCATION_LIMIT", "summarize"]
