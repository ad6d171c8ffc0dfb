"""Rule-grouped summaries of Spectral OpenAPI lint results."""

__version__ = "0.1.0"
