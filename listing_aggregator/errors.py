"""Exception hierarchy for the listing aggregator."""

from __future__ import annotations


class AggregatorError(Exception):
    """Base class for errors raised by the aggregator."""


class UnsupportedFormatError(AggregatorError, ValueError):
    """Requested export format has no exporter."""

    def __init__(self, fmt: str) -> None:
        super().__init__(f"Unsupported export format: {fmt!r}")
        self.format = fmt


class ExtractionError(AggregatorError, RuntimeError):
    """A source collaborator failed to produce its raw records."""

    def __init__(self, source: str, locator: str, reason: str = "") -> None:
        message = f"Extraction failed for {source} ({locator})"
        super().__init__(f"{message}: {reason}" if reason else message)
        self.source = source
        self.locator = locator


class ConfigError(AggregatorError, ValueError):
    """Configuration file could not be read or validated."""


__all__ = ["AggregatorError", "ConfigError", "ExtractionError", "UnsupportedFormatError"]
