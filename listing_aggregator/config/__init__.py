"""Configuration package exports."""

from .loader import ConfigLocator, ConfigRepository
from .models import AggregatorConfig, ExportConfig, SourceConfig

__all__ = [
    "AggregatorConfig",
    "ConfigLocator",
    "ConfigRepository",
    "ExportConfig",
    "SourceConfig",
]
