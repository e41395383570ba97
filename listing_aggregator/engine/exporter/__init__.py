"""Exporter SPI and implementations."""

from __future__ import annotations

from ...errors import UnsupportedFormatError
from .base import BaseExporter
from .file_exporter import CsvExporter, JsonExporter

EXPORT_FORMATS = ("json", "csv")


def build_exporter(fmt: str, *, json_indent: int = 2, list_delimiter: str = ";") -> BaseExporter:
    """Return the exporter registered for ``fmt``."""

    key = fmt.strip().lower()
    if key == "json":
        return JsonExporter(indent=json_indent)
    if key == "csv":
        return CsvExporter(list_delimiter=list_delimiter)
    raise UnsupportedFormatError(fmt)


__all__ = ["BaseExporter", "CsvExporter", "EXPORT_FORMATS", "JsonExporter", "build_exporter"]
