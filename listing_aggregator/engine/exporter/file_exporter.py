"""File exporters for JSON and CSV snapshots."""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any, Sequence

from ...models import NormalizedRecord
from .base import BaseExporter


class JsonExporter(BaseExporter):
    """Write the snapshot as one pretty-printed JSON array."""

    format = "json"
    extension = "json"

    def __init__(self, indent: int = 2) -> None:
        self.indent = indent

    def write(self, records: Sequence[NormalizedRecord], destination: Path) -> bool:
        destination.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps(list(records), indent=self.indent, ensure_ascii=False)
        destination.write_text(payload, encoding="utf-8")
        return True


class CsvExporter(BaseExporter):
    """Write the snapshot as a fully quoted CSV table.

    The header is the union of all field names in first-seen order. List
    values are joined into one cell. An empty snapshot writes nothing and
    leaves ``destination`` untouched.
    """

    format = "csv"
    extension = "csv"

    def __init__(self, list_delimiter: str = ";") -> None:
        self.list_delimiter = list_delimiter

    def write(self, records: Sequence[NormalizedRecord], destination: Path) -> bool:
        if not records:
            return False
        headers = self.headers(records)
        destination.parent.mkdir(parents=True, exist_ok=True)
        with destination.open("w", encoding="utf-8", newline="") as stream:
            writer = csv.writer(stream, quoting=csv.QUOTE_ALL, lineterminator="\n")
            writer.writerow(headers)
            for record in records:
                writer.writerow([self._cell(record.get(header)) for header in headers])
        return True

    @staticmethod
    def headers(records: Sequence[NormalizedRecord]) -> list[str]:
        seen: dict[str, None] = {}
        for record in records:
            for key in record:
                seen.setdefault(key, None)
        return list(seen)

    def _cell(self, value: Any) -> str:
        if value is None:
            return ""
        if isinstance(value, (list, tuple, set)):
            return self.list_delimiter.join("" if item is None else str(item) for item in value)
        return str(value)


__all__ = ["CsvExporter", "JsonExporter"]
