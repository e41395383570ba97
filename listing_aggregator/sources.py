"""Readers for raw listing records harvested ahead of time."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .models import RawRecord


def read_records_file(locator: str) -> list[RawRecord]:
    """Read raw records from a JSON file.

    Accepts either a top-level array or an object with a ``listings`` array.
    Raises ``ValueError`` when the payload has any other shape.
    """

    path = Path(locator)
    payload: Any = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(payload, dict):
        payload = payload.get("listings")
    if not isinstance(payload, list):
        raise ValueError(f"{path} must contain a JSON array of listings")
    records = []
    for index, item in enumerate(payload):
        if not isinstance(item, dict):
            raise ValueError(f"{path}: listing #{index} is not an object")
        records.append(item)
    return records


def parse_source_spec(spec: str) -> tuple[str, Path]:
    """Split a ``NAME=PATH`` command line argument."""

    name, sep, path = spec.partition("=")
    name, path = name.strip(), path.strip()
    if not sep or not name or not path:
        raise ValueError(f"Expected NAME=PATH, got {spec!r}")
    return name, Path(path)


__all__ = ["parse_source_spec", "read_records_file"]
