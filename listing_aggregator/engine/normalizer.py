"""Field normalisation for raw listing records."""

from __future__ import annotations

import re
from typing import Any, Iterable

from ..models import (
    IMAGES_FIELD,
    NUMERIC_FIELDS,
    SOURCE_FIELD,
    TEXT_FIELDS,
    NormalizedRecord,
    RawRecord,
)

_NON_DIGIT = re.compile(r"[^0-9]")


def parse_number(text: Any) -> int | None:
    """Return the integer formed by the ASCII digits of ``text``.

    Everything else is discarded, so signs, decimal points, ranges and unit
    text collapse into one number: ``"฿3,500,000/month"`` gives ``3500000``
    and ``"2.5"`` gives ``25``. ``None`` is the absent marker.
    """

    if text is None:
        return None
    digits = _NON_DIGIT.sub("", text if isinstance(text, str) else str(text))
    if not digits:
        return None
    try:
        return int(digits)
    except ValueError:
        # digit strings past the interpreter's int conversion limit
        return None


def unique_images(images: Any) -> list[str]:
    """Drop blank entries and collapse exact duplicates."""

    if images is None:
        return []
    if isinstance(images, str):
        images = [images]
    seen: dict[str, None] = {}
    for image in _iter_images(images):
        if not isinstance(image, str) or not image.strip():
            continue
        seen.setdefault(image, None)
    return list(seen)


def _iter_images(images: Any) -> Iterable[Any]:
    try:
        return iter(images)
    except TypeError:
        return ()


def normalize_listing(raw: RawRecord, source: str) -> NormalizedRecord:
    """Build a normalised record from ``raw`` tagged with ``source``."""

    record: NormalizedRecord = dict(raw)
    record[SOURCE_FIELD] = source
    for field in TEXT_FIELDS:
        if record.get(field) is None:
            record[field] = ""
    for derived, text_field in NUMERIC_FIELDS.items():
        record[derived] = parse_number(record[text_field])
    record[IMAGES_FIELD] = unique_images(record.get(IMAGES_FIELD))
    return record


__all__ = ["normalize_listing", "parse_number", "unique_images"]
