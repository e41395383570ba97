"""First-occurrence-wins deduplication keyed on listing identity."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Mapping

from ..models import NormalizedRecord


def identity_key(record: Mapping[str, object]) -> str:
    """Return ``url`` when present, otherwise ``title-price-location``."""

    url = record.get("url")
    if url:
        return str(url)
    title = record.get("title") or ""
    price = record.get("price") or ""
    location = record.get("location") or ""
    return f"{title}-{price}-{location}"


@dataclass
class DeduplicationResult:
    kept: list[NormalizedRecord] = field(default_factory=list)
    dropped: list[NormalizedRecord] = field(default_factory=list)

    @property
    def kept_count(self) -> int:
        return len(self.kept)

    @property
    def dropped_count(self) -> int:
        return len(self.dropped)

    @property
    def changed(self) -> bool:
        return bool(self.dropped)


def deduplicate(records: Iterable[NormalizedRecord]) -> DeduplicationResult:
    """Keep the first record seen for every identity key.

    Later duplicates are discarded as-is; nothing is merged into the kept
    record.
    """

    result = DeduplicationResult()
    seen: set[str] = set()
    for record in records:
        key = identity_key(record)
        if key in seen:
            result.dropped.append(record)
            continue
        seen.add(key)
        result.kept.append(record)
    return result


__all__ = ["DeduplicationResult", "deduplicate", "identity_key"]
