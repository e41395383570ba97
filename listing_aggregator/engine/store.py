"""In-memory accumulation of normalised listing records."""

from __future__ import annotations

from typing import Iterable, Iterator

from ..models import NormalizedRecord
from .dedup import DeduplicationResult, deduplicate


class AggregateStore:
    """Ordered, versioned collection owned by a single pipeline.

    ``append`` only grows the store and ``compact`` only removes duplicate
    records, so every mutation goes through one of the two. ``version`` is
    bumped each time the contents change. There is no locking: callers must
    serialise mutations.
    """

    def __init__(self) -> None:
        self._records: list[NormalizedRecord] = []
        self._version = 0

    @property
    def version(self) -> int:
        return self._version

    def append(self, records: Iterable[NormalizedRecord]) -> int:
        batch = list(records)
        if batch:
            self._records.extend(batch)
            self._version += 1
        return len(batch)

    def compact(self) -> DeduplicationResult:
        result = deduplicate(self._records)
        if result.changed:
            # slice assignment keeps the same list object
            self._records[:] = result.kept
            self._version += 1
        return result

    def snapshot(self) -> list[NormalizedRecord]:
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[NormalizedRecord]:
        return iter(list(self._records))

    def __bool__(self) -> bool:
        return bool(self._records)


__all__ = ["AggregateStore"]
