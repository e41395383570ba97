"""Read-only filters over normalised listing records."""

from __future__ import annotations

from typing import Iterable

from ..models import NormalizedRecord


def _contains(value: object, needle: str) -> bool:
    if not needle:
        return True
    haystack = value if isinstance(value, str) else ("" if value is None else str(value))
    return needle.casefold() in haystack.casefold()


def filter_by_price(
    records: Iterable[NormalizedRecord], min_price: int, max_price: int
) -> list[NormalizedRecord]:
    """Records whose parsed price lies in ``[min_price, max_price]``.

    Records without a parsed price never match, even when the display text
    is non-empty.
    """

    return [
        record
        for record in records
        if record.get("priceValue") is not None
        and min_price <= record["priceValue"] <= max_price
    ]


def filter_by_location(records: Iterable[NormalizedRecord], location: str) -> list[NormalizedRecord]:
    return [record for record in records if _contains(record.get("location"), location)]


def filter_by_property_type(
    records: Iterable[NormalizedRecord], property_type: str
) -> list[NormalizedRecord]:
    return [record for record in records if _contains(record.get("propertyType"), property_type)]


class ListingQuery:
    """Chain filters over a fixed snapshot of records."""

    def __init__(self, records: Iterable[NormalizedRecord]) -> None:
        self._records = list(records)

    def price_between(self, min_price: int, max_price: int) -> "ListingQuery":
        return ListingQuery(filter_by_price(self._records, min_price, max_price))

    def in_location(self, location: str) -> "ListingQuery":
        return ListingQuery(filter_by_location(self._records, location))

    def of_type(self, property_type: str) -> "ListingQuery":
        return ListingQuery(filter_by_property_type(self._records, property_type))

    def all(self) -> list[NormalizedRecord]:
        return list(self._records)

    def count(self) -> int:
        return len(self._records)


__all__ = ["ListingQuery", "filter_by_location", "filter_by_price", "filter_by_property_type"]
