from __future__ import annotations

import pytest

from listing_aggregator.engine import (
    ListingQuery,
    filter_by_location,
    filter_by_price,
    filter_by_property_type,
    normalize_listing,
)


@pytest.fixture
def records(raw_listing):
    return [
        normalize_listing(raw_listing(url="u1", price="฿1,000,000", location="Sukhumvit, Bangkok", propertyType="Condo"), "A"),
        normalize_listing(raw_listing(url="u2", price="฿2,000,000", location="Nimman, Chiang Mai", propertyType="House"), "A"),
        normalize_listing(raw_listing(url="u3", price="฿2,000,001", location="Patong, PHUKET", propertyType="Pool Villa"), "B"),
        normalize_listing(raw_listing(url="u4", price="Price on request", location="Silom, Bangkok", propertyType="condominium"), "B"),
    ]


def test_filter_by_price_is_inclusive(records) -> None:
    matched = filter_by_price(records, 1000000, 2000000)
    assert [record["url"] for record in matched] == ["u1", "u2"]


def test_filter_by_price_excludes_absent_values(records) -> None:
    matched = filter_by_price(records, 0, 10**12)
    assert "u4" not in [record["url"] for record in matched]
    assert records[3]["price"] == "Price on request"


def test_filter_by_location_is_case_insensitive(records) -> None:
    assert [r["url"] for r in filter_by_location(records, "bangkok")] == ["u1", "u4"]
    assert [r["url"] for r in filter_by_location(records, "Phuket")] == ["u3"]


def test_empty_substring_matches_everything(records) -> None:
    assert len(filter_by_location(records, "")) == len(records)
    assert len(filter_by_property_type(records, "")) == len(records)


def test_filter_by_property_type(records) -> None:
    assert [r["url"] for r in filter_by_property_type(records, "CONDO")] == ["u1", "u4"]


def test_filters_return_new_lists(records) -> None:
    matched = filter_by_location(records, "")
    assert matched is not records
    matched.clear()
    assert len(records) == 4


def test_listing_query_chains_filters(records) -> None:
    query = ListingQuery(records).in_location("bangkok").of_type("condo").price_between(0, 5_000_000)
    assert [r["url"] for r in query.all()] == ["u1"]
    assert query.count() == 1
