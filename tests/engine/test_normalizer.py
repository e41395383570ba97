from __future__ import annotations

import pytest

from listing_aggregator.engine.normalizer import normalize_listing, parse_number, unique_images


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("฿3,500,000", 3500000),
        ("฿3,500,000/month", 3500000),
        ("2 bed", 2),
        ("120 sq.m.", 120),
        ("2.5", 25),
        ("2-3", 23),
        ("-15", 15),
        ("007", 7),
        ("", None),
        ("N/A", None),
        (None, None),
        (42, 42),
        ("฿" + "1" * 5000, None),
    ],
)
def test_parse_number(text, expected) -> None:
    assert parse_number(text) == expected


def test_parse_number_ignores_non_ascii_digits() -> None:
    # Thai digits are not decimal digits for this parser
    assert parse_number("๓ ห้อง") is None


def test_unique_images_drops_blank_and_duplicates() -> None:
    images = ["https://a/1.jpg", "", "https://a/2.jpg", "https://a/1.jpg", "   ", None]
    result = unique_images(images)
    assert sorted(result) == ["https://a/1.jpg", "https://a/2.jpg"]


def test_unique_images_handles_missing_and_scalar() -> None:
    assert unique_images(None) == []
    assert unique_images("https://a/1.jpg") == ["https://a/1.jpg"]
    assert unique_images(12) == []


def test_normalize_attaches_source_and_preserves_fields(raw_listing) -> None:
    raw = raw_listing(extra="kept as is")
    record = normalize_listing(raw, "Hipflat")

    assert record["source"] == "Hipflat"
    for key, value in raw.items():
        if key == "images":
            continue
        assert record[key] == value
    assert record["priceValue"] == 3500000
    assert record["sizeSqm"] == 45
    assert record["bedroomsValue"] == 2
    assert record["bathroomsValue"] == 1


def test_normalize_does_not_mutate_input(raw_listing) -> None:
    raw = raw_listing(images=["x", "x"])
    normalize_listing(raw, "DDProperty")
    assert "source" not in raw
    assert raw["images"] == ["x", "x"]


def test_normalize_source_overrides_raw_source(raw_listing) -> None:
    record = normalize_listing(raw_listing(source="scraped"), "PropertyShowcase")
    assert record["source"] == "PropertyShowcase"


def test_normalize_defaults_for_empty_record() -> None:
    record = normalize_listing({}, "Hipflat")
    assert record["title"] == ""
    assert record["url"] == ""
    assert record["images"] == []
    for derived in ("priceValue", "sizeSqm", "bedroomsValue", "bathroomsValue"):
        assert record[derived] is None


def test_normalize_malformed_numbers_use_absent_marker(raw_listing) -> None:
    record = normalize_listing(raw_listing(price="Contact agent", bedrooms=None), "Hipflat")
    assert record["price"] == "Contact agent"
    assert record["priceValue"] is None
    assert record["bedrooms"] == ""
    assert record["bedroomsValue"] is None


def test_normalize_oversized_number_uses_absent_marker(raw_listing) -> None:
    record = normalize_listing(raw_listing(price="9" * 5000), "Hipflat")
    assert record["priceValue"] is None
    assert record["price"] == "9" * 5000
