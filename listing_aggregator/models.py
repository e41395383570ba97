"""Record shapes shared by the aggregation pipeline."""

from __future__ import annotations

from typing import Any, Callable, Iterable, Mapping

RawRecord = Mapping[str, Any]
NormalizedRecord = dict[str, Any]
Extractor = Callable[[str], Iterable[RawRecord]]

TEXT_FIELDS = (
    "title",
    "price",
    "location",
    "propertyType",
    "size",
    "bedrooms",
    "bathrooms",
    "description",
    "agentInfo",
    "url",
)
IMAGES_FIELD = "images"
SOURCE_FIELD = "source"

# derived numeric field -> display text field it is parsed from
NUMERIC_FIELDS = {
    "priceValue": "price",
    "sizeSqm": "size",
    "bedroomsValue": "bedrooms",
    "bathroomsValue": "bathrooms",
}

__all__ = [
    "Extractor",
    "IMAGES_FIELD",
    "NUMERIC_FIELDS",
    "NormalizedRecord",
    "RawRecord",
    "SOURCE_FIELD",
    "TEXT_FIELDS",
]
