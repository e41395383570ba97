"""Engine components: normalise → store → dedup → query/export."""

from .dedup import DeduplicationResult, deduplicate, identity_key
from .normalizer import normalize_listing, parse_number
from .query import ListingQuery, filter_by_location, filter_by_price, filter_by_property_type
from .store import AggregateStore

__all__ = [
    "AggregateStore",
    "DeduplicationResult",
    "ListingQuery",
    "deduplicate",
    "filter_by_location",
    "filter_by_price",
    "filter_by_property_type",
    "identity_key",
    "normalize_listing",
    "parse_number",
]
