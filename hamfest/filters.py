import math
import re
from typing import Any, Iterable

from pydantic import BaseModel, ConfigDict

from hamfest.enums import ItemCondition, ListingCategory
from hamfest.models import Listing

_PRICE_PATTERN = re.compile(r"\s*(?P<value>-?\d+(\.\d+)?|-?\.\d+)\s*")


class FilterState(BaseModel):
    """
    The facets a user can narrow a page of listings by.

    Every field defaults to its identity value, so ``FilterState()`` matches every listing. All
    active facets are ANDed together.
    """

    model_config = ConfigDict(frozen=True)

    query: str = ""
    category: ListingCategory | None = None
    conditions: frozenset[ItemCondition] = frozenset()
    min_price: float | None = None
    max_price: float | None = None
    country: str = ""
    city: str = ""

    @property
    def is_active(self) -> bool:
        return self != FilterState()

    @property
    def server_predicate(self) -> str | None:
        """
        The part of this filter the store can evaluate itself (a free-text substring match).

        The remaining facets are evaluated in memory over the page the store returns.
        """
        return self.query or None

    def matches(self, listing: Listing) -> bool:
        return (
            _matches_query(listing, self.query)
            and _matches_category(listing, self.category)
            and _matches_conditions(listing, self.conditions)
            and _matches_price(listing, self.min_price, self.max_price)
            and _matches_location(
                listing.seller.location_country if listing.seller else None, self.country
            )
            and _matches_location(
                listing.seller.location_city if listing.seller else None, self.city
            )
        )

    def __call__(self, listing: Listing) -> bool:
        return self.matches(listing)


def matches(listing: Listing, filter_state: FilterState) -> bool:
    return filter_state.matches(listing)


def apply_filters(listings: Iterable[Listing], filter_state: FilterState) -> list[Listing]:
    return [listing for listing in listings if filter_state.matches(listing)]


def parse_price_bound(raw: Any) -> float | None:
    """
    Parse a user-entered price bound.

    Anything that is not a finite number (empty input, free text, NaN) is treated as an unset
    bound rather than an error.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, str):
        match = _PRICE_PATTERN.fullmatch(raw)
        if match is None:
            return None
        raw = match.group("value")
    elif not isinstance(raw, (int, float)):
        return None

    try:
        value = float(raw)
    except OverflowError:
        return None

    return value if math.isfinite(value) else None


def _contains(haystack: str | None, needle: str) -> bool:
    return needle.lower() in (haystack or "").lower()


def _matches_query(listing: Listing, query: str) -> bool:
    if not query:
        return True

    return any(
        _contains(field, query)
        for field in (listing.title, listing.description, listing.manufacturer, listing.model)
    )


def _matches_category(listing: Listing, category: ListingCategory | None) -> bool:
    return category is None or listing.category == category


def _matches_conditions(listing: Listing, conditions: frozenset[ItemCondition]) -> bool:
    return not conditions or listing.condition in conditions


def _matches_price(listing: Listing, min_price: float | None, max_price: float | None) -> bool:
    if min_price is not None and listing.price < min_price:
        return False
    if max_price is not None and listing.price > max_price:
        return False
    return True


def _matches_location(value: str | None, expected: str) -> bool:
    if not expected:
        return True

    # listings without location data never match a location filter
    return _contains(value, expected)
