from datetime import datetime, timezone
from functools import cmp_to_key
from typing import Iterable, Literal

from hamfest.enums import SortKey
from hamfest.models import Listing

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _timestamp(listing: Listing) -> float:
    created_at = listing.created_at
    if created_at is None:
        return EPOCH.timestamp()
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    return created_at.timestamp()


def _sign(value: float) -> Literal[-1, 0, 1]:
    if value < 0:
        return -1
    if value > 0:
        return 1
    return 0


def compare(a: Listing, b: Listing, sort_key: SortKey) -> Literal[-1, 0, 1]:
    """
    Order two listings by the given sort key.

    Listings without a creation time sort as if created at the epoch. Price comparisons have no
    secondary key; equal prices compare as equal and keep their input order under a stable sort.
    """
    if sort_key == SortKey.NEWEST:
        return _sign(_timestamp(b) - _timestamp(a))
    elif sort_key == SortKey.OLDEST:
        return _sign(_timestamp(a) - _timestamp(b))
    elif sort_key == SortKey.PRICE_LOW:
        return _sign(a.price - b.price)
    elif sort_key == SortKey.PRICE_HIGH:
        return _sign(b.price - a.price)

    raise ValueError(f"Invalid sort key: {sort_key}")


def sort_listings(listings: Iterable[Listing], sort_key: SortKey) -> list[Listing]:
    # stable, and returns a new list
    return sorted(listings, key=cmp_to_key(lambda a, b: compare(a, b, sort_key)))
