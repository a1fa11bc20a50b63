from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from hamfest.enums import Currency, ItemCondition, ListingCategory

MAX_RATING_COMMENT_LENGTH = 500


class SellerSummary(BaseModel):
    """Seller profile fields denormalized onto each listing."""

    callsign: str
    display_name: str | None = None
    location_city: str | None = None
    location_country: str | None = None


class Listing(BaseModel):
    """
    A single for-sale equipment post, as returned by the store.

    Listings are read-only to the discovery layer. Category and condition are always members of
    their enumerations and price can never be negative; pydantic rejects anything else at the
    store boundary.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str | None = None
    category: ListingCategory
    condition: ItemCondition
    price: float = Field(ge=0)
    currency: Currency | None = None
    manufacturer: str | None = None
    model: str | None = None
    images: tuple[str, ...] = ()
    created_at: datetime | None = None
    seller: SellerSummary | None = None


class Rating(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    stars: int = Field(ge=1, le=5)
    comment: str | None = None
    rater_id: str
    subject_id: str
    listing_id: str
    created_at: datetime | None = None
    response: str | None = None
    response_at: datetime | None = None


class ListingsPage(BaseModel):
    """One page of listings plus the total number of listings matching the query."""

    items: list[Listing]
    total: int = 0


class RatingsPage(BaseModel):
    """One page of ratings plus the total number of ratings matching the query."""

    items: list[Rating]
    total: int = 0
