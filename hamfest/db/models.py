from __future__ import annotations

import uuid
from datetime import datetime

import sqlalchemy
from sqlalchemy import CheckConstraint, DateTime, ForeignKey, String, UniqueConstraint, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from hamfest import models
from hamfest.enums import Currency, ItemCondition, ListingCategory, ListingStatus


def _new_id() -> str:
    return str(uuid.uuid4())


class Base(DeclarativeBase):
    pass


class Profile(Base):
    """
    A Profile is the public face of a marketplace user.

    Profiles are keyed by the user id issued by the authentication service. The callsign is the
    user's amateur-radio callsign and doubles as a human-readable profile identifier.
    """

    __tablename__ = "profiles"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    callsign: Mapped[str] = mapped_column(unique=True, index=True)
    display_name: Mapped[str | None]
    location_city: Mapped[str | None]
    location_country: Mapped[str | None]

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=func.now(), onupdate=func.now()
    )

    def to_seller_summary(self) -> models.SellerSummary:
        return models.SellerSummary(
            callsign=self.callsign,
            display_name=self.display_name,
            location_city=self.location_city,
            location_country=self.location_country,
        )


class Listing(Base):
    """
    A Listing is a single piece of equipment offered for sale.

    Only listings with status ``active`` are shown when browsing. Once the seller marks a listing
    as sold to a buyer, the buyer and seller can rate each other for it.
    """

    __tablename__ = "listings"
    __table_args__ = (CheckConstraint("price >= 0", name="listings_price_non_negative"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    user_id: Mapped[str] = mapped_column(ForeignKey("profiles.id"), index=True)

    title: Mapped[str]
    description: Mapped[str | None]
    # note: non-native enums, stored as plain strings
    category: Mapped[ListingCategory] = mapped_column(
        sqlalchemy.Enum(ListingCategory, native_enum=False), index=True
    )
    condition: Mapped[ItemCondition] = mapped_column(
        sqlalchemy.Enum(ItemCondition, native_enum=False)
    )
    status: Mapped[ListingStatus] = mapped_column(
        sqlalchemy.Enum(ListingStatus, native_enum=False), default=ListingStatus.ACTIVE, index=True
    )
    price: Mapped[float]
    currency: Mapped[Currency | None] = mapped_column(
        sqlalchemy.Enum(Currency, native_enum=False)
    )
    manufacturer: Mapped[str | None]
    model: Mapped[str | None]
    images: Mapped[list[str]] = mapped_column(sqlalchemy.JSON, default=list)
    views: Mapped[int] = mapped_column(default=0)
    sold_to: Mapped[str | None] = mapped_column(ForeignKey("profiles.id"))

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=func.now(), index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=func.now(), onupdate=func.now()
    )

    seller: Mapped[Profile] = relationship("Profile", foreign_keys=[user_id], lazy="joined")

    def to_model(self) -> models.Listing:
        return models.Listing(
            id=self.id,
            title=self.title,
            description=self.description,
            category=self.category,
            condition=self.condition,
            price=self.price,
            currency=self.currency,
            manufacturer=self.manufacturer,
            model=self.model,
            images=tuple(self.images or ()),
            created_at=self.created_at,
            seller=self.seller.to_seller_summary() if self.seller is not None else None,
        )


class Rating(Base):
    """
    A Rating is a 1-5 star review one user leaves for another after a sale.

    A rater can rate each listing at most once; the unique constraint on (listing_id,
    rater_user_id) is the authoritative guard against duplicate ratings. The rated user may attach
    a single public response.
    """

    __tablename__ = "ratings"
    __table_args__ = (
        UniqueConstraint("listing_id", "rater_user_id", name="ratings_listing_rater_unique"),
        CheckConstraint("rating >= 1 AND rating <= 5", name="ratings_rating_range"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    listing_id: Mapped[str] = mapped_column(ForeignKey("listings.id"), index=True)
    rater_user_id: Mapped[str] = mapped_column(ForeignKey("profiles.id"), index=True)
    rated_user_id: Mapped[str] = mapped_column(ForeignKey("profiles.id"), index=True)

    rating: Mapped[int]
    comment: Mapped[str | None]
    response: Mapped[str | None]
    response_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=func.now(), index=True
    )

    def to_model(self) -> models.Rating:
        return models.Rating(
            id=self.id,
            stars=self.rating,
            comment=self.comment,
            rater_id=self.rater_user_id,
            subject_id=self.rated_user_id,
            listing_id=self.listing_id,
            created_at=self.created_at,
            response=self.response,
            response_at=self.response_at,
        )
