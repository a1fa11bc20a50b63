from datetime import datetime

import pytest
from sqlalchemy.exc import IntegrityError

from hamfest.db import models as db_models
from hamfest.enums import ListingStatus, RatingSort, SortKey
from hamfest.exceptions import StoreError, UniqueViolationError
from hamfest.reputation import ReputationFeedController
from hamfest.store import SqlMarketplaceStore, is_unique_violation
from tests.sample_data import make_db_listing, make_db_profile, make_db_rating


def _seed(store: SqlMarketplaceStore, *objects: object) -> None:
    with store.session_factory(expire_on_commit=False) as session:
        session.add_all(objects)
        session.commit()


async def test_sql_store_query_listings__active_listings__returns_models_with_seller(
    sql_store: SqlMarketplaceStore,
) -> None:
    seller = make_db_profile(callsign="YT1XYZ", location_country="Serbia")
    active = make_db_listing(seller=seller, title="Icom IC-705")
    sold = make_db_listing(seller=seller, title="Yaesu FT-818", status=ListingStatus.SOLD)
    _seed(sql_store, active, sold)

    page = await sql_store.query_listings(ListingStatus.ACTIVE, None, SortKey.NEWEST, 0, 24)

    assert page.total == 1
    assert [listing.id for listing in page.items] == [active.id]
    assert page.items[0].seller is not None
    assert page.items[0].seller.callsign == "YT1XYZ"
    assert page.items[0].seller.location_country == "Serbia"


async def test_sql_store_mark_listing_sold__active_listing__is_no_longer_listed(
    sql_store: SqlMarketplaceStore,
) -> None:
    buyer = make_db_profile()
    listing = make_db_listing()
    _seed(sql_store, buyer, listing)

    await sql_store.mark_listing_sold(listing.id, buyer.id)
    page = await sql_store.query_listings(ListingStatus.ACTIVE, None, SortKey.NEWEST, 0, 24)

    assert page.items == []
    assert page.total == 0


async def test_sql_store_mark_listing_sold__missing_listing__raises_store_error(
    sql_store: SqlMarketplaceStore,
) -> None:
    with pytest.raises(StoreError):
        await sql_store.mark_listing_sold("missing", "buyer")


async def test_sql_store_insert_rating__duplicate__raises_unique_violation(
    sql_store: SqlMarketplaceStore,
) -> None:
    subject = make_db_profile()
    rater = make_db_profile()
    listing = make_db_listing(seller=subject)
    _seed(sql_store, listing, rater)

    rating = await sql_store.insert_rating(listing.id, rater.id, subject.id, 5, "Great seller")
    assert rating.stars == 5
    assert rating.created_at is not None
    assert await sql_store.check_existing_rating(listing.id, rater.id)

    with pytest.raises(UniqueViolationError):
        await sql_store.insert_rating(listing.id, rater.id, subject.id, 1)

    assert await sql_store.query_ratings_count(subject.id) == 1


async def test_sql_store_query_ratings__offset_past_filtered_end__returns_empty_with_total(
    sql_store: SqlMarketplaceStore,
) -> None:
    subject = make_db_profile()
    listing = make_db_listing(seller=subject)
    ratings = [
        make_db_rating(listing, make_db_profile(), subject, stars=stars)
        for stars in (5, 5, 4, 5, 1, 2, 3)
    ]
    _seed(sql_store, listing, *ratings)

    page = await sql_store.query_ratings(subject.id, 5, RatingSort.NEWEST, 5, 5)

    assert page.items == []
    assert page.total == 3


async def test_sql_store_respond_to_rating__existing_rating__saves_response(
    sql_store: SqlMarketplaceStore,
) -> None:
    subject = make_db_profile()
    listing = make_db_listing(seller=subject)
    some_rating = make_db_rating(listing, make_db_profile(), subject)
    _seed(sql_store, listing, some_rating)

    rating = await sql_store.respond_to_rating(some_rating.id, "Thanks, 73")

    assert rating.response == "Thanks, 73"
    assert rating.response_at is not None


async def test_sql_store_respond_to_rating__missing_rating__raises_store_error(
    sql_store: SqlMarketplaceStore,
) -> None:
    with pytest.raises(StoreError):
        await sql_store.respond_to_rating("missing", "Thanks")


async def test_sql_store_increment_views__existing_listing__increments_counter(
    sql_store: SqlMarketplaceStore,
) -> None:
    listing = make_db_listing()
    _seed(sql_store, listing)

    await sql_store.increment_views(listing.id)

    with sql_store.session_factory() as session:
        assert session.get(db_models.Listing, listing.id).views == 1


async def test_reputation_feed_controller__sql_store__loads_concurrently(
    sql_store: SqlMarketplaceStore,
) -> None:
    subject = make_db_profile()
    listing = make_db_listing(seller=subject)
    ratings = [
        make_db_rating(
            listing, make_db_profile(), subject, stars=stars, created_at=datetime(2024, 1, day)
        )
        for day, stars in enumerate((5, 4, 5), start=1)
    ]
    _seed(sql_store, listing, *ratings)
    controller = ReputationFeedController(sql_store, subject.id, page_size=2)

    assert await controller.refresh()
    view = controller.view()

    assert view.total_unfiltered == 3
    assert view.total_pages == 2
    assert [rating.id for rating in view.items] == [ratings[2].id, ratings[1].id]


def test_is_unique_violation__postgres_error_code__is_detected() -> None:
    class FakePgError(Exception):
        pgcode = "23505"

    error = IntegrityError("INSERT INTO ratings ...", {}, FakePgError("duplicate key"))

    assert is_unique_violation(error)


def test_is_unique_violation__other_integrity_error__is_not_a_unique_violation() -> None:
    error = IntegrityError("INSERT INTO ratings ...", {}, Exception("NOT NULL constraint failed"))

    assert not is_unique_violation(error)
