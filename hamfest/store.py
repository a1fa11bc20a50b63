from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Callable, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from hamfest.db.crud.listing import get_listings, increment_views, mark_listing_sold
from hamfest.db.crud.rating import (
    add_rating,
    count_ratings,
    get_ratings,
    has_rating,
    set_rating_response,
)
from hamfest.enums import ListingStatus, RatingSort, SortKey
from hamfest.exceptions import StoreError, UniqueViolationError
from hamfest.models import ListingsPage, Rating, RatingsPage
from hamfest.util.decorators import log_exceptions

_logger = logging.getLogger(__name__)

T = TypeVar("T")

# postgres SQLSTATE for unique_violation
PG_UNIQUE_VIOLATION = "23505"


class MarketplaceStore(ABC):
    """
    The hosted data store, as seen by the discovery and reputation controllers.

    All methods are coroutines. Implementations raise ``StoreError`` for any failure, and
    ``UniqueViolationError`` when a write is rejected by a uniqueness constraint.
    """

    @abstractmethod
    async def query_listings(
        self,
        status: ListingStatus,
        search: str | None,
        order_by: SortKey,
        offset: int,
        limit: int,
    ) -> ListingsPage:
        pass

    @abstractmethod
    async def query_ratings_count(self, subject_id: str) -> int:
        pass

    @abstractmethod
    async def query_ratings(
        self,
        subject_id: str,
        star_filter: int | None,
        order_by: RatingSort,
        offset: int,
        limit: int,
    ) -> RatingsPage:
        pass

    @abstractmethod
    async def insert_rating(
        self,
        listing_id: str,
        rater_id: str,
        subject_id: str,
        stars: int,
        comment: str | None = None,
    ) -> Rating:
        pass

    @abstractmethod
    async def check_existing_rating(self, listing_id: str, rater_id: str) -> bool:
        pass

    @abstractmethod
    async def respond_to_rating(self, rating_id: str, response: str) -> Rating:
        pass

    @abstractmethod
    async def mark_listing_sold(self, listing_id: str, buyer_id: str) -> None:
        pass

    @abstractmethod
    async def increment_views(self, listing_id: str) -> None:
        pass


def is_unique_violation(error: IntegrityError) -> bool:
    orig = error.orig
    if getattr(orig, "pgcode", None) == PG_UNIQUE_VIOLATION:
        return True
    if getattr(orig, "sqlstate", None) == PG_UNIQUE_VIOLATION:
        return True
    # sqlite reports uniqueness failures only through the message
    return "UNIQUE constraint failed" in str(orig)


class SqlMarketplaceStore(MarketplaceStore):
    """
    A store backed by a SQLAlchemy database.

    Blocking session work is run in a worker thread so the event loop is never blocked.
    """

    def __init__(self, session_factory: sessionmaker[Session] | None = None) -> None:
        if session_factory is None:
            from hamfest.db.session import Session as default_session_factory

            session_factory = default_session_factory
        self.session_factory = session_factory

    async def _run(self, operation: Callable[[Session], T], commit: bool = False) -> T:
        def run_in_session() -> T:
            with self.session_factory(expire_on_commit=False) as session:
                result = operation(session)
                if commit:
                    session.commit()
                return result

        try:
            return await asyncio.to_thread(run_in_session)
        except IntegrityError as e:
            if is_unique_violation(e):
                raise UniqueViolationError(str(e.orig)) from e
            raise StoreError(str(e)) from e
        except SQLAlchemyError as e:
            raise StoreError(str(e)) from e

    @log_exceptions(_logger)
    async def query_listings(
        self,
        status: ListingStatus,
        search: str | None,
        order_by: SortKey,
        offset: int,
        limit: int,
    ) -> ListingsPage:
        def operation(session: Session) -> ListingsPage:
            rows, total = get_listings(session, status, search, order_by, offset, limit)
            return ListingsPage(items=[row.to_model() for row in rows], total=total)

        return await self._run(operation)

    @log_exceptions(_logger)
    async def query_ratings_count(self, subject_id: str) -> int:
        return await self._run(lambda session: count_ratings(session, subject_id))

    @log_exceptions(_logger)
    async def query_ratings(
        self,
        subject_id: str,
        star_filter: int | None,
        order_by: RatingSort,
        offset: int,
        limit: int,
    ) -> RatingsPage:
        def operation(session: Session) -> RatingsPage:
            rows, total = get_ratings(session, subject_id, star_filter, order_by, offset, limit)
            return RatingsPage(items=[row.to_model() for row in rows], total=total)

        return await self._run(operation)

    @log_exceptions(_logger)
    async def insert_rating(
        self,
        listing_id: str,
        rater_id: str,
        subject_id: str,
        stars: int,
        comment: str | None = None,
    ) -> Rating:
        def operation(session: Session) -> Rating:
            rating = add_rating(session, listing_id, rater_id, subject_id, stars, comment)
            return rating.to_model()

        return await self._run(operation, commit=True)

    @log_exceptions(_logger)
    async def check_existing_rating(self, listing_id: str, rater_id: str) -> bool:
        return await self._run(lambda session: has_rating(session, listing_id, rater_id))

    @log_exceptions(_logger)
    async def respond_to_rating(self, rating_id: str, response: str) -> Rating:
        def operation(session: Session) -> Rating:
            rating = set_rating_response(session, rating_id, response)
            if rating is None:
                raise StoreError(f"Rating {rating_id} does not exist")
            return rating.to_model()

        return await self._run(operation, commit=True)

    @log_exceptions(_logger)
    async def mark_listing_sold(self, listing_id: str, buyer_id: str) -> None:
        def operation(session: Session) -> None:
            if not mark_listing_sold(session, listing_id, buyer_id):
                raise StoreError(f"Listing {listing_id} does not exist")

        await self._run(operation, commit=True)

    @log_exceptions(_logger)
    async def increment_views(self, listing_id: str) -> None:
        await self._run(lambda session: increment_views(session, listing_id), commit=True)
