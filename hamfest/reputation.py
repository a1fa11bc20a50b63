from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, replace

from hamfest.enums import RatingSort
from hamfest.exceptions import (
    DuplicateRatingError,
    InvalidRatingError,
    RatingResponseError,
    RatingSubmitError,
    StoreError,
    UniqueViolationError,
)
from hamfest.metrics import (
    METRIC_DUPLICATE_RATING_COUNT,
    METRIC_RATING_FEED_FETCH_COUNT,
    METRIC_STALE_RESPONSE_COUNT,
    write_metric,
)
from hamfest.models import MAX_RATING_COMMENT_LENGTH, Rating
from hamfest.pagination import PaginationView, build_pagination, page_offset, total_pages_for
from hamfest.settings import get_settings
from hamfest.store import MarketplaceStore

_logger = logging.getLogger(__name__)

MIN_STARS = 1
MAX_STARS = 5


@dataclass(frozen=True)
class FeedParams:
    """The parameters a reputation feed request was issued with."""

    subject_id: str
    page: int = 1
    star_filter: int | None = None
    sort: RatingSort = RatingSort.NEWEST


@dataclass(frozen=True)
class FeedResult:
    total_unfiltered: int
    ratings: list[Rating]
    total_filtered: int


@dataclass(frozen=True)
class ReputationView:
    items: list[Rating]
    current_page: int
    total_pages: int
    loading: bool
    error: bool
    # whether the subject has any reviews at all, regardless of the star filter
    has_reviews: bool
    total_unfiltered: int
    total_filtered: int
    star_filter: int | None
    sort: RatingSort
    pagination: PaginationView


def _validate_stars(stars: int | None) -> None:
    if stars is None:
        return
    if isinstance(stars, bool) or not isinstance(stars, int):
        raise InvalidRatingError()
    if not MIN_STARS <= stars <= MAX_STARS:
        raise InvalidRatingError()


async def can_rate(store: MarketplaceStore, listing_id: str, rater_id: str) -> bool:
    """
    Whether the rater may still rate the other party of this listing.

    This only decides whether to offer the action. The store's uniqueness constraint remains the
    authoritative guard, so a failed check errs on the side of offering it.
    """
    try:
        return not await store.check_existing_rating(listing_id, rater_id)
    except StoreError:
        _logger.warning(f"Could not check for an existing rating on listing {listing_id}")
        return True


async def submit_rating(
    store: MarketplaceStore,
    listing_id: str,
    rater_id: str,
    subject_id: str,
    stars: int,
    comment: str | None = None,
) -> Rating:
    """
    Rate the other party of a sale.

    Raises ``DuplicateRatingError`` if the rater already rated this listing (even if the pre-check
    passed, e.g. on a double submit), ``InvalidRatingError`` for malformed input and
    ``RatingSubmitError`` for any other store failure.
    """
    _validate_stars(stars)
    if comment is not None and len(comment) > MAX_RATING_COMMENT_LENGTH:
        raise InvalidRatingError(
            f"Comments are limited to {MAX_RATING_COMMENT_LENGTH} characters."
        )

    try:
        rating = await store.insert_rating(listing_id, rater_id, subject_id, stars, comment or None)
    except UniqueViolationError as e:
        _logger.info(f"Rejected duplicate rating by {rater_id} for listing {listing_id}")
        write_metric(METRIC_DUPLICATE_RATING_COUNT, 1)
        raise DuplicateRatingError() from e
    except StoreError as e:
        raise RatingSubmitError() from e

    _logger.debug(f"Saved rating {rating.id} ({stars} stars) for user {subject_id}")
    return rating


async def respond_to_rating(store: MarketplaceStore, rating_id: str, response: str) -> Rating:
    response = response.strip()
    if not response:
        raise InvalidRatingError("Response cannot be empty.")

    try:
        return await store.respond_to_rating(rating_id, response)
    except StoreError as e:
        raise RatingResponseError() from e


class ReputationFeedController:
    """
    The paginated, filterable list of reviews left for one user.

    Every refresh issues two store requests concurrently: the subject's unfiltered rating count
    (which decides whether the reviews section is shown at all) and the requested page of
    filtered, sorted ratings with its filtered count.

    Requests are fenced rather than cancelled. Each one is tagged with the parameters and
    generation it was issued with, and a response is only applied if it belongs to the most
    recently issued request; anything older is dropped silently.
    """

    def __init__(
        self, store: MarketplaceStore, subject_id: str, page_size: int | None = None
    ) -> None:
        self.store = store
        self.page_size = page_size or get_settings().ratings_page_size
        self.params = FeedParams(subject_id=subject_id)
        self.result: FeedResult | None = None
        self.loading = False
        self.error = False
        self._generation = 0

    @property
    def total_pages(self) -> int:
        if self.result is None:
            return 0
        return total_pages_for(self.result.total_filtered, self.page_size)

    def view(self) -> ReputationView:
        result = self.result or FeedResult(total_unfiltered=0, ratings=[], total_filtered=0)
        return ReputationView(
            items=list(result.ratings),
            current_page=self.params.page,
            total_pages=self.total_pages,
            loading=self.loading,
            error=self.error,
            has_reviews=result.total_unfiltered > 0,
            total_unfiltered=result.total_unfiltered,
            total_filtered=result.total_filtered,
            star_filter=self.params.star_filter,
            sort=self.params.sort,
            pagination=build_pagination(self.params.page, self.total_pages),
        )

    async def set_subject(self, subject_id: str) -> bool:
        self.params = FeedParams(subject_id=subject_id)
        return await self.refresh()

    async def set_page(self, page: int) -> bool:
        self.params = replace(self.params, page=max(page, 1))
        return await self.refresh()

    async def set_star_filter(self, stars: int | None) -> bool:
        _validate_stars(stars)
        # new result set, back to the first page
        self.params = replace(self.params, star_filter=stars, page=1)
        return await self.refresh()

    async def set_sort(self, sort: RatingSort | str) -> bool:
        self.params = replace(self.params, sort=RatingSort(sort), page=1)
        return await self.refresh()

    async def refresh(self) -> bool:
        """
        Fetch the feed for the current parameters.

        Returns True if the response was applied, False if it was superseded by a newer request
        or the store failed.
        """
        self._generation += 1
        generation = self._generation
        params = self.params
        self.loading = True
        write_metric(METRIC_RATING_FEED_FETCH_COUNT, 1)

        try:
            total_unfiltered, page = await asyncio.gather(
                self.store.query_ratings_count(params.subject_id),
                self.store.query_ratings(
                    params.subject_id,
                    params.star_filter,
                    params.sort,
                    page_offset(params.page, self.page_size),
                    self.page_size,
                ),
            )
        except StoreError:
            if not self._is_current(params, generation):
                self._discard(params)
                return False
            _logger.warning(f"Failed to load ratings for user {params.subject_id}")
            self.result = None
            self.error = True
            self.loading = False
            return False

        if not self._is_current(params, generation):
            self._discard(params)
            return False

        self.result = FeedResult(
            total_unfiltered=total_unfiltered, ratings=list(page.items), total_filtered=page.total
        )
        self.error = False
        self.loading = False

        last_page = max(self.total_pages, 1)
        if params.page > last_page:
            _logger.debug(f"Page {params.page} is past the last page, moving to {last_page}")
            self.params = replace(params, page=last_page)
            return await self.refresh()

        return True

    async def can_rate(self, listing_id: str, rater_id: str) -> bool:
        return await can_rate(self.store, listing_id, rater_id)

    async def submit_rating(
        self,
        listing_id: str,
        rater_id: str,
        subject_id: str,
        stars: int,
        comment: str | None = None,
    ) -> Rating:
        rating = await submit_rating(
            self.store, listing_id, rater_id, subject_id, stars, comment
        )
        if subject_id == self.params.subject_id:
            await self.refresh()
        return rating

    async def respond_to_rating(self, rating_id: str, response: str) -> Rating:
        rating = await respond_to_rating(self.store, rating_id, response)
        await self.refresh()
        return rating

    def _is_current(self, params: FeedParams, generation: int) -> bool:
        return generation == self._generation and params == self.params

    def _discard(self, params: FeedParams) -> None:
        _logger.debug(f"Discarding stale ratings response for {params}")
        write_metric(METRIC_STALE_RESPONSE_COUNT, 1)
