from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable

from hamfest.enums import (
    DiscoveryState,
    ItemCondition,
    ListingCategory,
    ListingStatus,
    SortKey,
    ViewMode,
)
from hamfest.exceptions import StoreError
from hamfest.filters import FilterState, apply_filters, parse_price_bound
from hamfest.metrics import METRIC_LISTING_PAGE_FETCH_COUNT, write_metric
from hamfest.models import Listing
from hamfest.pagination import PaginationView, build_pagination, page_offset, total_pages_for
from hamfest.settings import get_settings
from hamfest.sorting import sort_listings
from hamfest.storage import ClientStorage, PersistedValue, get_default_storage
from hamfest.store import MarketplaceStore

_logger = logging.getLogger(__name__)

VIEW_MODE_STORAGE_KEY = "listings-view-mode"


@dataclass(frozen=True)
class DiscoveryView:
    """Everything the browse page needs to render one page of listings."""

    listings: list[Listing]
    visible_count: int
    total_count: int
    view_mode: ViewMode
    sort_key: SortKey
    filters: FilterState
    state: DiscoveryState
    pagination: PaginationView
    # the server page itself was empty (or never loaded)
    is_empty: bool
    # the server page had listings but the filters removed all of them
    no_matches: bool
    error: bool


class DiscoveryController:
    """
    Filter, sort and view-mode state for browsing one page of listings.

    The controller is handed a page of active listings (already narrowed server-side by status
    and, optionally, a free-text search) and refines it in memory. Every state change re-derives
    the visible listings immediately from the held page. Only the view mode outlives the
    controller: it is read from client storage on construction and written on every change.
    """

    def __init__(
        self,
        storage: ClientStorage | None = None,
        page_size: int | None = None,
        initial_query: str = "",
    ) -> None:
        self.page_size = page_size or get_settings().listings_page_size
        self.filters = FilterState(query=initial_query)
        self.sort_key = SortKey.NEWEST
        self.current_page = 1
        self.total_count = 0
        self.error = False
        self.visible: list[Listing] = []

        self._listings: list[Listing] | None = None
        self._view_mode = PersistedValue(
            storage if storage is not None else get_default_storage(),
            VIEW_MODE_STORAGE_KEY,
            ViewMode.GRID,
            parse=ViewMode,
        )

    @property
    def state(self) -> DiscoveryState:
        return DiscoveryState.FILTERING if self.filters.is_active else DiscoveryState.IDLE

    @property
    def view_mode(self) -> ViewMode:
        return self._view_mode.value

    @property
    def hydrated(self) -> bool:
        return self._view_mode.hydrated

    @property
    def total_pages(self) -> int:
        return total_pages_for(self.total_count, self.page_size)

    def load_page(
        self,
        listings: Iterable[Listing] | None,
        current_page: int = 1,
        total_count: int | None = None,
    ) -> None:
        """Replace the held server page and re-derive the visible listings."""
        self._listings = list(listings) if listings is not None else None
        self.current_page = current_page
        self.total_count = total_count if total_count is not None else len(self._listings or [])
        self.error = False
        self._refresh()

    async def fetch_page(self, store: MarketplaceStore, page: int = 1) -> None:
        """
        Load a page of active listings from the store, newest first.

        The free-text part of the current filter is evaluated by the store. A store failure leaves
        the controller showing an empty page with the error flag set.
        """
        page = max(page, 1)
        write_metric(METRIC_LISTING_PAGE_FETCH_COUNT, 1)
        try:
            result = await store.query_listings(
                ListingStatus.ACTIVE,
                self.filters.server_predicate,
                SortKey.NEWEST,
                page_offset(page, self.page_size),
                self.page_size,
            )
        except StoreError:
            _logger.warning(f"Failed to fetch listings page {page}, showing empty page")
            self.load_page([], current_page=page, total_count=0)
            self.error = True
            return

        self.load_page(result.items, current_page=page, total_count=result.total)

    def set_query(self, query: str) -> None:
        self._update_filters(query=query)

    def set_category(self, category: ListingCategory | str | None) -> None:
        self._update_filters(category=ListingCategory(category) if category else None)

    def set_conditions(self, conditions: Iterable[ItemCondition | str]) -> None:
        self._update_filters(conditions=frozenset(ItemCondition(c) for c in conditions))

    def toggle_condition(self, condition: ItemCondition | str) -> None:
        condition = ItemCondition(condition)
        self._update_filters(conditions=self.filters.conditions ^ {condition})

    def set_min_price(self, raw: Any) -> None:
        self._update_filters(min_price=parse_price_bound(raw))

    def set_max_price(self, raw: Any) -> None:
        self._update_filters(max_price=parse_price_bound(raw))

    def set_country(self, country: str) -> None:
        self._update_filters(country=country)

    def set_city(self, city: str) -> None:
        self._update_filters(city=city)

    def set_sort(self, sort_key: SortKey | str) -> None:
        self.sort_key = SortKey(sort_key)
        self._refresh()

    def set_view_mode(self, view_mode: ViewMode | str) -> None:
        self._view_mode.set(ViewMode(view_mode))
        self._refresh()

    def clear_filters(self) -> None:
        """Reset every filter to its identity value and the sort order to newest first."""
        self.filters = FilterState()
        self.sort_key = SortKey.NEWEST
        self._refresh()

    def view(self) -> DiscoveryView:
        is_empty = not self._listings
        return DiscoveryView(
            listings=list(self.visible),
            visible_count=len(self.visible),
            total_count=self.total_count,
            view_mode=self.view_mode,
            sort_key=self.sort_key,
            filters=self.filters,
            state=self.state,
            pagination=build_pagination(self.current_page, self.total_pages),
            is_empty=is_empty,
            no_matches=not is_empty and not self.visible,
            error=self.error,
        )

    def _update_filters(self, **changes: Any) -> None:
        self.filters = self.filters.model_copy(update=changes)
        self._refresh()

    def _refresh(self) -> None:
        if not self._listings:
            self.visible = []
            return

        self.visible = sort_listings(apply_filters(self._listings, self.filters), self.sort_key)
        _logger.debug(
            f"Showing {len(self.visible)} of {len(self._listings)} listings"
            f" ({self.state.value}, sort={self.sort_key.value})"
        )
