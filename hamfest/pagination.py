import math
from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True)
class PageEllipsis:
    """
    A non-interactive placeholder for a run of skipped pages.

    A strip holds at most two of these (one on each side of the current page). They carry no page
    number and must never be turned into a page fetch.
    """

    position: Literal["start", "end"]

    def __str__(self) -> str:
        return "..."


ELLIPSIS_START = PageEllipsis("start")
ELLIPSIS_END = PageEllipsis("end")

PageStripItem = int | PageEllipsis


@dataclass(frozen=True)
class PaginationView:
    current_page: int
    total_pages: int
    strip: list[PageStripItem]

    @property
    def visible(self) -> bool:
        return self.total_pages > 1

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def previous_page(self) -> int | None:
        return self.current_page - 1 if self.has_previous else None

    @property
    def next_page(self) -> int | None:
        return self.current_page + 1 if self.has_next else None


def total_pages_for(total_count: int, page_size: int) -> int:
    if page_size <= 0:
        raise ValueError(f"Invalid page size: {page_size}")
    return math.ceil(max(total_count, 0) / page_size)


def page_offset(page: int, page_size: int) -> int:
    return (max(page, 1) - 1) * page_size


def build_page_strip(current_page: int, total_pages: int) -> list[PageStripItem]:
    """
    Compute the page numbers and ellipses to show in a pagination control.

    The first and last pages are always shown, along with the current page and its immediate
    neighbours. Pages 2-3 are shown when the current page is near the start, and the last two
    pages before ``total_pages`` are shown when it is near the end; otherwise an ellipsis stands
    in for the skipped run. No strip is returned when there is only one page.
    """
    if total_pages <= 1:
        return []

    pages: list[PageStripItem] = [1]

    if current_page > 3:
        pages.append(ELLIPSIS_START)
    else:
        for page in range(2, min(4, total_pages)):
            pages.append(page)

    window_start = max(2, current_page - 1)
    window_end = min(total_pages - 1, current_page + 1)
    for page in range(window_start, window_end + 1):
        if page not in pages:
            pages.append(page)

    if current_page < total_pages - 2:
        pages.append(ELLIPSIS_END)
    else:
        for page in range(max(total_pages - 2, window_end + 1), total_pages):
            if page not in pages:
                pages.append(page)

    if total_pages not in pages:
        pages.append(total_pages)

    return pages


def build_pagination(current_page: int, total_pages: int) -> PaginationView:
    return PaginationView(
        current_page=current_page,
        total_pages=total_pages,
        strip=build_page_strip(current_page, total_pages),
    )
