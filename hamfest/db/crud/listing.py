from typing import Sequence

from sqlalchemy import ColumnElement, func, or_, select, update
from sqlalchemy.orm import Session

from hamfest.db.models import Listing
from hamfest.enums import ListingStatus, SortKey

_ORDER_BY = {
    SortKey.NEWEST: Listing.created_at.desc(),
    SortKey.OLDEST: Listing.created_at.asc(),
    SortKey.PRICE_LOW: Listing.price.asc(),
    SortKey.PRICE_HIGH: Listing.price.desc(),
}


def like_pattern(text: str) -> str:
    """Build a substring LIKE pattern, escaping wildcards in the user's text."""
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _search_clause(search: str) -> ColumnElement[bool]:
    pattern = like_pattern(search)
    return or_(
        Listing.title.ilike(pattern, escape="\\"),
        Listing.description.ilike(pattern, escape="\\"),
        Listing.manufacturer.ilike(pattern, escape="\\"),
        Listing.model.ilike(pattern, escape="\\"),
    )


def get_listings(
    session: Session,
    status: ListingStatus,
    search: str | None = None,
    order_by: SortKey = SortKey.NEWEST,
    offset: int = 0,
    limit: int | None = None,
) -> tuple[Sequence[Listing], int]:
    """
    Get one page of listings with the given status, plus the total number of matching listings.

    If ``search`` is set, only listings whose title, description, manufacturer or model contain it
    (case-insensitively) are returned.
    """
    conditions: list[ColumnElement[bool]] = [Listing.status == status]
    if search:
        conditions.append(_search_clause(search))

    count_stmt = select(func.count()).select_from(Listing).where(*conditions)
    total = session.execute(count_stmt).scalar_one()

    stmt = (
        select(Listing)
        .where(*conditions)
        .order_by(_ORDER_BY[order_by], Listing.id)
        .offset(offset)
    )
    if limit is not None:
        stmt = stmt.limit(limit)

    return session.execute(stmt).scalars().all(), total


def mark_listing_sold(session: Session, listing_id: str, buyer_id: str) -> bool:
    stmt = (
        update(Listing)
        .where(Listing.id == listing_id)
        .values(status=ListingStatus.SOLD, sold_to=buyer_id)
    )
    return session.execute(stmt).rowcount > 0  # type: ignore[attr-defined]


def increment_views(session: Session, listing_id: str) -> None:
    stmt = update(Listing).where(Listing.id == listing_id).values(views=Listing.views + 1)
    session.execute(stmt)
