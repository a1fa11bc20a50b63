from datetime import datetime, timezone
from typing import Sequence

from sqlalchemy import ColumnElement, func, select
from sqlalchemy.orm import Session

from hamfest.db.models import Rating
from hamfest.enums import RatingSort

_ORDER_BY = {
    RatingSort.NEWEST: (Rating.created_at.desc(),),
    RatingSort.OLDEST: (Rating.created_at.asc(),),
    # ties on the star value are broken by most recent first
    RatingSort.HIGHEST: (Rating.rating.desc(), Rating.created_at.desc()),
    RatingSort.LOWEST: (Rating.rating.asc(), Rating.created_at.desc()),
}


def count_ratings(session: Session, subject_id: str) -> int:
    stmt = select(func.count()).select_from(Rating).where(Rating.rated_user_id == subject_id)
    return session.execute(stmt).scalar_one()


def get_ratings(
    session: Session,
    subject_id: str,
    stars: int | None = None,
    order_by: RatingSort = RatingSort.NEWEST,
    offset: int = 0,
    limit: int | None = None,
) -> tuple[Sequence[Rating], int]:
    conditions: list[ColumnElement[bool]] = [Rating.rated_user_id == subject_id]
    if stars is not None:
        conditions.append(Rating.rating == stars)

    count_stmt = select(func.count()).select_from(Rating).where(*conditions)
    total = session.execute(count_stmt).scalar_one()

    stmt = select(Rating).where(*conditions).order_by(*_ORDER_BY[order_by]).offset(offset)
    if limit is not None:
        stmt = stmt.limit(limit)

    return session.execute(stmt).scalars().all(), total


def add_rating(
    session: Session,
    listing_id: str,
    rater_id: str,
    subject_id: str,
    stars: int,
    comment: str | None = None,
) -> Rating:
    rating = Rating(
        listing_id=listing_id,
        rater_user_id=rater_id,
        rated_user_id=subject_id,
        rating=stars,
        comment=comment or None,
    )
    session.add(rating)
    # flush so uniqueness violations surface here rather than at commit
    session.flush()

    return rating


def has_rating(session: Session, listing_id: str, rater_id: str) -> bool:
    stmt = (
        select(Rating.id)
        .where(Rating.listing_id == listing_id)
        .where(Rating.rater_user_id == rater_id)
        .limit(1)
    )
    return session.execute(stmt).first() is not None


def set_rating_response(session: Session, rating_id: str, response: str) -> Rating | None:
    rating = session.get(Rating, rating_id)
    if rating is None:
        return None

    rating.response = response
    rating.response_at = datetime.now(timezone.utc)
    return rating
