from __future__ import annotations

import logging

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bbparty.core.db import is_unique_violation, utcnow
from bbparty.core.errors import ConflictError, NotFoundError
from bbparty.models.review import Review
from bbparty.models.venue import Venue

log = logging.getLogger("bbparty.reviews")


def recompute_venue_rating(db: Session, venue: Venue) -> None:
    """Set venue.rating/review_count from its stored reviews.

    Caller must hold the venue row lock (SELECT ... FOR UPDATE) in the
    current transaction so concurrent reviews are applied one at a time.
    """
    avg_rating, review_count = db.execute(
        select(func.avg(Review.rating), func.count(Review.id)).where(Review.venue_id == venue.id)
    ).one()

    venue.review_count = int(review_count or 0)
    venue.rating = float(avg_rating) if review_count else 0.0
    venue.updated_at = utcnow()


def create_review(
    db: Session,
    *,
    user_id: int,
    venue_id: int,
    rating: int,
    content: str,
    title: str | None = None,
    image_urls: list[str] | None = None,
) -> Review:
    venue = db.execute(
        select(Venue).where(Venue.id == venue_id).with_for_update()
    ).scalar_one_or_none()
    if venue is None:
        raise NotFoundError("Venue not found")

    review = Review(
        venue_id=venue_id,
        user_id=user_id,
        rating=rating,
        title=title,
        content=content,
        image_urls=list(image_urls or []),
    )
    try:
        with db.begin_nested():
            db.add(review)
    except IntegrityError as exc:
        if not is_unique_violation(exc, "uq_reviews_user_venue", "reviews.user_id", "reviews.venue_id"):
            raise
        raise ConflictError("User has already reviewed this venue")

    recompute_venue_rating(db, venue)
    db.commit()
    db.refresh(review)

    log.info(
        "review created id=%s venue_id=%s rating=%s venue_rating=%.2f review_count=%s",
        review.id, venue_id, rating, venue.rating, venue.review_count,
    )
    return review


def list_venue_reviews(db: Session, venue_id: int) -> list[Review]:
    stmt = (
        select(Review)
        .where(Review.venue_id == venue_id)
        .order_by(Review.helpful_count.desc(), Review.created_at.desc(), Review.id.desc())
    )
    return list(db.scalars(stmt).all())
