from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from bbparty.core.errors import NotFoundError
from bbparty.models.favorite import Favorite
from bbparty.models.user import User
from bbparty.models.venue import Venue


def add_favorite(db: Session, *, user_id: int, venue_id: int) -> Favorite:
    if db.get(User, user_id) is None:
        raise NotFoundError(f"User with id {user_id} not found")
    if db.get(Venue, venue_id) is None:
        raise NotFoundError(f"Venue with id {venue_id} not found")

    fav = db.execute(
        select(Favorite).where(Favorite.user_id == user_id, Favorite.venue_id == venue_id)
    ).scalar_one_or_none()
    if fav:
        return fav

    fav = Favorite(user_id=user_id, venue_id=venue_id)
    db.add(fav)
    db.commit()
    db.refresh(fav)
    return fav


def remove_favorite(db: Session, *, user_id: int, venue_id: int) -> bool:
    result = db.execute(
        delete(Favorite).where(Favorite.user_id == user_id, Favorite.venue_id == venue_id)
    )
    db.commit()
    return (result.rowcount or 0) > 0


def list_favorite_venues(db: Session, user_id: int) -> list[Venue]:
    stmt = (
        select(Venue)
        .join(Favorite, Favorite.venue_id == Venue.id)
        .where(Favorite.user_id == user_id)
        .order_by(Favorite.id.asc())
    )
    return list(db.scalars(stmt).all())
